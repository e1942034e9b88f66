from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Optional, Set

# ----------------------------
# Domain model
# ----------------------------

GRID_SIZE = 8
HOUSES_TO_WIN = 8

# Placement error kinds
CELL_OCCUPIED = "CellOccupied"
CELL_BLOCKED = "CellBlocked"
CELL_EMPTY = "CellEmpty"
OUT_OF_BOUNDS = "OutOfBounds"

Pos = Tuple[int, int]

KING_MOVES = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    region: int

    @property
    def pos(self) -> Pos:
        return (self.row, self.col)


@dataclass(frozen=True)
class LevelDefinition:
    regions: Tuple[Tuple[int, ...], ...]  # 8 rows of region ids
    solution: Tuple[int, ...]  # solution[row] = column of the house in that row

    def region_at(self, r: int, c: int) -> int:
        return self.regions[r][c]

    def solution_cells(self) -> List[Pos]:
        return [(r, c) for r, c in enumerate(self.solution)]


@dataclass
class House:
    cell: Cell
    is_hint: bool = False


@dataclass
class PlaceResult:
    ok: bool
    error: Optional[str] = None
    message: str = ""
    newly_blocked: Set[Pos] = field(default_factory=set)
    total_placed: int = 0


@dataclass
class RemoveResult:
    ok: bool
    error: Optional[str] = None
    message: str = ""
    total_placed: int = 0


class PuzzleBoard:
    """House placement state for one playthrough of a level.

    The blocked set is rebuilt from the placed houses after every change;
    a cell holding a house is never reported as blocked.
    """

    def __init__(self, level: LevelDefinition) -> None:
        self.level = level
        self.rows = GRID_SIZE
        self.cols = GRID_SIZE
        self.cells: List[List[Cell]] = [
            [Cell(r, c, level.region_at(r, c)) for c in range(self.cols)]
            for r in range(self.rows)
        ]
        # Placement order matters for find_blocking_house
        self._houses: Dict[Pos, House] = {}
        self.blocked: Set[Pos] = set()

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.cols

    def region_at(self, r: int, c: int) -> int:
        return self.cells[r][c].region

    def neighbors8(self, r: int, c: int) -> List[Pos]:
        out = []
        for dr, dc in KING_MOVES:
            rr, cc = r + dr, c + dc
            if self.in_bounds(rr, cc):
                out.append((rr, cc))
        return out

    def footprint(self, r: int, c: int) -> Set[Pos]:
        """Cells a house at (r, c) forbids: its row, column, region and 8 neighbours."""
        region = self.region_at(r, c)
        cells = set(self.neighbors8(r, c))
        for i in range(GRID_SIZE):
            cells.add((r, i))
            cells.add((i, c))
        for rr in range(self.rows):
            for cc in range(self.cols):
                if self.cells[rr][cc].region == region:
                    cells.add((rr, cc))
        return cells

    def covers(self, house: Cell, r: int, c: int) -> bool:
        if house.row == r or house.col == c:
            return True
        if max(abs(house.row - r), abs(house.col - c)) == 1:
            return True
        return house.region == self.region_at(r, c)

    # ----------------------------
    # Queries
    # ----------------------------

    def has_house(self, r: int, c: int) -> bool:
        return (r, c) in self._houses

    def is_hint_house(self, r: int, c: int) -> bool:
        house = self._houses.get((r, c))
        return house is not None and house.is_hint

    def is_blocked(self, r: int, c: int) -> bool:
        return (r, c) in self.blocked

    def can_place(self, r: int, c: int) -> bool:
        if not self.in_bounds(r, c):
            return False
        return not self.has_house(r, c) and not self.is_blocked(r, c)

    def houses(self) -> List[House]:
        return list(self._houses.values())

    def placed_count(self) -> int:
        return len(self._houses)

    def is_complete(self) -> bool:
        return self.placed_count() == HOUSES_TO_WIN

    def find_blocking_house(self, r: int, c: int) -> Optional[Cell]:
        """Return the first placed house whose footprint covers (r, c)."""
        if not self.in_bounds(r, c):
            return None
        for pos, house in self._houses.items():
            if pos == (r, c):
                continue
            if self.covers(house.cell, r, c):
                return house.cell
        return None

    def blocked_by(self, house: Cell) -> Set[Pos]:
        """Currently blocked cells inside one house's footprint."""
        return self.footprint(house.row, house.col) & self.blocked

    # ----------------------------
    # Commands
    # ----------------------------

    def place_house(self, r: int, c: int, is_hint: bool = False) -> PlaceResult:
        if not self.in_bounds(r, c):
            return PlaceResult(False, OUT_OF_BOUNDS, f"({r},{c}) is outside the grid", total_placed=self.placed_count())
        if self.has_house(r, c):
            return PlaceResult(False, CELL_OCCUPIED, f"({r},{c}) already has a house", total_placed=self.placed_count())
        if self.is_blocked(r, c):
            return PlaceResult(False, CELL_BLOCKED, f"({r},{c}) is blocked", total_placed=self.placed_count())

        before = set(self.blocked)
        self._houses[(r, c)] = House(self.cells[r][c], is_hint)
        self.recalculate_blocked()
        return PlaceResult(
            True,
            message=f"Placed {'hint ' if is_hint else ''}house at ({r},{c})",
            newly_blocked=self.blocked - before,
            total_placed=self.placed_count(),
        )

    def remove_house(self, r: int, c: int) -> RemoveResult:
        if not self.in_bounds(r, c):
            return RemoveResult(False, OUT_OF_BOUNDS, f"({r},{c}) is outside the grid", self.placed_count())
        if not self.has_house(r, c):
            return RemoveResult(False, CELL_EMPTY, f"({r},{c}) has no house", self.placed_count())
        del self._houses[(r, c)]
        self.recalculate_blocked()
        return RemoveResult(True, message=f"Removed house at ({r},{c})", total_placed=self.placed_count())

    def clear_houses(self) -> int:
        removed = len(self._houses)
        self._houses.clear()
        self.blocked.clear()
        return removed

    def recalculate_blocked(self) -> None:
        blocked: Set[Pos] = set()
        for house in self._houses.values():
            blocked |= self.footprint(house.cell.row, house.cell.col)
        self.blocked = {pos for pos in blocked if pos not in self._houses}
