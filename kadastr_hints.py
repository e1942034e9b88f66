from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from kadastr_model import Cell, PuzzleBoard, HOUSES_TO_WIN

HINT_PLACED = "Placed"
HINT_REPLACED = "ReplacedAndPlaced"
HINT_ALL_USED = "AllHintsUsed"


@dataclass
class HintOutcome:
    kind: str
    row: Optional[int] = None
    col: Optional[int] = None
    removed: List[Cell] = field(default_factory=list)
    hints_used: int = 0
    message: str = ""


class HintSolver:
    """Places the canonical solution house of the next unhinted row.

    Rows are hinted top to bottom. A player house covering the canonical
    cell is evicted first; a row whose canonical cell already holds a house
    is skipped.
    """

    def __init__(self, board: PuzzleBoard, solution: Sequence[int], hints_used: int = 0) -> None:
        self.board = board
        self.solution = list(solution)
        self.hints_used = hints_used

    def next_hint(self) -> HintOutcome:
        # One pass per row at most
        for _ in range(HOUSES_TO_WIN):
            if self.hints_used >= HOUSES_TO_WIN:
                break

            row = self.hints_used
            col = self.solution[row]

            if self.board.has_house(row, col):
                self.hints_used += 1
                continue

            removed = self._evict_blockers(row, col)
            self.board.place_house(row, col, is_hint=True)
            self.hints_used += 1

            if removed:
                where = ", ".join(f"({c.row},{c.col})" for c in removed)
                return HintOutcome(
                    HINT_REPLACED, row, col, removed, self.hints_used,
                    f"Removed house at {where} and placed hint at ({row},{col})",
                )
            return HintOutcome(HINT_PLACED, row, col, [], self.hints_used, f"Placed hint at ({row},{col})")

        return HintOutcome(HINT_ALL_USED, hints_used=self.hints_used, message="All hints used")

    def _evict_blockers(self, row: int, col: int) -> List[Cell]:
        removed: List[Cell] = []
        while self.board.is_blocked(row, col):
            blocker = self.board.find_blocking_house(row, col)
            if blocker is None:
                break
            self.board.remove_house(blocker.row, blocker.col)
            removed.append(blocker)
        return removed


def next_hint(board: PuzzleBoard, solution: Sequence[int], hints_used: int) -> Tuple[HintOutcome, int]:
    solver = HintSolver(board, solution, hints_used)
    outcome = solver.next_hint()
    return outcome, solver.hints_used
