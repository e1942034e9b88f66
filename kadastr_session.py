from dataclasses import dataclass, field
from typing import List, Optional, Set

from kadastr_model import Cell, LevelDefinition, PuzzleBoard, Pos, HOUSES_TO_WIN
from kadastr_hints import HintOutcome, HintSolver
from kadastr_progress import ProgressStore

LEVEL_SELECT_LIMIT = 100

# Click actions
ACTION_PLACED = "placed"
ACTION_REMOVED = "removed"
ACTION_BLOCKED = "blocked"
ACTION_IGNORED = "ignored"


@dataclass
class ClickResult:
    action: str
    row: int
    col: int
    blocker: Optional[Cell] = None
    highlight: Set[Pos] = field(default_factory=set)
    newly_blocked: Set[Pos] = field(default_factory=set)
    completed: bool = False
    message: str = ""


class GameSession:
    """One player's run through a level set.

    Owns the board of the level being played and its hint counter; level
    indexes are persisted through the given ProgressStore.
    """

    def __init__(self, levels: List[LevelDefinition], progress: ProgressStore) -> None:
        if not levels:
            raise ValueError("Level set is empty.")
        self.levels = levels
        self.progress = progress
        self.level_index = 0
        self.board = PuzzleBoard(levels[0])
        self.hints = HintSolver(self.board, levels[0].solution)

    @property
    def level(self) -> LevelDefinition:
        return self.levels[self.level_index]

    @property
    def hints_used(self) -> int:
        return self.hints.hints_used

    def clamp_index(self, index: int) -> int:
        return max(0, min(len(self.levels) - 1, index))

    def continue_level_index(self) -> int:
        saved = self.progress.load_level()
        return self.clamp_index(saved if saved is not None else 0)

    def load_level(self, index: int) -> None:
        self.level_index = self.clamp_index(index)
        self.board = PuzzleBoard(self.level)
        self.hints = HintSolver(self.board, self.level.solution)
        self.progress.save_level(self.level_index)

    def new_game(self) -> None:
        self.progress.clear_progress()
        self.load_level(0)

    def continue_game(self) -> None:
        self.load_level(self.continue_level_index())

    # ----------------------------
    # Gestures
    # ----------------------------

    def click_cell(self, r: int, c: int) -> ClickResult:
        board = self.board
        if not board.in_bounds(r, c):
            return ClickResult(ACTION_IGNORED, r, c, message="Outside the grid.")

        if board.has_house(r, c):
            res = board.remove_house(r, c)
            return ClickResult(ACTION_REMOVED, r, c, message=res.message)

        if board.is_blocked(r, c):
            blocker = board.find_blocking_house(r, c)
            highlight = board.blocked_by(blocker) if blocker is not None else set()
            msg = f"Blocked by house at ({blocker.row},{blocker.col})" if blocker else "Blocked"
            return ClickResult(ACTION_BLOCKED, r, c, blocker=blocker, highlight=highlight, message=msg)

        res = board.place_house(r, c)
        return ClickResult(
            ACTION_PLACED, r, c,
            newly_blocked=res.newly_blocked,
            completed=board.is_complete(),
            message=res.message,
        )

    def use_hint(self) -> HintOutcome:
        return self.hints.next_hint()

    def clear_field(self) -> int:
        return self.board.clear_houses()

    def is_level_complete(self) -> bool:
        return self.board.is_complete()

    def has_next_level(self) -> bool:
        return self.level_index < len(self.levels) - 1

    def next_level(self) -> bool:
        if not self.has_next_level():
            return False
        self.load_level(self.level_index + 1)
        return True

    # ----------------------------
    # Level select / labels
    # ----------------------------

    def unlocked_level_count(self) -> int:
        max_level = self.progress.get_max_level()
        count = (max_level if max_level is not None else 0) + 1
        return max(1, min(count, len(self.levels), LEVEL_SELECT_LIMIT))

    def is_level_unlocked(self, index: int) -> bool:
        return 0 <= index < self.unlocked_level_count()

    def level_label(self) -> str:
        return f"{self.level_index + 1}/{len(self.levels)}"

    def house_label(self) -> str:
        return f"{self.board.placed_count()}/{HOUSES_TO_WIN}"
