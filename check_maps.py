import argparse
import sys
from typing import Dict, Any, List

from kadastr_model import LevelDefinition, PuzzleBoard
from kadastr_maps import load_map_file, check_solution
from kadastr_hints import HintSolver, HINT_PLACED, HINT_ALL_USED


def replay_hints(level: LevelDefinition) -> Dict[str, Any]:
    """Solve an empty board with hints only and report how it went."""
    board = PuzzleBoard(level)
    solver = HintSolver(board, level.solution)
    kinds: List[str] = []
    for _ in range(len(level.solution)):
        outcome = solver.next_hint()
        if outcome.kind == HINT_ALL_USED:
            break
        kinds.append(outcome.kind)

    return {
        "placed": board.placed_count(),
        "is_complete": board.is_complete(),
        "clean": all(k == HINT_PLACED for k in kinds),
    }


def check_level(index: int, level: LevelDefinition) -> List[str]:
    problems = [f"Level {index + 1}: {p}" for p in check_solution(level)]
    replay = replay_hints(level)
    if not replay["is_complete"]:
        problems.append(f"Level {index + 1}: hints placed only {replay['placed']} houses")
    elif not replay["clean"]:
        problems.append(f"Level {index + 1}: hint replay had to evict houses")
    return problems


def run_checks(map_path: str, quiet: bool = False) -> bool:
    try:
        parsed = load_map_file(map_path)
    except OSError as e:
        print(f"Error: cannot read '{map_path}': {e}")
        return False

    problems: List[str] = list(parsed.messages)
    for i, level in enumerate(parsed.levels):
        level_problems = check_level(i, level)
        problems.extend(level_problems)
        if not quiet and not level_problems:
            print(f"Level {i + 1}: OK")

    print(f"{len(parsed.levels)} levels loaded, {parsed.skipped} records skipped.")
    if problems:
        print("CHECK FAILED:")
        for p in problems:
            print(f"    {p}")
        return False

    print("CHECK PASSED.")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Kadastr level file checker")
    parser.add_argument("map_file", help="Path to the level set file")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary and problems")

    args = parser.parse_args()

    if not run_checks(args.map_file, args.quiet):
        sys.exit(1)
