"""
Level set files for Kadastr.

A level file is a list of records separated by blank lines. Each record is
8 lines of region ids followed by one line with the solution column of every
row. Both kinds of line are written either as a run of digits ("11122233")
or as space separated integers ("1 1 1 2 2 2 3 3"). Lines starting with '#'
are comments.
"""

from dataclasses import dataclass, field
from typing import List

from kadastr_model import GRID_SIZE, LevelDefinition


class MalformedMapData(ValueError):
    pass


@dataclass
class MapParseResult:
    levels: List[LevelDefinition] = field(default_factory=list)
    skipped: int = 0
    messages: List[str] = field(default_factory=list)


def split_records(text: str) -> List[List[str]]:
    records: List[List[str]] = []
    current: List[str] = []
    for ln in text.splitlines():
        stripped = ln.strip()
        if stripped.startswith("#"):
            continue
        if stripped == "":
            if current:
                records.append(current)
                current = []
            continue
        current.append(stripped)
    if current:
        records.append(current)

    # Records written back to back form one block; cut it at record size
    size = GRID_SIZE + 1
    out: List[List[str]] = []
    for block in records:
        if len(block) > size and len(block) % size == 0:
            out.extend(block[i:i + size] for i in range(0, len(block), size))
        else:
            out.append(block)
    return out


def parse_number_line(ln: str, what: str) -> List[int]:
    # tokenized if spaces exist, else one digit per character
    if " " in ln or "\t" in ln:
        toks = ln.split()
    else:
        toks = list(ln)
    values: List[int] = []
    for t in toks:
        if not (t.isascii() and t.isdigit()):
            raise MalformedMapData(f"Bad token in {what}: {t!r}")
        v = int(t)
        if not 0 <= v < GRID_SIZE:
            raise MalformedMapData(f"Value {v} out of range in {what}")
        values.append(v)
    if len(values) != GRID_SIZE:
        raise MalformedMapData(f"{what} has {len(values)} entries, expected {GRID_SIZE}")
    return values


def parse_level_record(lines: List[str]) -> LevelDefinition:
    """Parse one record (grid lines + solution line). Raises MalformedMapData."""
    if len(lines) != GRID_SIZE + 1:
        raise MalformedMapData(
            f"Record has {len(lines)} lines, expected {GRID_SIZE} grid rows and 1 solution row"
        )

    grid = [tuple(parse_number_line(ln, f"grid row {r}")) for r, ln in enumerate(lines[:GRID_SIZE])]
    region_ids = {v for row in grid for v in row}
    if len(region_ids) != GRID_SIZE:
        raise MalformedMapData(f"Grid uses {len(region_ids)} regions, expected {GRID_SIZE}")

    solution = tuple(parse_number_line(lines[GRID_SIZE], "solution row"))
    return LevelDefinition(regions=tuple(grid), solution=solution)


def parse_map_text(text: str) -> MapParseResult:
    """Parse every record of a level file, skipping malformed ones.

    Level order follows file order.
    """
    result = MapParseResult()
    for idx, lines in enumerate(split_records(text), 1):
        try:
            result.levels.append(parse_level_record(lines))
        except MalformedMapData as e:
            result.skipped += 1
            result.messages.append(f"Record {idx} skipped: {e}")
    return result


def load_map_file(path: str) -> MapParseResult:
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    return parse_map_text(content)


def format_level_record(level: LevelDefinition) -> str:
    lines = ["".join(str(v) for v in row) for row in level.regions]
    lines.append(" ".join(str(c) for c in level.solution))
    return "\n".join(lines)


def format_map_text(levels: List[LevelDefinition]) -> str:
    return "\n\n".join(format_level_record(lv) for lv in levels) + "\n"


def check_solution(level: LevelDefinition) -> List[str]:
    """List the rule violations in a level's canonical solution.

    Only used when authoring level files; the game never rejects or repairs
    a level based on this.
    """
    problems: List[str] = []
    seen_cols = {}
    seen_regions = {}
    for r, c in level.solution_cells():
        if c in seen_cols:
            problems.append(f"Rows {seen_cols[c]} and {r} share column {c}")
        else:
            seen_cols[c] = r
        region = level.region_at(r, c)
        if region in seen_regions:
            problems.append(f"Rows {seen_regions[region]} and {r} share region {region}")
        else:
            seen_regions[region] = r
    for r in range(GRID_SIZE - 1):
        if abs(level.solution[r] - level.solution[r + 1]) <= 1:
            problems.append(f"Houses in rows {r} and {r + 1} touch")
    return problems
