import os
import sys

import pytest

# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from kadastr_maps import (
    MalformedMapData, parse_map_text, parse_level_record, load_map_file,
    format_level_record, format_map_text, check_solution,
)
from tests.test_utils import (
    LEVEL_ONE_TEXT, LEVEL_ONE_ROWS, LEVEL_ONE_SOLUTION, level_one, column_regions_level, make_level,
)

COLUMNS_TEXT = "\n".join(["01234567"] * 8) + "\n0 2 4 6 1 3 5 7\n"


def test_records_parse_in_file_order():
    text = LEVEL_ONE_TEXT + "\n   \n\n" + COLUMNS_TEXT + "\n\n"
    result = parse_map_text(text)

    assert result.skipped == 0
    assert result.messages == []
    assert len(result.levels) == 2
    assert result.levels[0] == level_one()
    assert result.levels[1].solution == (0, 2, 4, 6, 1, 3, 5, 7)
    for level in result.levels:
        assert len(level.regions) == 8
        assert all(len(row) == 8 for row in level.regions)
        assert len(level.solution) == 8


def test_records_without_blank_separator():
    result = parse_map_text(LEVEL_ONE_TEXT + COLUMNS_TEXT)

    assert result.skipped == 0
    assert len(result.levels) == 2
    assert result.levels[0] == level_one()
    assert result.levels[1].solution == (0, 2, 4, 6, 1, 3, 5, 7)


def test_short_record_glued_to_next_is_one_skip():
    short = "\n".join(LEVEL_ONE_ROWS[1:]) + "\n" + " ".join(str(c) for c in LEVEL_ONE_SOLUTION) + "\n"
    text = short + COLUMNS_TEXT + "\n" + LEVEL_ONE_TEXT
    result = parse_map_text(text)

    assert result.skipped == 1
    assert result.levels == [level_one()]
    assert result.messages[0].startswith("Record 1 skipped")


def test_spaced_notation_matches_digit_runs():
    spaced = "\n".join(" ".join(row) for row in LEVEL_ONE_ROWS) + "\n" + "".join(str(c) for c in LEVEL_ONE_SOLUTION)
    result = parse_map_text(spaced)
    assert result.levels == [level_one()]


def test_comments_are_ignored():
    text = "# level set\n\n" + LEVEL_ONE_TEXT.replace("\n", "\n# note\n", 1)
    result = parse_map_text(text)
    assert result.skipped == 0
    assert result.levels == [level_one()]


def test_short_grid_record_is_skipped():
    short = "\n".join(LEVEL_ONE_ROWS[:7]) + "\n" + " ".join(str(c) for c in LEVEL_ONE_SOLUTION) + "\n"
    text = LEVEL_ONE_TEXT + "\n" + short + "\n" + COLUMNS_TEXT
    result = parse_map_text(text)

    assert result.skipped == 1
    assert len(result.levels) == 2
    assert result.levels[0] == level_one()
    assert result.levels[1].regions[0] == (0, 1, 2, 3, 4, 5, 6, 7)
    assert result.messages[0].startswith("Record 2 skipped")


@pytest.mark.parametrize("bad_line_index, bad_line", [
    (0, "11122238"),      # region id out of range
    (0, "111222333"),     # nine entries
    (3, "1554444"),       # seven entries
    (5, "77a56666"),      # not a number
    (0, "١١١٢٢٢٣٣"),      # non-ASCII digits
    (8, "0 4 7 5 2 6 1 -3"),  # negative column
    (8, "0 4 7 5 2 6 1"), # short solution
    (8, "0 4 7 5 2 6 1 9"),  # column out of range
])
def test_bad_record_is_skipped(bad_line_index, bad_line):
    lines = LEVEL_ONE_TEXT.strip().splitlines()
    lines[bad_line_index] = bad_line
    text = "\n".join(lines) + "\n\n" + COLUMNS_TEXT

    result = parse_map_text(text)

    assert result.skipped == 1
    assert len(result.levels) == 1
    assert len(result.messages) == 1


def test_too_few_regions_is_malformed():
    lines = ["00000000"] * 4 + ["01234560"] * 4
    with pytest.raises(MalformedMapData):
        parse_level_record(lines + ["0 2 4 6 1 3 5 7"])


def test_parse_level_record_rejects_missing_solution():
    with pytest.raises(MalformedMapData):
        parse_level_record(LEVEL_ONE_ROWS)


def test_empty_text_has_no_levels():
    result = parse_map_text("\n\n  \n")
    assert result.levels == []
    assert result.skipped == 0


def test_formatted_level_parses_back():
    level = level_one()
    text = format_level_record(level)
    assert text.splitlines()[0] == LEVEL_ONE_ROWS[0]
    assert parse_map_text(text).levels == [level]


def test_format_map_text_keeps_level_count():
    levels = [level_one(), column_regions_level([0, 2, 4, 6, 1, 3, 5, 7])]
    assert parse_map_text(format_map_text(levels)).levels == levels


def test_load_map_file(tmp_path):
    path = tmp_path / "levels.txt"
    path.write_text(LEVEL_ONE_TEXT + "\n" + COLUMNS_TEXT, encoding="utf-8")
    result = load_map_file(str(path))
    assert len(result.levels) == 2


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        load_map_file(str(tmp_path / "missing.txt"))


def test_check_solution_accepts_valid_level():
    assert check_solution(level_one()) == []


def test_check_solution_reports_touching_rows():
    level = column_regions_level([3, 0, 6, 2, 7, 1, 4, 5])
    problems = check_solution(level)
    assert problems == ["Houses in rows 6 and 7 touch"]


def test_check_solution_reports_shared_column_and_region():
    level = make_level(LEVEL_ONE_ROWS, [0, 4, 7, 5, 2, 6, 1, 1])
    problems = check_solution(level)
    assert "Rows 6 and 7 share column 1" in problems
    assert "Rows 6 and 7 share region 7" in problems
    assert "Houses in rows 6 and 7 touch" in problems
