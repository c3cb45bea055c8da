"""
Tests for the column-preserving CIF line editor.
"""

import logging

import numpy as np
import pytest

from cifmodder import (
    CifEditor,
    FieldKeyword,
    ParseError,
    RangeError,
    apply_instructions_to_cif_file,
    apply_instructions_to_lines,
    find_keyword_value,
    parse_instructions,
)
from cifmodder.src.cif_edit import LayoutError, edit_lines
from cifmodder.src.value_utils import precision_of_value

EXAMPLE_INSTRUCTIONS = "a + 1.0\nb * 2.0\nc - 1.0\nalpha + 1.0\n45.0 -- beta -- 90.0\ngamma / 2.0"


def _line_for(lines, keyword):
    return next(line for line in lines if line.split() and line.split()[0] == keyword)


def test_example_instructions_on_batio3(batio3_lines, rng):
    instructions = parse_instructions(EXAMPLE_INSTRUCTIONS)

    new_lines, modified = apply_instructions_to_lines(batio3_lines, instructions, rng=rng)

    assert modified == 6
    assert len(new_lines) == len(batio3_lines)
    assert _line_for(new_lines, "_cell_length_a") == "_cell_length_a                     5.0094"
    assert _line_for(new_lines, "_cell_length_b") == "_cell_length_b                     8.0188"
    assert _line_for(new_lines, "_cell_length_c") == "_cell_length_c                     3.0094"
    assert _line_for(new_lines, "_cell_angle_alpha") == "_cell_angle_alpha                  91.00"
    assert _line_for(new_lines, "_cell_angle_gamma") == "_cell_angle_gamma                  45.00"

    beta_line = _line_for(new_lines, "_cell_angle_beta")
    assert beta_line.startswith("_cell_angle_beta                   ")
    beta = beta_line.split()[1]
    assert precision_of_value(beta) == 2
    assert 45.0 <= float(beta) <= 90.0


def test_untouched_lines_are_identical(batio3_lines, rng):
    instructions = parse_instructions(EXAMPLE_INSTRUCTIONS)
    new_lines, _ = apply_instructions_to_lines(batio3_lines, instructions, rng=rng)

    for old, new in zip(batio3_lines, new_lines):
        words = old.split()
        if words and words[0] in ("_cell_length_a", "_cell_length_b", "_cell_length_c",
                                  "_cell_angle_alpha", "_cell_angle_beta", "_cell_angle_gamma"):
            continue
        assert new == old

    assert _line_for(new_lines, "_cell_volume") == "_cell_volume                       64.45(1)"


def test_value_column_is_preserved(batio3_lines, rng):
    instructions = parse_instructions(EXAMPLE_INSTRUCTIONS)
    report = edit_lines(batio3_lines, instructions, rng=rng)

    for record in report.records:
        old_column = record.old_line.index(record.old_value)
        new_column = record.new_line.index(record.new_value)
        assert old_column == new_column == 35


def test_tabs_and_indentation_are_kept():
    instructions = parse_instructions("a + 1")

    new_lines, modified = apply_instructions_to_lines(["_cell_length_a\t\t4.0(1)"], instructions)
    assert new_lines == ["_cell_length_a\t\t5.0"]
    assert modified == 1

    new_lines, _ = apply_instructions_to_lines(["  _cell_length_a   4.0"], instructions)
    assert new_lines == ["  _cell_length_a   5.0"]


def test_unknown_and_incomplete_lines_pass_through():
    instructions = parse_instructions("a + 1; volume * 2")
    lines = [
        "data_test",
        "_cell_length_a",
        "_cell_formula_units_Z 4",
        "",
        "loop_",
        "_cell_volume 100.0 # comment",
    ]

    new_lines, modified = apply_instructions_to_lines(lines, instructions)

    assert new_lines[:5] == lines[:5]
    assert new_lines[5] == "_cell_volume 200.0"
    assert modified == 1


def test_keyword_without_instructions_is_unchanged():
    instructions = parse_instructions("a + 1")
    lines = ["_cell_length_b    3.5(3)"]
    assert apply_instructions_to_lines(lines, instructions) == (lines, 0)


def test_alias_as_line_key_is_not_a_field():
    # only canonical names head a CIF line
    instructions = parse_instructions("a + 1")
    assert apply_instructions_to_lines(["a 1.0"], instructions) == (["a 1.0"], 0)


def test_non_numeric_value_propagates_parse_error():
    instructions = parse_instructions("a + 1")
    with pytest.raises(ParseError):
        apply_instructions_to_lines(["_cell_length_a ?"], instructions)


def test_degenerate_range_propagates_range_error(batio3_lines):
    instructions = parse_instructions("5 -- a -- 5")
    with pytest.raises(RangeError):
        apply_instructions_to_lines(batio3_lines, instructions)


def test_layout_failure_keeps_line(monkeypatch, caplog):
    instructions = parse_instructions("a + 1")
    editor = CifEditor()

    def fail(line, instruction_set):
        raise LayoutError(line)

    monkeypatch.setattr(editor, "rewrite_line", fail)
    with caplog.at_level(logging.ERROR):
        report = editor.edit_lines(["_cell_length_a 1.0", "data_x"], instructions)

    assert report.lines == ["_cell_length_a 1.0", "data_x"]
    assert report.skipped == [0, 1]
    assert report.modified_count == 0
    assert "Failed to find whitespace" in caplog.text


def test_editing_report_records(batio3_lines, rng):
    instructions = parse_instructions("alpha + 1.0; c - 1.0")
    report = CifEditor(rng=rng).edit_lines(batio3_lines, instructions)

    assert report.modified_count == 2
    assert [record.keyword for record in report.records] == [FieldKeyword.LENGTH_C, FieldKeyword.ANGLE_ALPHA]
    record = report.records[0]
    assert record.old_value == "4.0094(2)"
    assert record.new_value == "3.0094"
    assert batio3_lines[record.line_number] == record.old_line
    assert report.lines[record.line_number] == record.new_line


def test_same_seed_same_output(batio3_lines):
    instructions = parse_instructions("0 -- a -- 10; 60 -- gamma -- 120")

    first, _ = CifEditor(rng=np.random.default_rng(7)).apply_instructions_to_lines(batio3_lines, instructions)
    second, _ = CifEditor(rng=np.random.default_rng(7)).apply_instructions_to_lines(batio3_lines, instructions)
    assert first == second


def test_shortest_output_without_precision(batio3_lines):
    instructions = parse_instructions("gamma / 2")
    new_lines, _ = apply_instructions_to_lines(batio3_lines, instructions, keep_precision=False)
    assert _line_for(new_lines, "_cell_angle_gamma") == "_cell_angle_gamma                  45"


def test_find_keyword_value(batio3_lines):
    assert find_keyword_value(batio3_lines, "_cell_length_a") == "4.0094(2)"
    assert find_keyword_value(batio3_lines, "beta") == "90.00"
    assert find_keyword_value(batio3_lines, FieldKeyword.VOLUME) == "64.45(1)"
    assert find_keyword_value(batio3_lines, "_cell_formula_units_Z") == "1"
    assert find_keyword_value(batio3_lines, "_exptl_crystal_colour") is None


def test_apply_instructions_to_cif_file(batio3_cif, rng):
    instructions = parse_instructions(EXAMPLE_INSTRUCTIONS)
    new_lines = apply_instructions_to_cif_file(batio3_cif, instructions, CifEditor(rng=rng))

    assert find_keyword_value(new_lines, "a") == "5.0094"
    assert find_keyword_value(new_lines, "gamma") == "45.00"
    # nothing is written back
    assert find_keyword_value(batio3_cif.read_text(encoding="utf-8").splitlines(), "a") == "4.0094(2)"
