#!/usr/bin/env python3

"""
Smoke test for the instruction grammar.

- Verifies that the grammar file can be loaded
- Initializes Lark via the DSLParser wrapper
- Checks how whitespace separated tokens are classified
"""

from pathlib import Path

import pytest

from cifmodder.core.parser import DSLParser
from cifmodder.src.cifmodder_parser import GRAMMAR_FILE, InstructionParser

THIS_DIR = Path(__file__).resolve().parent


def _token_types(text):
    parser = DSLParser(str(GRAMMAR_FILE), start_symbol="start")
    tree = parser.parse(text)
    return [(token.type, str(token)) for token in tree.children]


def test_grammar_file_exists():
    assert GRAMMAR_FILE == THIS_DIR / "instructions.lark"
    assert GRAMMAR_FILE.exists()


def test_with_dslparser():
    assert _token_types("45.0 -- beta -- 90.0") == [
        ("NUMBER", "45.0"),
        ("OPERATOR", "--"),
        ("WORD", "beta"),
        ("OPERATOR", "--"),
        ("NUMBER", "90.0"),
    ]


@pytest.mark.parametrize("text, expected", [
    ("-5", "NUMBER"),
    ("+1.5e3", "NUMBER"),
    ("5.", "NUMBER"),
    ("inf", "NUMBER"),
    ("NaN", "NUMBER"),
    ("-", "OPERATOR"),
    ("^", "OPERATOR"),
    ("---", "WORD"),
    ("a+1", "WORD"),
    ("1.0x", "WORD"),
    ("_cell_length_a", "WORD"),
])
def test_token_classification(text, expected):
    assert _token_types(text) == [(expected, text)]


def test_any_whitespace_separates_tokens():
    assert [t for t, _ in _token_types("\ta +  1 ")] == ["WORD", "OPERATOR", "NUMBER"]


def test_empty_input():
    assert _token_types("") == []
    assert _token_types("   ") == []


def test_with_instructionparser():
    parser = InstructionParser(grammar_file=str(GRAMMAR_FILE), start_symbol="start")
    instruction_set = parser.parse_and_transform("a + 1; 70 -- alpha -- 120")

    assert instruction_set.keywords() == ("_cell_length_a", "_cell_angle_alpha")
    assert instruction_set.warnings == ()
