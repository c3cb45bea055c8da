"""
CIF Modder

Modifies the unit-cell parameters of Crystallographic Information Files
(cell lengths, angles and volume) with short arithmetic instructions such as
`a + 1.0`, `b * 2` or `45.0 -- beta -- 90.0`, keeping the column layout and
the number of decimals of every edited value.
"""

__version__ = "0.1.0"
__author__ = "CIF Modder Development Team"
__description__ = "Apply arithmetic instructions to CIF unit-cell parameters"

from .src import (
    KEYWORDS,
    SHORT_KEYWORDS,
    FieldKeyword,
    Operator,
    Instruction,
    InstructionSet,
    CifModderError,
    ParseError,
    RangeError,
    InstructionParser,
    parse_instruction,
    parse_instructions,
    parse_instructions_file,
    CifEditor,
    EditingReport,
    apply_instructions_to_lines,
    find_keyword_value,
    apply_instructions_to_cif_file,
)

__all__ = [
    # Instruction language
    "KEYWORDS",
    "SHORT_KEYWORDS",
    "FieldKeyword",
    "Operator",
    "Instruction",
    "InstructionSet",
    "InstructionParser",
    "parse_instruction",
    "parse_instructions",
    "parse_instructions_file",

    # Errors
    "CifModderError",
    "ParseError",
    "RangeError",

    # Editing
    "CifEditor",
    "EditingReport",
    "apply_instructions_to_lines",
    "find_keyword_value",
    "apply_instructions_to_cif_file",
]
