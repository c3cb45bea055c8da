"""
CIF Modder Source Package

This package contains the instruction language (IR, grammar, parser),
the instruction set dispatcher, the column-preserving line editor and
the file collaborators used by the command line.
"""

from .cifmodder_ir import (
    KEYWORDS,
    SHORT_KEYWORDS,
    FieldKeyword,
    Operator,
    Instruction,
    CifModderError,
    ParseError,
    RangeError,
)

from .instruction_set import InstructionSet

from .cifmodder_parser import (
    InstructionParser,
    InstructionTransformer,
    parse_instruction,
    parse_instructions,
    parse_instructions_file,
)

from .cif_edit import (
    CifEditor,
    EditRecord,
    EditingReport,
    apply_instructions_to_lines,
    edit_lines,
    find_keyword_value,
)

from .cif_io import (
    read_cif_lines,
    write_cif_lines,
    modified_path,
    directory_content_from_path,
    collect_cif_paths,
    apply_instructions_to_cif_file,
)

from .value_utils import (
    remove_uncertainty_digits,
    precision_of_value,
    whitespace_between_two_values,
)

__version__ = "0.1.0"

__all__ = [
    # IR
    "KEYWORDS",
    "SHORT_KEYWORDS",
    "FieldKeyword",
    "Operator",
    "Instruction",
    "CifModderError",
    "ParseError",
    "RangeError",

    # Parser
    "InstructionSet",
    "InstructionParser",
    "InstructionTransformer",
    "parse_instruction",
    "parse_instructions",
    "parse_instructions_file",

    # Editing
    "CifEditor",
    "EditRecord",
    "EditingReport",
    "apply_instructions_to_lines",
    "edit_lines",
    "find_keyword_value",

    # File collaborators
    "read_cif_lines",
    "write_cif_lines",
    "modified_path",
    "directory_content_from_path",
    "collect_cif_paths",
    "apply_instructions_to_cif_file",

    # Value helpers
    "remove_uncertainty_digits",
    "precision_of_value",
    "whitespace_between_two_values",
]
