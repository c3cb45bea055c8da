#!/usr/bin/env python3
"""
Command line interface for cif-modder.

Usage:
    cif-modder --cif path/to/file_or_dir --instructions "a + 1; 70 -- alpha -- 120"

Every CIF file found is rewritten to '<name>_modified.cif' next to the input.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import numpy as np

from .config import CifModderConfig
from .src.cif_edit import CifEditor
from .src.cif_io import (
    apply_instructions_to_cif_file,
    collect_cif_paths,
    modified_path,
    write_cif_lines,
)
from .src.cifmodder_ir import KEYWORDS, SHORT_KEYWORDS, CifModderError
from .src.cifmodder_parser import parse_instructions, parse_instructions_file

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_KEYWORD_LIST = ", ".join(f"`{keyword}`" for keyword in KEYWORDS)
_SHORT_KEYWORD_LIST = ", ".join(f"`{keyword}`" for keyword in SHORT_KEYWORDS)

EXAMPLES = f"""
Examples:

cif-modder --cif path/to/cif --instructions "_cell_length_a + 1; _cell_length_a * 2; _cell_length_b -- 5.00; 70 -- _cell_angle_alpha -- 120"

- `path/to/cif` is the path to the CIF file or directory containing CIF files.
- `_cell_length_a + 1` adds 1 to the value of _cell_length_a.
- `_cell_length_a * 2` multiplies the value of _cell_length_a by 2. This is applied after the previous instruction.
- `_cell_length_b -- 5.00` sets the value to a random number between 5.00 and the original value of _cell_length_b.
- `70 -- _cell_angle_alpha -- 120` sets the value to a random number between 70 and 120.

cif-modder -c path/to/cif -i "a + 1; a * 2; b -- 5.00; 70 -- alpha -- 120"

- `a` and `b` are the same as `_cell_length_a` and `_cell_length_b`.
- `alpha` is the same as `_cell_angle_alpha`.
- `-c` is the short form of `--cif`. `-i` is the short form of `--instructions`.

cif-modder -c path/to/cif -i "path/to/instructions.txt"

- The instructions can also be read from a file.
- Valid delimiters are `;`, `,`, and line breaks.

List of currently recognized CIF keywords:
{_KEYWORD_LIST}

Short keywords:
{_SHORT_KEYWORD_LIST}

List of all possible operators:

`+` adds a value to the current value.
`-` subtracts a value from the current value.
`*` multiplies the current value by a value.
`/` divides the current value by a value.
`^` raises the current value to the power of a value.
`--` sets the current value to a random number between the current value and a value or between two values.
"""


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cif-modder",
        description="Modify unit-cell parameters of CIF files with arithmetic instructions",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '-c', '--cif',
        type=str,
        help='The path to the CIF file or directory containing CIF files.'
    )
    mode.add_argument(
        '-e', '--examples',
        action='store_true',
        help='Print examples of how to use the program.'
    )

    parser.add_argument(
        '-i', '--instructions',
        type=str,
        help='Instructions as a string or a path to a file containing instructions.'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show additional debug information.'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for the random generator used by range instructions.'
    )
    parser.add_argument(
        '--suffix',
        type=str,
        default=None,
        help='Suffix appended to the names of modified files (default: _modified).'
    )
    parser.add_argument(
        '--no-keep-precision',
        action='store_true',
        help='Write results in their shortest form instead of the original number of decimals.'
    )
    return parser


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def load_instruction_set(instructions: str):
    """Parse inline instructions, or the file they name."""
    is_instructions_a_file = os.path.isfile(instructions)
    logger.debug(f"is_instructions_file: {is_instructions_a_file}")

    if is_instructions_a_file:
        return parse_instructions_file(instructions)
    return parse_instructions(instructions)


def run(cif: str, instructions: str, config: CifModderConfig) -> int:
    """Apply `instructions` to every CIF file under `cif`; returns the exit code."""
    try:
        instruction_set = load_instruction_set(instructions)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read instructions: {e}")
        return 1

    try:
        paths = collect_cif_paths(cif, config.suffix)
    except FileNotFoundError as e:
        logger.error(f"Error: {e}")
        return 1

    if not paths:
        logger.warning(f"No CIF files found in {cif}")
        return 0

    editor = CifEditor(rng=np.random.default_rng(config.seed), keep_precision=config.keep_precision)

    for path in paths:
        try:
            new_lines = apply_instructions_to_cif_file(path, instruction_set, editor)
        except (CifModderError, OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not apply instructions to CIF file {path}: {e}")
            return 1

        new_path = modified_path(path, config.suffix)
        try:
            write_cif_lines(new_path, new_lines)
        except OSError as e:
            logger.error(f"Could not write modified CIF file {new_path}: {e}")
            return 1

        logger.debug(f"Wrote to {new_path}")

    logger.info(f"Modified {len(paths)} CIF file(s)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.instructions is not None and args.cif is None and not args.examples:
        parser.error("--instructions requires --cif")

    try:
        config = CifModderConfig.from_env().with_overrides(
            seed=args.seed,
            suffix=args.suffix,
            keep_precision=False if args.no_keep_precision else None,
            log_level="DEBUG" if args.verbose else None,
        )
    except ValueError as e:
        parser.error(str(e))

    configure_logging(config.log_level)
    logger.debug(f"{args}")

    if args.examples:
        print(EXAMPLES)
        return 0

    if args.instructions is None:
        logger.error("Error: No instructions provided.")
        return 1

    if args.cif is None:
        logger.error("Error: No path provided.")
        return 1

    return run(args.cif, args.instructions, config)


if __name__ == '__main__':
    sys.exit(main())
