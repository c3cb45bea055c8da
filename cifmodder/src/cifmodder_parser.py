#!/usr/bin/env python3
"""
CIF Modder Instruction Parser

Parses instruction text such as

    a + 1.0; b * 2.0
    45.0 -- beta -- 90.0

into an InstructionSet. Parsing never fails: unknown keywords, missing
operators and missing values are reported as warnings and replaced by
safe defaults, so one bad line does not abort a whole instruction file.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union
import logging

from lark.exceptions import LarkError

from ..core.parser import DSLParser, DSLTransformer
from .cifmodder_ir import FieldKeyword, Instruction, Operator
from .instruction_set import InstructionSet

logger = logging.getLogger(__name__)

# Grammar file path
GRAMMAR_FILE = Path(__file__).parent / "instructions.lark"

# Accepted instruction delimiters besides line breaks
DELIMITERS = (";", ",")


class InstructionTransformer(DSLTransformer):
    """
    Converts the token stream of one instruction line into an Instruction.

    Tokens are classified by the grammar's terminal priorities: numbers first,
    then operators, then keyword candidates.
    """

    def start(self, tokens):
        """Transform the start rule"""
        keyword: Optional[Union[FieldKeyword, str]] = None
        operator: Optional[Operator] = None
        value_a: Optional[float] = None
        value_b: Optional[float] = None

        for token in tokens:
            if token.type == "NUMBER":
                if value_a is None:
                    value_a = float(token)
                else:
                    value_b = float(token)
            elif token.type == "OPERATOR":
                new_operator = Operator.from_token(str(token))
                # repeating the same operator is the two-operand range form
                if operator is not None and operator is not new_operator:
                    self.warn(f"Multiple operators found, using '{token}'. Results may be unexpected.")
                operator = new_operator
            else:
                word = str(token)
                field_keyword = FieldKeyword.resolve(word)
                if field_keyword is not None:
                    keyword = field_keyword
                else:
                    self.warn(f"{word} is not a known keyword. Results may be unexpected.")
                    keyword = word

        if keyword is None:
            self.warn("No keyword found. Results may be unexpected.")
            keyword = ""

        if operator is None:
            self.warn("No operator found. Results may be unexpected.")
            operator = Operator.NONE

        if value_a is None:
            self.warn("No value found. Results may be unexpected.")
            value_a = 0.0

        return Instruction(keyword=keyword, operator=operator, value_a=value_a, value_b=value_b)


class InstructionParser(DSLParser):
    """
    Instruction parser that loads the instruction grammar.
    """

    def __init__(self, grammar_file: str = None, start_symbol: str = "start"):
        """
        Initialize the instruction parser.

        Args:
            grammar_file: Path to the grammar file (optional)
            start_symbol: The start symbol for grammar parsing
        """
        if grammar_file is None:
            grammar_file = str(GRAMMAR_FILE)

        super().__init__(grammar_file, start_symbol)
        self.transformer = InstructionTransformer()

    def parse_line(self, line: str) -> Instruction:
        """
        Parse a single instruction line.

        Warnings are logged and kept on `self.transformer.warnings`.
        """
        self.transformer.reset()
        try:
            instruction = self.transformer.transform(self.parse(line))
        except LarkError as e:
            self.transformer.warn(f"Could not parse instruction '{line}': {e}")
            instruction = Instruction(keyword="")

        for warning in self.transformer.warnings:
            logger.warning(f"{warning} (in '{line.strip()}')")
        return instruction

    def parse_and_transform(self, code: str) -> InstructionSet:
        """
        Parse a block of instructions into an InstructionSet.

        Args:
            code: Instructions separated by ';', ',' or line breaks

        Returns:
            InstructionSet grouping the instructions by keyword
        """
        instructions: List[Instruction] = []
        warnings: List[str] = []

        for line in split_instructions(code):
            instructions.append(self.parse_line(line))
            warnings.extend(f"{line}: {warning}" for warning in self.transformer.warnings)

        instruction_set = InstructionSet.from_instructions(instructions, warnings)
        instruction_set.validate()
        logger.debug(f"Instructions: {instruction_set!r}")
        return instruction_set


def split_instructions(code: str) -> List[str]:
    """Split instruction text on ';', ',' and line breaks, dropping blank lines."""
    for delimiter in DELIMITERS:
        code = code.replace(delimiter, "\n")
    return [line.strip() for line in code.splitlines() if line.strip()]


@lru_cache(maxsize=None)
def default_parser() -> InstructionParser:
    """Shared parser for the convenience functions, built on first use"""
    return InstructionParser()


def parse_instruction(line: str) -> Instruction:
    """
    Convenience function to parse one instruction line.

    Args:
        line: e.g. 'a + 1' or '0 -- b -- 1'

    Returns:
        Parsed Instruction
    """
    return default_parser().parse_line(line)


def parse_instructions(content: str) -> InstructionSet:
    """
    Convenience function to parse a block of instructions.

    Args:
        content: Instructions separated by ';', ',' or line breaks

    Returns:
        Parsed InstructionSet
    """
    return default_parser().parse_and_transform(content)


def parse_instructions_file(file_path: Union[str, Path]) -> InstructionSet:
    """
    Convenience function to parse an instruction file.

    Args:
        file_path: Path to the instruction file

    Returns:
        Parsed InstructionSet
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        content = f.read()
    return parse_instructions(content)
