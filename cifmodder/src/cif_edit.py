#!/usr/bin/env python3
"""
CIF Modder Line Editing

Rewrites the unit-cell lines of a CIF file according to an InstructionSet:
- only lines whose first token is a known cell keyword are touched
- the whitespace between key and value is kept, so column alignment survives
- EditRecord entries track every modified line
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple
import logging

import numpy as np

from .cifmodder_ir import FieldKeyword, Keyword
from .instruction_set import InstructionSet
from .value_utils import key_value_span

logger = logging.getLogger(__name__)

# ============================================================================
# EDITING DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class EditRecord:
    """Record of a single rewritten line"""
    line_number: int       # 0-based index into the input lines
    keyword: FieldKeyword
    old_value: str
    new_value: str
    old_line: str
    new_line: str

@dataclass
class EditingReport:
    """Result of applying instructions to a sequence of lines"""
    lines: List[str]
    records: List[EditRecord] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)   # lines whose layout could not be detected

    @property
    def modified_count(self) -> int:
        return len(self.records)

# ============================================================================
# LINE SCANNING
# ============================================================================

def field_keyword_of_line(line: str) -> Optional[FieldKeyword]:
    """Known cell keyword heading the line, if any"""
    words = line.split(maxsplit=1)
    if not words:
        return None
    return FieldKeyword.from_name(words[0])


def find_keyword_value(lines: Iterable[str], keyword: Keyword) -> Optional[str]:
    """
    Value token of the first line starting with `keyword`.

    Args:
        lines: CIF lines
        keyword: Canonical name, short alias or FieldKeyword

    Returns:
        The raw value (uncertainty included), or None if absent
    """
    if isinstance(keyword, FieldKeyword):
        name = keyword.value
    else:
        resolved = FieldKeyword.resolve(keyword)
        name = resolved.value if resolved is not None else keyword

    for line in lines:
        words = line.split()
        if len(words) >= 2 and words[0] == name:
            return words[1]
    return None

# ============================================================================
# CORE EDITING OPERATIONS
# ============================================================================

class LayoutError(ValueError):
    """The key/value layout of a line could not be determined"""

    def __init__(self, line: str):
        super().__init__(f"Could not locate the value in '{line}'")
        self.line = line


class CifEditor:
    """Applies instruction sets to CIF lines"""

    def __init__(self, rng: Optional[np.random.Generator] = None, keep_precision: bool = True):
        """
        Args:
            rng: Random generator for range instructions (entropy seeded if omitted)
            keep_precision: Keep the decimal places of edited values
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.keep_precision = keep_precision

    def rewrite_line(self, line: str, instruction_set: InstructionSet) -> Optional[Tuple[str, str, str]]:
        """
        Rewrite one line if instructions target its keyword.

        Returns:
            (new_line, old_value, new_value), or None when the line is unchanged

        Raises:
            ParseError, RangeError: propagated from the instructions
        """
        words = line.split()
        if len(words) < 2:
            return None

        key, value = words[0], words[1]
        field_keyword = FieldKeyword.from_name(key)
        if field_keyword is None:
            return None

        span = key_value_span(line)
        if span is None:
            raise LayoutError(line)
        _, value_start = span

        new_value = instruction_set.apply(
            field_keyword, value, rng=self.rng, keep_precision=self.keep_precision
        )
        if new_value is None:
            return None

        # indent, key and the original whitespace run are kept verbatim
        new_line = f"{line[:value_start]}{new_value}"
        return new_line, value, new_value

    def edit_lines(self, lines: Sequence[str], instruction_set: InstructionSet) -> EditingReport:
        """
        Apply `instruction_set` to every cell line in `lines`.

        Args:
            lines: Lines of a CIF file without line terminators
            instruction_set: Parsed instructions

        Returns:
            EditingReport with all lines in their original order

        Raises:
            ParseError, RangeError: a targeted value could not be edited
        """
        report = EditingReport(lines=[])

        for index, line in enumerate(lines):
            try:
                result = self.rewrite_line(line, instruction_set)
            except LayoutError:
                logger.error(f"Failed to find whitespace between key and value in {line}. Skipping line.")
                report.skipped.append(index)
                result = None

            if result is None:
                report.lines.append(line)
                continue

            new_line, old_value, new_value = result
            logger.debug(f"{line} -> {new_line}")
            report.lines.append(new_line)
            report.records.append(EditRecord(
                line_number=index,
                keyword=field_keyword_of_line(line),
                old_value=old_value,
                new_value=new_value,
                old_line=line,
                new_line=new_line,
            ))

        logger.debug(f"Modified {report.modified_count} lines")
        return report

    def apply_instructions_to_lines(
        self,
        lines: Sequence[str],
        instruction_set: InstructionSet
    ) -> Tuple[List[str], int]:
        """Return the rewritten lines and the number of modified lines"""
        report = self.edit_lines(lines, instruction_set)
        return report.lines, report.modified_count

# ============================================================================
# MAIN EDITING OPERATIONS (API)
# ============================================================================

def apply_instructions_to_lines(
    lines: Sequence[str],
    instruction_set: InstructionSet,
    rng: Optional[np.random.Generator] = None,
    keep_precision: bool = True
) -> Tuple[List[str], int]:
    """Rewrite the cell lines of `lines`; returns (new_lines, modified_count)"""
    editor = CifEditor(rng=rng, keep_precision=keep_precision)
    return editor.apply_instructions_to_lines(lines, instruction_set)


def edit_lines(
    lines: Sequence[str],
    instruction_set: InstructionSet,
    rng: Optional[np.random.Generator] = None,
    keep_precision: bool = True
) -> EditingReport:
    """Rewrite the cell lines of `lines` and report every change"""
    editor = CifEditor(rng=rng, keep_precision=keep_precision)
    return editor.edit_lines(lines, instruction_set)
