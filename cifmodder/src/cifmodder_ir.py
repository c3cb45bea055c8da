"""
CIF Modder Intermediate Representation (IR)

Data structures for the instruction language:
- FieldKeyword: the CIF unit-cell fields an instruction can target
- Operator: the arithmetic and range operators
- Instruction: one parsed instruction and its application to a CIF value
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union
import logging

import numpy as np

from .value_utils import (
    format_shortest,
    format_with_precision,
    precision_of_value,
    remove_uncertainty_digits,
)

logger = logging.getLogger(__name__)

# ============================================================================
# ERRORS
# ============================================================================

class CifModderError(Exception):
    """Base class for errors raised while applying instructions"""


class ParseError(CifModderError, ValueError):
    """A CIF value is not numeric once its uncertainty digits are removed"""


class RangeError(CifModderError, ValueError):
    """A range instruction resolved to equal lower and upper bounds"""

# ============================================================================
# FIELD KEYWORDS
# ============================================================================

KEYWORDS = (
    "_cell_length_a",
    "_cell_length_b",
    "_cell_length_c",
    "_cell_angle_alpha",
    "_cell_angle_beta",
    "_cell_angle_gamma",
    "_cell_volume",
)

SHORT_KEYWORDS = ("a", "b", "c", "alpha", "beta", "gamma", "volume")


class FieldKeyword(str, Enum):
    """CIF unit-cell field that instructions can modify"""
    LENGTH_A = "_cell_length_a"
    LENGTH_B = "_cell_length_b"
    LENGTH_C = "_cell_length_c"
    ANGLE_ALPHA = "_cell_angle_alpha"
    ANGLE_BETA = "_cell_angle_beta"
    ANGLE_GAMMA = "_cell_angle_gamma"
    VOLUME = "_cell_volume"

    def __str__(self) -> str:
        return self.value

    @property
    def alias(self) -> str:
        """Short keyword accepted in instructions (e.g. 'a', 'beta')"""
        return SHORT_KEYWORDS[KEYWORDS.index(self.value)]

    @classmethod
    def from_alias(cls, word: str) -> Optional['FieldKeyword']:
        if word in SHORT_KEYWORDS:
            return cls(KEYWORDS[SHORT_KEYWORDS.index(word)])
        return None

    @classmethod
    def from_name(cls, word: str) -> Optional['FieldKeyword']:
        if word in KEYWORDS:
            return cls(word)
        return None

    @classmethod
    def resolve(cls, word: str) -> Optional['FieldKeyword']:
        """Resolve a canonical CIF name or a short alias"""
        return cls.from_name(word) or cls.from_alias(word)


# Known fields are FieldKeyword members, anything else stays the raw token
Keyword = Union[FieldKeyword, str]


def keyword_key(keyword: Keyword) -> str:
    """String used to index instructions by keyword"""
    if isinstance(keyword, FieldKeyword):
        return keyword.value
    return keyword

# ============================================================================
# OPERATORS
# ============================================================================

class Operator(Enum):
    """Operator of an instruction, identified by its symbol"""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    RANGE = "--"
    NONE = ""

    @classmethod
    def from_token(cls, token: str) -> 'Operator':
        """Map an operator symbol; unrecognized tokens map to NONE"""
        if not token:
            return cls.NONE
        for operator in cls:
            if operator.value == token:
                return operator
        return cls.NONE

# ============================================================================
# INSTRUCTION
# ============================================================================

@dataclass(frozen=True)
class Instruction:
    """A single instruction such as 'a + 1.0' or '45.0 -- beta -- 90.0'"""
    keyword: Keyword
    operator: Operator = Operator.NONE
    value_a: float = 0.0
    value_b: Optional[float] = None

    @property
    def key(self) -> str:
        return keyword_key(self.keyword)

    @property
    def is_known_field(self) -> bool:
        return isinstance(self.keyword, FieldKeyword)

    def apply(
        self,
        cif_value: str,
        rng: Optional[np.random.Generator] = None,
        keep_precision: bool = True
    ) -> str:
        """
        Apply this instruction to a textual CIF value.

        Args:
            cif_value: Current value, possibly with an uncertainty suffix
            rng: Random generator used by the range operator
            keep_precision: Render the result with the decimal places of the input

        Returns:
            The new value as text

        Raises:
            ParseError: the value is not numeric
            RangeError: the range bounds are equal
        """
        value_text = remove_uncertainty_digits(cif_value)
        value_precision = precision_of_value(value_text)

        try:
            value = float(value_text)
        except ValueError as e:
            raise ParseError(f"Could not parse '{cif_value}' as a number for {self.key}") from e

        new_value = self._evaluate(value, rng)

        if keep_precision:
            return format_with_precision(new_value, value_precision)
        return format_shortest(new_value)

    def _evaluate(self, value: float, rng: Optional[np.random.Generator]) -> float:
        current = np.float64(value)
        operand = np.float64(self.value_a)

        # IEEE semantics: x / 0 -> inf, (-8) ^ 0.5 -> nan
        with np.errstate(all='ignore'):
            if self.operator is Operator.ADD:
                result = current + operand
            elif self.operator is Operator.SUBTRACT:
                result = current - operand
            elif self.operator is Operator.MULTIPLY:
                result = current * operand
            elif self.operator is Operator.DIVIDE:
                result = np.divide(current, operand)
            elif self.operator is Operator.POWER:
                result = np.power(current, operand)
            elif self.operator is Operator.RANGE:
                other = self.value_b if self.value_b is not None else value
                result = self._draw(self.value_a, other, rng)
            else:
                result = current

        return float(result)

    def _draw(self, first: float, second: float, rng: Optional[np.random.Generator]) -> float:
        lower_value = min(first, second)
        upper_value = max(first, second)

        if lower_value == upper_value:
            raise RangeError(f"Lower and upper values are the same - {self!r}")

        if not np.isfinite(upper_value - lower_value):
            raise RangeError(f"Range bounds must be finite numbers - {self!r}")

        if rng is None:
            rng = np.random.default_rng()

        drawn = rng.uniform(lower_value, upper_value)
        # uniform() may round up to the upper bound for very narrow intervals
        if drawn >= upper_value:
            drawn = lower_value
        logger.debug(f"Drew {drawn} from [{lower_value}, {upper_value}) for {self.key}")
        return float(drawn)
