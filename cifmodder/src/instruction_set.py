"""
Instruction set: instructions grouped by CIF field and applied in order.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
import logging

import numpy as np

from ..core.dataclass import DSLProgram
from .cifmodder_ir import Instruction, Keyword, keyword_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstructionSet(DSLProgram):
    """
    Mapping from keyword to the instructions registered for it.

    Keys are canonical CIF names for recognized fields and the raw token
    otherwise. Instructions keep the order they had in the source text.
    The mapping is stored read-only, so sets compare and hash by content.
    """
    instructions: Mapping[str, Tuple[Instruction, ...]] = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "instructions", MappingProxyType(dict(self.instructions)))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    def __hash__(self) -> int:
        return hash((tuple(self.instructions.items()), self.warnings))

    @classmethod
    def from_instructions(cls, instructions: Iterable[Instruction], warnings: Iterable[str] = ()) -> 'InstructionSet':
        grouped: Dict[str, List[Instruction]] = {}
        for instruction in instructions:
            grouped.setdefault(instruction.key, []).append(instruction)
        return cls(
            instructions={key: tuple(items) for key, items in grouped.items()},
            warnings=tuple(warnings),
        )

    def validate(self) -> None:
        for key, instructions in self.instructions.items():
            if not instructions:
                raise ValueError(f"No instructions registered for '{key}'")
            for instruction in instructions:
                if instruction.key != key:
                    raise ValueError(f"Instruction for '{instruction.key}' filed under '{key}'")

    def apply(
        self,
        keyword: Keyword,
        value: str,
        rng: Optional[np.random.Generator] = None,
        keep_precision: bool = True
    ) -> Optional[str]:
        """
        Apply every instruction registered for `keyword` to `value`.

        Args:
            keyword: Field keyword of the value
            value: Current textual value
            rng: Random generator for range instructions
            keep_precision: Keep the decimal places of the input

        Returns:
            The final value, or None when no instruction targets the keyword

        Raises:
            ParseError, RangeError: from the first failing instruction
        """
        instructions = self.instructions.get(keyword_key(keyword))
        if instructions is None:
            return None

        new_value = value
        for instruction in instructions:
            new_value = instruction.apply(new_value, rng=rng, keep_precision=keep_precision)
        logger.debug(f"{keyword_key(keyword)}: {value} -> {new_value}")
        return new_value

    def keywords(self) -> Tuple[str, ...]:
        return tuple(self.instructions)

    def get(self, keyword: Keyword) -> Tuple[Instruction, ...]:
        return self.instructions.get(keyword_key(keyword), ())

    def copy(self) -> 'InstructionSet':
        return InstructionSet(instructions=dict(self.instructions), warnings=self.warnings)

    def __contains__(self, keyword) -> bool:
        return keyword_key(keyword) in self.instructions

    def __len__(self) -> int:
        return sum(len(items) for items in self.instructions.values())

    def __repr__(self) -> str:
        lines = [f"InstructionSet({len(self)} instructions)"]
        for key, instructions in self.instructions.items():
            for instruction in instructions:
                operands = f"{instruction.value_a}"
                if instruction.value_b is not None:
                    operands += f", {instruction.value_b}"
                lines.append(f"  {key or '<no keyword>'}: {instruction.operator.name} ({operands})")
        return "\n".join(lines)
