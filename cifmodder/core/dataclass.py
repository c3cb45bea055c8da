from abc import ABC, abstractmethod
from dataclasses import dataclass

"""
This file defines the base data structure for parsed instruction programs.

A concrete program (e.g. an instruction set for CIF cell fields) subclasses
`DSLProgram` and implements `validate` to check its internal consistency.
"""
@dataclass(frozen=True)
class DSLProgram(ABC):
    @abstractmethod
    def validate(self) -> None:
        """Validate the integrity of the program"""
        pass
