"""
Core parsing framework shared by the instruction language.
"""

from .parser import DSLParser, DSLTransformer

__all__ = ["DSLParser", "DSLTransformer"]
