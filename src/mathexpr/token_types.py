"""
Token Types for mathexpr

Shared between lexer, grouping builder and REPL highlighter to avoid
circular dependencies.
"""

from typing import Any
from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token Types"""

    # Operands
    NUMBER = auto()
    NAME = auto()

    # Operators (value holds the ops.In / ops.Pre / ops.Post member)
    INFIX = auto()
    PREFIX = auto()
    POSTFIX = auto()

    # Punctuation
    LPAR = auto()
    RPAR = auto()
    COMMA = auto()


@dataclass(frozen=True)
class Tok:
    """Token with position info. ``lexeme`` is the exact source slice."""

    type: TT
    value: Any
    column: int = 0
    lexeme: str = ""

    def __repr__(self):
        return f"Tok({self.type.name}, {self.value!r}, col {self.column})"
