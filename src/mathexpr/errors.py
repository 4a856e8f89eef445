from __future__ import annotations

from enum import Enum
from typing import Optional

# ---------- Root ----------

class ExpressionError(Exception):
    """Base of every error the engine raises. ``phase`` names the failing stage."""
    phase: str = "expression"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

# ---------- Parse phase ----------

class ParseError(ExpressionError):
    phase = "parse"

class UnexpectedToken(ParseError):
    def __init__(self, token: str, column: Optional[int] = None):
        if column is None:
            super().__init__(f"Unexpected token '{token}'")
        else:
            super().__init__(f"Unexpected token '{token}' at col {column}")
        self.token = token
        self.column = column

class MismatchedParentheses(ParseError):
    def __init__(self) -> None:
        super().__init__("Parentheses didn't match")

class ExpectedKind(Enum):
    OPERATOR = "operator"
    EXPRESSION = "expression"
    PARENTHESIS = "parenthesis"
    FUNCTION = "function"

class Expected(ParseError):
    def __init__(self, kind: ExpectedKind):
        super().__init__(f"Expected another {kind.value}")
        self.kind = kind

# ---------- Evaluation phase ----------

class MathError(ExpressionError):
    phase = "eval"

class UndefinedVariable(MathError):
    def __init__(self, name: str):
        super().__init__(f"Variable '{name}' is not defined")
        self.name = name

class UndefinedFunction(MathError):
    def __init__(self, name: str):
        super().__init__(f"Function '{name}' is not defined")
        self.name = name

class IncorrectArguments(MathError):
    def __init__(self, message: str = "A function was passed incorrect arguments"):
        super().__init__(message)

class DivideByZero(MathError):
    def __init__(self) -> None:
        super().__init__("Attempted to divide by zero")

class CmpError(MathError):
    def __init__(self, message: str = "Operands could not be ordered (NaN or unorderable value)"):
        super().__init__(message)

class Unimplemented(MathError):
    def __init__(self, op: str, num_type: str):
        super().__init__(f"Operation '{op}' is not implemented for {num_type}")
        self.op = op
        self.num_type = num_type

class OtherMathError(MathError):
    def __init__(self, message: str = "Unknown error occurred in evaluation"):
        super().__init__(message)

# ---------- Environment setup ----------

class NameInUse(ExpressionError):
    phase = "environment"

    def __init__(self, name: str):
        super().__init__(f"Name was already in use: {name}")
        self.name = name
