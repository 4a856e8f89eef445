"""
mathexpr: parse and evaluate mathematical expressions.

    >>> from mathexpr import eval_str
    >>> str(eval_str("2(3 + 4)"))
    '14'
    >>> str(eval_str("sqrt(4)"))
    '{2, -2}'
"""

from __future__ import annotations

from typing import Optional

from .answer import Answer, Multiple, Single
from .compiler import compile_postfix, parse, parse_with_env
from .environment import Config, Environment, Func, default_environment
from .errors import (
    CmpError,
    DivideByZero,
    Expected,
    ExpectedKind,
    ExpressionError,
    IncorrectArguments,
    MathError,
    MismatchedParentheses,
    NameInUse,
    OtherMathError,
    ParseError,
    UndefinedFunction,
    UndefinedVariable,
    UnexpectedToken,
    Unimplemented,
)
from .evaluator import evaluate, evaluate_with_env
from .num import BACKENDS, ComplexFloat, DecimalNum, Float, Num, Rational
from .ops import In, Post, Pre
from .term import Expression, Function, Literal, Operation, Term, Var

__version__ = "0.1.0"


def eval_str(text: str, env: Optional[Environment] = None) -> Answer:
    """Parse and evaluate ``text`` in one step."""
    if env is None:
        env = default_environment()
    return evaluate_with_env(parse_with_env(text, env), env)


__all__ = [
    "Answer",
    "BACKENDS",
    "CmpError",
    "ComplexFloat",
    "Config",
    "DecimalNum",
    "DivideByZero",
    "Environment",
    "Expected",
    "ExpectedKind",
    "Expression",
    "ExpressionError",
    "Float",
    "Func",
    "Function",
    "In",
    "IncorrectArguments",
    "Literal",
    "MathError",
    "MismatchedParentheses",
    "Multiple",
    "NameInUse",
    "Num",
    "Operation",
    "OtherMathError",
    "ParseError",
    "Post",
    "Pre",
    "Rational",
    "Single",
    "Term",
    "UndefinedFunction",
    "UndefinedVariable",
    "UnexpectedToken",
    "Unimplemented",
    "Var",
    "compile_postfix",
    "default_environment",
    "eval_str",
    "evaluate",
    "evaluate_with_env",
    "parse",
    "parse_with_env",
]
