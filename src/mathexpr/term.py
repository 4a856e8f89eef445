"""
Syntax tree ("Term") for compiled expressions.

Terms are immutable. Operation nodes hold references to their operand
terms, so copying a tree (``copy.copy``) shares every sub-tree instead of
duplicating it. A Term never carries an environment; ``Expression`` is
the wrapper that pairs one with the environment it was parsed against.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from .answer import Answer
from .ops import In, Op, Post, Pre

if TYPE_CHECKING:
    from .environment import Environment


class Term:
    """Common base of every syntax-tree node."""

    def eval(self, env: 'Environment') -> Answer:
        from .evaluator import evaluate_with_env  # local import to avoid cycle

        return evaluate_with_env(self, env)


@dataclass(frozen=True)
class Literal(Term):
    answer: Answer

    def __str__(self) -> str:
        return str(self.answer)


@dataclass(frozen=True)
class Operation(Term):
    op: Op
    operands: Tuple[Term, ...]

    def __str__(self) -> str:
        if isinstance(self.op, In):
            a, b = self.operands
            return f"({a} {self.op.symbol} {b})"
        if isinstance(self.op, Pre):
            return f"({self.op.symbol}{self.operands[0]})"
        if isinstance(self.op, Post):
            return f"({self.operands[0]}{self.op.symbol})"
        raise TypeError(f"unknown operator {self.op!r}")


@dataclass(frozen=True)
class Function(Term):
    name: str
    args: Tuple[Term, ...] = ()

    def __str__(self) -> str:
        return f"{self.name}({', '.join(str(arg) for arg in self.args)})"


@dataclass(frozen=True)
class Var(Term):
    name: str

    def __str__(self) -> str:
        return self.name


class Expression:
    """A parsed Term together with the environment it was parsed with."""

    def __init__(self, text: str, env: Optional['Environment'] = None):
        from .compiler import parse_with_env
        from .environment import default_environment

        self.text = text
        self.env = env if env is not None else default_environment()
        self.term = parse_with_env(text, self.env)

    def eval(self) -> Answer:
        return self.term.eval(self.env)

    def eval_with(self, env: 'Environment') -> Answer:
        """Evaluate against another environment (which may lack names this one has)."""
        return self.term.eval(env)

    def __str__(self) -> str:
        return str(self.term)

    def __repr__(self) -> str:
        return f"Expression({self.text!r})"
