"""
Operator set for mathexpr.

Three closed families (infix, prefix, postfix). Each member knows its
symbol, precedence and associativity; the shunting-yard pass only talks
to operators through this module.
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class In(Enum):
    """Infix operators"""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    PLUSMINUS = "±"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def precedence(self) -> int:
        return _INFIX_PRECEDENCE[self]

    @property
    def left_associative(self) -> bool:
        return self is not In.POW


class Pre(Enum):
    """Prefix operators"""

    NEG = "-"
    POS = "+"
    POSNEG = "±"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def precedence(self) -> int:
        return 4

    @property
    def left_associative(self) -> bool:
        return False


class Post(Enum):
    """Postfix operators"""

    FACT = "!"
    PERCENT = "%"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def precedence(self) -> int:
        return 4

    @property
    def left_associative(self) -> bool:
        return True


Op = Union[In, Pre, Post]

_INFIX_PRECEDENCE = {
    In.POW: 4,
    In.MUL: 3,
    In.DIV: 3,
    In.ADD: 2,
    In.SUB: 2,
    In.PLUSMINUS: 2,
}

# Lexeme tables: unicode synonyms map onto the same member.
INFIX_CHARS = {
    '+': In.ADD,
    '-': In.SUB,
    '*': In.MUL,
    '×': In.MUL,
    '/': In.DIV,
    '÷': In.DIV,
    '^': In.POW,
    '±': In.PLUSMINUS,
}

PREFIX_CHARS = {
    '-': Pre.NEG,
    '+': Pre.POS,
    '±': Pre.POSNEG,
}

POSTFIX_CHARS = {
    '!': Post.FACT,
    '%': Post.PERCENT,
}


def arity(op: Op) -> int:
    return 2 if isinstance(op, In) else 1


def should_shunt(incoming: Op, top: Op) -> bool:
    """Return True if ``top`` must be popped to the output before ``incoming`` is pushed."""
    if top.precedence > incoming.precedence:
        return True

    return top.precedence == incoming.precedence and incoming.left_associative
