"""
Tree compiler and the parse entry points.

parse_with_env runs the whole pipeline: tokenize, group, insert implicit
multiplication, reorder to postfix, then fold the postfix stream into a
Term with an operand stack.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from .errors import Expected, ExpectedKind
from .grouping import FuncNode, GroupedNode, NumNode, OpNode, SubNode, VarNode, group
from .lexer import tokenize
from .ops import arity
from .shunting import linearize
from .term import Function, Literal, Operation, Term, Var

if TYPE_CHECKING:
    from .environment import Environment

logger = logging.getLogger(__name__)


def compile_postfix(nodes: List[GroupedNode], env: 'Environment') -> Term:
    """Fold a postfix-ordered node list into a single Term."""
    stack: List[Term] = []

    for node in nodes:
        match node:
            case NumNode(text=text):
                stack.append(Literal(env.literal(float(text))))
            case VarNode(name=name):
                stack.append(Var(name))
            case SubNode(nodes=inner):
                stack.append(compile_postfix(inner, env))
            case FuncNode(name=name, args=args):
                stack.append(Function(name, tuple(compile_postfix(arg, env) for arg in args)))
            case OpNode(op=op):
                count = arity(op)
                if len(stack) < count:
                    raise Expected(ExpectedKind.EXPRESSION)
                operands = tuple(stack[-count:])
                del stack[-count:]
                stack.append(Operation(op, operands))

    if not stack:
        raise Expected(ExpectedKind.EXPRESSION)
    if len(stack) > 1:
        raise Expected(ExpectedKind.OPERATOR)

    return stack[0]


def parse_with_env(text: str, env: 'Environment') -> Term:
    """Parse ``text`` into a Term, resolving function names against ``env``."""
    text = text.strip()
    logger.debug("parsing %r", text)

    tokens = tokenize(text)
    grouped = group(tokens, env)
    postfix = linearize(grouped, env.config.implicit_multiplication)
    term = compile_postfix(postfix, env)

    logger.debug("compiled term: %s", term)
    return term


def parse(text: str) -> Term:
    """Parse against a fresh default environment."""
    from .environment import default_environment

    return parse_with_env(text, default_environment())
