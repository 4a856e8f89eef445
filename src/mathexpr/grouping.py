"""
Grouping builder.

Turns the flat token stream into a tree shaped by parentheses, then
decides for every name whether it is a variable reference or a function
call (which needs the environment's function table at parse time), and
splits call arguments on their top-level commas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Union

from typing_extensions import TypeAlias

from .errors import MismatchedParentheses, UnexpectedToken
from .ops import Op, Post
from .token_types import TT, Tok

if TYPE_CHECKING:
    from .environment import Environment

logger = logging.getLogger(__name__)

# ---------- Grouped nodes ----------

@dataclass(frozen=True)
class NumNode:
    text: str

@dataclass(frozen=True)
class OpNode:
    op: Op

@dataclass(frozen=True)
class VarNode:
    name: str

@dataclass(frozen=True)
class FuncNode:
    name: str
    args: List[List['GroupedNode']] = field(default_factory=list)

@dataclass(frozen=True)
class SubNode:
    nodes: List['GroupedNode'] = field(default_factory=list)

GroupedNode: TypeAlias = Union[NumNode, OpNode, VarNode, FuncNode, SubNode]

def is_operand(node: GroupedNode) -> bool:
    return not isinstance(node, OpNode)

def is_postfix(node: GroupedNode) -> bool:
    return isinstance(node, OpNode) and isinstance(node.op, Post)

# ---------- Parenthesis tree ----------

@dataclass
class _Paren:
    """Interior of a matched parenthesis pair, still as raw tokens."""
    items: List[Union[Tok, '_Paren']]

def _paren_tree(tokens: List[Tok]) -> List[Union[Tok, _Paren]]:
    out: List[Union[Tok, _Paren]] = []
    depth = 0
    start = 0

    for i, tok in enumerate(tokens):
        if tok.type == TT.LPAR:
            if depth == 0:
                start = i
            depth += 1
        elif tok.type == TT.RPAR:
            depth -= 1
            if depth < 0:
                raise MismatchedParentheses()
            if depth == 0:
                out.append(_Paren(_paren_tree(tokens[start + 1:i])))
        elif depth == 0:
            out.append(tok)

    if depth != 0:
        raise MismatchedParentheses()

    return out

# ---------- Name classification ----------

def _classify(items: List[Union[Tok, _Paren]], env: 'Environment') -> List[GroupedNode]:
    nodes: List[GroupedNode] = []
    pending: Optional[str] = None

    for item in items:
        if isinstance(item, _Paren):
            if pending is None:
                nodes.append(SubNode(_classify(item.items, env)))
                continue

            name, pending = pending, None
            if not env.config.implicit_multiplication or name in env.funcs:
                nodes.append(FuncNode(name, _split_args(item.items, env)))
            else:
                nodes.append(VarNode(name))
                nodes.append(SubNode(_classify(item.items, env)))
            continue

        # Anything other than a parenthesis settles a pending name as a variable
        if pending is not None:
            nodes.append(VarNode(pending))
            pending = None

        match item.type:
            case TT.NAME:
                pending = item.value
            case TT.NUMBER:
                nodes.append(NumNode(item.value))
            case TT.INFIX | TT.PREFIX | TT.POSTFIX:
                nodes.append(OpNode(item.value))
            case TT.COMMA:
                # Commas only survive inside call groups, where _split_args removes them
                raise UnexpectedToken(",", column=item.column)
            case _:
                raise UnexpectedToken(item.lexeme or item.type.name, column=item.column)

    if pending is not None:
        nodes.append(VarNode(pending))

    return nodes

def _split_args(items: List[Union[Tok, _Paren]], env: 'Environment') -> List[List[GroupedNode]]:
    args: List[List[GroupedNode]] = []
    current: List[Union[Tok, _Paren]] = []

    for item in items:
        if isinstance(item, Tok) and item.type == TT.COMMA:
            if current:
                args.append(_classify(current, env))
            current = []
        else:
            current.append(item)

    if current:
        args.append(_classify(current, env))

    return args

# ---------- Public API ----------

def group(tokens: List[Tok], env: 'Environment') -> List[GroupedNode]:
    """Build the grouped node tree for ``tokens``, resolving names against ``env``."""
    nodes = _classify(_paren_tree(tokens), env)
    logger.debug("grouped nodes: %s", nodes)
    return nodes
