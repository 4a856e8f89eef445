"""
Implicit multiplication and precedence linearization (shunting yard).

Both passes work on grouped nodes and recurse into sub-groups and call
arguments; an inner group's operator stack never interacts with the
outer one.
"""

from __future__ import annotations

import logging
from typing import List

from .grouping import FuncNode, GroupedNode, OpNode, SubNode, is_operand, is_postfix
from .ops import In, Op, Post, should_shunt

logger = logging.getLogger(__name__)


def _descend(node: GroupedNode, fn) -> GroupedNode:
    """Apply a list pass to the children of a sub-group or function call."""
    if isinstance(node, SubNode):
        return SubNode(fn(node.nodes))
    if isinstance(node, FuncNode):
        return FuncNode(node.name, [fn(arg) for arg in node.args])
    return node


def insert_multiplication(nodes: List[GroupedNode]) -> List[GroupedNode]:
    """Insert '*' between adjacent operands, and between a postfix operator and an operand."""
    out: List[GroupedNode] = []

    for node in nodes:
        if out and is_operand(node):
            prev = out[-1]
            if is_operand(prev) or is_postfix(prev):
                out.append(OpNode(In.MUL))
        out.append(_descend(node, insert_multiplication))

    return out


def to_postfix(nodes: List[GroupedNode]) -> List[GroupedNode]:
    """Reorder infix/prefix/postfix nodes into postfix order by precedence."""
    output: List[GroupedNode] = []
    ops: List[Op] = []

    for node in nodes:
        if not isinstance(node, OpNode):
            output.append(_descend(node, to_postfix))
            continue

        op = node.op
        if isinstance(op, Post):
            # The operand is already complete on the output
            output.append(node)
            continue

        while ops and should_shunt(op, ops[-1]):
            output.append(OpNode(ops.pop()))
        ops.append(op)

    while ops:
        output.append(OpNode(ops.pop()))

    return output


def linearize(nodes: List[GroupedNode], implicit_multiplication: bool = True) -> List[GroupedNode]:
    if implicit_multiplication:
        nodes = insert_multiplication(nodes)
    postfix = to_postfix(nodes)
    logger.debug("postfix: %s", postfix)
    return postfix
