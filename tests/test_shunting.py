from __future__ import annotations

from typing import List

import pytest

from mathexpr.grouping import FuncNode, GroupedNode, NumNode, OpNode, SubNode, VarNode, group
from mathexpr.lexer import tokenize
from mathexpr.ops import In, Post, Pre, should_shunt
from mathexpr.shunting import insert_multiplication, linearize, to_postfix


def _render(nodes: List[GroupedNode]) -> str:
    """Compact postfix rendering: operands and operator symbols separated by spaces."""
    parts = []
    for node in nodes:
        match node:
            case NumNode(text=text):
                parts.append(text)
            case VarNode(name=name):
                parts.append(name)
            case OpNode(op=op):
                parts.append(op.symbol if not isinstance(op, Pre) else f"{op.symbol}u")
            case SubNode(nodes=inner):
                parts.append(f"[{_render(inner)}]")
            case FuncNode(name=name, args=args):
                parts.append(f"{name}<{'; '.join(_render(arg) for arg in args)}>")
    return " ".join(parts)


POSTFIX_SCENARIOS = [
    pytest.param("1 + 2 * 3", "1 2 3 * +", id="mul-binds-tighter"),
    pytest.param("1 - 2 - 3", "1 2 - 3 -", id="sub-left-assoc"),
    pytest.param("2 ^ 3 ^ 2", "2 3 2 ^ ^", id="pow-right-assoc"),
    pytest.param("8 / 4 * 2", "8 4 / 2 *", id="mul-div-left-assoc"),
    pytest.param("2x", "2 x *", id="implicit-number-name"),
    pytest.param("3!2", "3 ! 2 *", id="implicit-after-postfix"),
    pytest.param("-3!", "3 ! -u", id="postfix-before-prefix"),
    pytest.param("2 ^ 3!", "2 3 ! ^", id="postfix-binds-operand"),
    pytest.param("-2 ^ 2", "2 2 ^ -u", id="neg-of-power"),
    pytest.param("2 ^ -3", "2 3 -u ^", id="prefix-in-exponent"),
    pytest.param("2 * -3", "2 3 -u *", id="prefix-after-mul"),
    pytest.param("10 + 50%", "10 50 % +", id="percent"),
    pytest.param("1 ± 2", "1 2 ±", id="plusminus-infix"),
    pytest.param("(1 + 2)(3)", "[1 2 +] [3] *", id="groups-adjacent"),
    pytest.param("2 sin(x + 1)", "2 sin<x 1 +> *", id="call-args-linearized"),
]


@pytest.mark.parametrize("source, expected", POSTFIX_SCENARIOS)
def test_postfix_order(env, source: str, expected: str) -> None:
    nodes = linearize(group(tokenize(source), env))
    assert _render(nodes) == expected


def test_insert_multiplication_recurses() -> None:
    nodes = [SubNode([NumNode("2"), VarNode("x")])]
    assert insert_multiplication(nodes) == [
        SubNode([NumNode("2"), OpNode(In.MUL), VarNode("x")]),
    ]


def test_insert_multiplication_leaves_operators_alone() -> None:
    nodes = [NumNode("2"), OpNode(In.ADD), OpNode(Pre.NEG), VarNode("x")]
    assert insert_multiplication(nodes) == nodes


def test_linearize_without_implicit_keeps_adjacency() -> None:
    nodes = [NumNode("2"), VarNode("x")]
    assert linearize(nodes, implicit_multiplication=False) == nodes


def test_subgroup_stack_is_independent() -> None:
    # The inner '+' must not be popped by the outer '*'
    nodes = [NumNode("2"), OpNode(In.MUL), SubNode([NumNode("1"), OpNode(In.ADD), NumNode("3")])]
    assert _render(to_postfix(nodes)) == "2 [1 3 +] *"


@pytest.mark.parametrize(
    "incoming, top, expected",
    [
        pytest.param(In.ADD, In.MUL, True, id="lower-pops-higher"),
        pytest.param(In.MUL, In.ADD, False, id="higher-waits"),
        pytest.param(In.SUB, In.ADD, True, id="equal-left-assoc"),
        pytest.param(In.POW, In.POW, False, id="equal-right-assoc"),
        pytest.param(Pre.NEG, In.POW, False, id="prefix-never-pops"),
        pytest.param(In.POW, Pre.NEG, False, id="pow-after-neg"),
        pytest.param(In.MUL, Pre.NEG, True, id="mul-pops-neg"),
        pytest.param(Post.FACT, In.ADD, False, id="postfix-over-add"),
    ],
)
def test_should_shunt(incoming, top, expected: bool) -> None:
    assert should_shunt(incoming, top) is expected
