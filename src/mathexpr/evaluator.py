from __future__ import annotations

from typing import TYPE_CHECKING, List

from .answer import Answer, Single
from .errors import UndefinedFunction, UndefinedVariable
from .ops import In, Post, Pre
from .term import Function, Literal, Operation, Term, Var

if TYPE_CHECKING:
    from .environment import Environment
    from .num import Num


def evaluate(term: Term) -> Answer:
    """Evaluate against a fresh default environment."""
    from .environment import default_environment

    return evaluate_with_env(term, default_environment())


def evaluate_with_env(term: Term, env: 'Environment') -> Answer:
    match term:
        case Literal(answer=answer):
            return answer
        case Operation():
            return eval_operation(term, env)
        case Function(name=name, args=args):
            func = env.funcs.get(name)
            if func is None:
                raise UndefinedFunction(name)
            return func(args, env)
        case Var(name=name):
            bound = env.vars.get(name)
            if bound is None:
                raise UndefinedVariable(name)
            return evaluate_with_env(bound, env)
    raise TypeError(f"cannot evaluate {term!r}")


def _negated(value: 'Num', minus_one: Answer, env: 'Environment') -> Answer:
    return Single(value).combine(minus_one, lambda a, b: a.mul(b, env))


def eval_operation(node: Operation, env: 'Environment') -> Answer:
    # Operands are evaluated left to right before the operator is applied
    args: List[Answer] = [evaluate_with_env(operand, env) for operand in node.operands]

    match node.op:
        case In.ADD:
            return args[0].combine(args[1], lambda a, b: a.add(b, env))
        case In.SUB:
            return args[0].combine(args[1], lambda a, b: a.sub(b, env))
        case In.MUL:
            return args[0].combine(args[1], lambda a, b: a.mul(b, env))
        case In.DIV:
            return args[0].combine(args[1], lambda a, b: a.div(b, env))
        case In.POW:
            return args[0].combine(args[1], lambda a, b: a.pow(b, env))
        case In.PLUSMINUS:
            return args[0].combine(
                args[1],
                lambda a, b: Answer.of([*a.add(b, env).values(), *a.sub(b, env).values()]),
            )
        case Pre.NEG:
            return args[0].combine(env.literal(-1.0), lambda a, b: a.mul(b, env))
        case Pre.POS:
            return args[0]
        case Pre.POSNEG:
            minus_one = env.literal(-1.0)
            return args[0].map(
                lambda a: Answer.of([a, *_negated(a, minus_one, env).values()])
            )
        case Post.FACT:
            return args[0].map(lambda a: a.fact(env))
        case Post.PERCENT:
            return args[0].combine(env.literal(0.01), lambda a, b: a.mul(b, env))

    raise TypeError(f"unknown operator {node.op!r}")
