"""Builtin functions and constants, registered via register_builtin."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence, Tuple, Union

from .answer import Answer, Single
from .errors import IncorrectArguments, Unimplemented
from .term import Literal, Term

if TYPE_CHECKING:
    from .environment import Environment
    from .num import Num

BuiltinFn = Callable[[Sequence[Term], 'Environment'], Answer]
Arity = Union[int, Tuple[int, Optional[int]], None]


@dataclass(frozen=True)
class BuiltinFunction:
    name: str
    fn: BuiltinFn
    # exact count, (min, max) with max None meaning unbounded, or None for any
    arity: Arity = None

    def check_arity(self, count: int) -> None:
        match self.arity:
            case None:
                return
            case int(expected):
                if count != expected:
                    raise IncorrectArguments(
                        f"{self.name} expects {expected} argument(s); got {count}"
                    )
            case (low, None):
                if count < low:
                    raise IncorrectArguments(
                        f"{self.name} expects at least {low} argument(s); got {count}"
                    )
            case (low, high):
                if not low <= count <= high:
                    raise IncorrectArguments(
                        f"{self.name} expects {low} to {high} arguments; got {count}"
                    )

    def __call__(self, args: Sequence[Term], env: 'Environment') -> Answer:
        self.check_arity(len(args))
        return self.fn(args, env)


BUILTINS: Dict[str, BuiltinFunction] = {}

CONSTANTS: Dict[str, float] = {
    "pi": math.pi,
    "π": math.pi,
    "e": math.e,
}


def register_builtin(name: str, *, arity: Arity = None):
    def dec(fn: BuiltinFn):
        BUILTINS[name] = BuiltinFunction(name=name, fn=fn, arity=arity)
        return fn

    return dec


def install_builtins(env: 'Environment') -> None:
    """Bind every builtin function and constant into ``env``."""
    for name, func in BUILTINS.items():
        env.set_func(name, func)

    for name, value in CONSTANTS.items():
        env.set_var(name, Literal(env.literal(value)))

    # Only backends that keep an imaginary part get 'i'
    try:
        imaginary = env.num.from_f64_complex((0.0, 1.0), env)
    except Unimplemented:
        return
    if imaginary != env.literal(0.0):
        env.set_var("i", Literal(imaginary))


def _unary(args: Sequence[Term], env: 'Environment', op: Callable[['Num'], Answer]) -> Answer:
    return args[0].eval(env).map(op)


def _binary(args: Sequence[Term], env: 'Environment', op: Callable[['Num', 'Num'], Answer]) -> Answer:
    # Evaluate left to right so the first failing argument is the one reported
    left = args[0].eval(env)
    right = args[1].eval(env)
    return left.combine(right, op)


# ---------- Trigonometry ----------

@register_builtin("sin", arity=1)
def _sin(args, env):
    return _unary(args, env, lambda n: n.sin(env))

@register_builtin("cos", arity=1)
def _cos(args, env):
    return _unary(args, env, lambda n: n.cos(env))

@register_builtin("tan", arity=1)
def _tan(args, env):
    return _unary(args, env, lambda n: n.tan(env))

@register_builtin("asin", arity=1)
def _asin(args, env):
    return _unary(args, env, lambda n: n.asin(env))

@register_builtin("acos", arity=1)
def _acos(args, env):
    return _unary(args, env, lambda n: n.acos(env))

@register_builtin("atan", arity=1)
def _atan(args, env):
    return _unary(args, env, lambda n: n.atan(env))

@register_builtin("atan2", arity=2)
def _atan2(args, env):
    return _binary(args, env, lambda y, x: y.atan2(x, env))

# ---------- Roots and powers ----------

@register_builtin("sqrt", arity=1)
def _sqrt(args, env):
    return _unary(args, env, lambda n: n.sqrt(env))

@register_builtin("nrt", arity=2)
def _nrt(args, env):
    """nrt(x, n): the n-th root of x."""
    return _binary(args, env, lambda x, n: x.nrt(n, env))

@register_builtin("abs", arity=1)
def _abs(args, env):
    return _unary(args, env, lambda n: n.abs(env))

# ---------- Logarithms ----------

@register_builtin("log", arity=(1, 2))
def _log(args, env):
    """log(x) is base 10; log(x, b) is base b."""
    value = args[0].eval(env)
    base = args[1].eval(env) if len(args) == 2 else env.literal(10.0)
    return value.combine(base, lambda x, b: x.log(b, env))

@register_builtin("ln", arity=1)
def _ln(args, env):
    value = args[0].eval(env)
    return value.combine(env.literal(math.e), lambda x, b: x.log(b, env))

# ---------- Rounding ----------

@register_builtin("floor", arity=1)
def _floor(args, env):
    return _unary(args, env, lambda n: n.floor(env))

@register_builtin("ceil", arity=1)
def _ceil(args, env):
    return _unary(args, env, lambda n: n.ceil(env))

@register_builtin("round", arity=1)
def _round(args, env):
    return _unary(args, env, lambda n: n.round(env))

# ---------- Extremes ----------

def _extreme(args: Sequence[Term], env: 'Environment', sign: int) -> Answer:
    """Fold the arguments keeping the value whose ordering against the best so far is ``sign``."""
    best = args[0].eval(env)

    for arg in args[1:]:
        candidate = arg.eval(env)
        best = best.combine(
            candidate,
            lambda kept, new: Single(new) if new.tryord(kept, env) == sign else Single(kept),
        )

    return best

@register_builtin("max", arity=(1, None))
def _max(args, env):
    return _extreme(args, env, 1)

@register_builtin("min", arity=(1, None))
def _min(args, env):
    return _extreme(args, env, -1)
