from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Complex
from typing import Dict, Optional, Sequence, Type

from typing_extensions import Protocol

from .answer import Answer, Single
from .errors import NameInUse
from .num import Float, Num
from .term import Expression, Literal, Term

logger = logging.getLogger(__name__)


class Func(Protocol):
    """A callable usable as an expression function.

    It receives the *unevaluated* argument terms plus the environment, and
    is responsible for evaluating them and checking how many it got.
    """

    def __call__(self, args: Sequence[Term], env: 'Environment') -> Answer: ...


@dataclass
class Config:
    implicit_multiplication: bool = True
    # sqrt (and even nrt) yields both signed roots
    sqrt_both: bool = True
    # significant digits, for backends that use it
    precision: int = 50


class Environment:
    """Variable and function bindings plus evaluation configuration.

    The engine only reads an environment; callers may change it between
    parses. ``num`` is the numeric backend literals are built with.
    """

    def __init__(self, num: Type[Num] = Float, config: Optional[Config] = None):
        self.num: Type[Num] = num
        self.config: Config = config if config is not None else Config()
        self.vars: Dict[str, Term] = {}
        self.funcs: Dict[str, Func] = {}

    def to_term(self, value: object) -> Term:
        """Coerce a variable value into a Term."""
        if isinstance(value, Term):
            return value
        if isinstance(value, Expression):
            return value.term
        if isinstance(value, Answer):
            return Literal(value)
        if isinstance(value, Num):
            return Literal(Single(value))
        if isinstance(value, bool):
            raise TypeError("booleans are not numeric values")
        if isinstance(value, (int, float)):
            return Literal(self.num.from_f64(float(value), self))
        if isinstance(value, Complex):
            value = complex(value)
            return Literal(self.num.from_f64_complex((value.real, value.imag), self))
        raise TypeError(f"cannot bind a value of type {type(value).__name__}")

    def set_var(self, name: str, value: object) -> None:
        self.vars[name] = self.to_term(value)

    def set_func(self, name: str, func: Func) -> None:
        self.funcs[name] = func

    def add_var(self, name: str, value: object) -> None:
        """Like set_var, but refuse a name already bound to a function."""
        if name in self.funcs:
            raise NameInUse(name)
        self.set_var(name, value)

    def add_func(self, name: str, func: Func) -> None:
        """Like set_func, but refuse a name already bound to a variable."""
        if name in self.vars:
            raise NameInUse(name)
        self.set_func(name, func)

    def literal(self, value: float) -> Answer:
        """Build ``value`` in this environment's numeric backend."""
        return self.num.from_f64(value, self)

    def copy(self) -> 'Environment':
        """Independent binding tables over the same terms and functions."""
        clone = Environment(self.num, Config(**vars(self.config)))
        clone.vars = dict(self.vars)
        clone.funcs = dict(self.funcs)
        return clone

    def __repr__(self) -> str:
        return (
            f"<Environment num={self.num.type_name()} vars={sorted(self.vars)} "
            f"funcs={len(self.funcs)} config={self.config}>"
        )


def default_environment(num: Type[Num] = Float, config: Optional[Config] = None) -> Environment:
    """Environment pre-populated with the builtin functions and constants."""
    from .builtins import install_builtins  # local import to avoid cycle

    env = Environment(num, config)
    install_builtins(env)
    logger.debug("built default environment: %r", env)
    return env
