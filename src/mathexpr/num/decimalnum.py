"""
Arbitrary-precision decimal backend.

Honours ``Config.precision`` as the number of significant digits; every
operation runs inside a ``decimal.localcontext`` set to that precision so
the process-wide decimal context is left alone. No trigonometry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext
from typing import TYPE_CHECKING, Callable, Tuple

from ..answer import Answer, Single
from ..errors import CmpError, DivideByZero, OtherMathError
from .base import Num, signed_roots, translate_errors

if TYPE_CHECKING:
    from ..environment import Environment


@dataclass(frozen=True)
class DecimalNum(Num):
    value: Decimal

    def __str__(self) -> str:
        text = format(self.value, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    def __float__(self) -> float:
        return float(self.value)

    def _compute(self, op: str, env: 'Environment', fn: Callable[[], Decimal]) -> Answer:
        with localcontext() as ctx:
            ctx.prec = env.config.precision
            with translate_errors(op):
                return Single(DecimalNum(fn()))

    @classmethod
    def from_f64(cls, value: float, env: 'Environment') -> Answer:
        with localcontext() as ctx:
            ctx.prec = env.config.precision
            # Unary plus rounds to the context precision
            return Single(cls(+Decimal(repr(float(value)))))

    @classmethod
    def from_f64_complex(cls, value: Tuple[float, float], env: 'Environment') -> Answer:
        return cls.from_f64(value[0], env)

    def tryord(self, other: 'DecimalNum', env: 'Environment') -> int:
        if self.value.is_nan() or other.value.is_nan():
            raise CmpError("A NaN value was attempted to be used as an operand")
        return (self.value > other.value) - (self.value < other.value)

    def add(self, other: 'DecimalNum', env: 'Environment') -> Answer:
        return self._compute("add", env, lambda: self.value + other.value)

    def sub(self, other: 'DecimalNum', env: 'Environment') -> Answer:
        return self._compute("sub", env, lambda: self.value - other.value)

    def mul(self, other: 'DecimalNum', env: 'Environment') -> Answer:
        return self._compute("mul", env, lambda: self.value * other.value)

    def div(self, other: 'DecimalNum', env: 'Environment') -> Answer:
        if other.value == 0:
            raise DivideByZero()
        return self._compute("div", env, lambda: self.value / other.value)

    def pow(self, other: 'DecimalNum', env: 'Environment') -> Answer:
        with translate_errors("pow"):
            if self.value == 0 and other.value < 0:
                raise DivideByZero()
        return self._compute("pow", env, lambda: self.value ** other.value)

    def sqrt(self, env: 'Environment') -> Answer:
        with translate_errors("sqrt"):
            if self.value < 0:
                raise OtherMathError("Square root of a negative number")
        root = self._compute("sqrt", env, self.value.sqrt).unwrap()
        return signed_roots(root, DecimalNum(-root.value), env.config.sqrt_both)

    def abs(self, env: 'Environment') -> Answer:
        return self._compute("abs", env, lambda: abs(self.value))

    def fact(self, env: 'Environment') -> Answer:
        with translate_errors("fact"):
            if self.value < 0 or self.value != self.value.to_integral_value():
                raise OtherMathError("Factorial needs a non-negative integer")
        return self._compute("fact", env, lambda: +Decimal(math.factorial(int(self.value))))

    def log(self, other: 'DecimalNum', env: 'Environment') -> Answer:
        if other.value == 1:
            raise DivideByZero()
        with translate_errors("log"):
            if self.value <= 0 or other.value <= 0:
                raise OtherMathError("Logarithm of a non-positive number")
        if other.value == 10:
            # log10 is exact for powers of ten, ln(x) / ln(10) is not
            return self._compute("log", env, self.value.log10)
        return self._compute("log", env, lambda: self.value.ln() / other.value.ln())

    def floor(self, env: 'Environment') -> Answer:
        return self._compute("floor", env, lambda: self.value.to_integral_value(rounding=ROUND_FLOOR))

    def ceil(self, env: 'Environment') -> Answer:
        return self._compute("ceil", env, lambda: self.value.to_integral_value(rounding=ROUND_CEILING))

    def round(self, env: 'Environment') -> Answer:
        return self._compute("round", env, lambda: self.value.to_integral_value(rounding=ROUND_HALF_UP))
