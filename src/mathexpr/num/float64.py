"""Default numeric backend: IEEE double precision. Implements every operation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

from ..answer import Answer, Single
from ..errors import CmpError, DivideByZero, OtherMathError
from ..utils import format_real, round_half_away
from .base import Num, signed_roots, translate_errors

if TYPE_CHECKING:
    from ..environment import Environment


def float_cmp(a: float, b: float) -> int:
    """
    Compare two floats. NaN is an error; +inf is greater than everything
    except +inf, -inf is less than everything except -inf.
    """
    if math.isnan(a) or math.isnan(b):
        raise CmpError("A NaN value was attempted to be used as an operand")

    if math.isinf(a):
        if a > 0:
            return 0 if (math.isinf(b) and b > 0) else 1
        return 0 if (math.isinf(b) and b < 0) else -1

    if math.isinf(b):
        return -float_cmp(b, a)

    return (a > b) - (a < b)


@dataclass(frozen=True)
class Float(Num):
    value: float

    def __str__(self) -> str:
        return format_real(self.value)

    def __float__(self) -> float:
        return self.value

    def _single(self, value: float) -> Answer:
        return Single(Float(value))

    @classmethod
    def from_f64(cls, value: float, env: 'Environment') -> Answer:
        return Single(cls(float(value)))

    @classmethod
    def from_f64_complex(cls, value: Tuple[float, float], env: 'Environment') -> Answer:
        return Single(cls(float(value[0])))

    def tryord(self, other: 'Float', env: 'Environment') -> int:
        return float_cmp(self.value, other.value)

    def add(self, other: 'Float', env: 'Environment') -> Answer:
        return self._single(self.value + other.value)

    def sub(self, other: 'Float', env: 'Environment') -> Answer:
        return self._single(self.value - other.value)

    def mul(self, other: 'Float', env: 'Environment') -> Answer:
        return self._single(self.value * other.value)

    def div(self, other: 'Float', env: 'Environment') -> Answer:
        if other.value == 0.0:
            raise DivideByZero()
        return self._single(self.value / other.value)

    def pow(self, other: 'Float', env: 'Environment') -> Answer:
        if self.value == 0.0 and other.value < 0:
            raise DivideByZero()
        with translate_errors("pow"):
            return self._single(math.pow(self.value, other.value))

    def sqrt(self, env: 'Environment') -> Answer:
        if self.value < 0:
            raise OtherMathError("Square root of a negative number")
        root = math.sqrt(self.value)
        return signed_roots(Float(root), Float(-root), env.config.sqrt_both)

    def nrt(self, other: 'Float', env: 'Environment') -> Answer:
        n = other.value
        if n == 0:
            raise DivideByZero()

        odd = n.is_integer() and int(n) % 2 == 1
        even = n.is_integer() and int(n) % 2 == 0
        if self.value < 0 and not odd:
            raise OtherMathError("Even root of a negative number")

        with translate_errors("nrt"):
            root = math.copysign(abs(self.value) ** (1.0 / n), self.value)

        return signed_roots(Float(root), Float(-root), even and env.config.sqrt_both)

    def abs(self, env: 'Environment') -> Answer:
        return self._single(abs(self.value))

    def fact(self, env: 'Environment') -> Answer:
        x = self.value
        with translate_errors("fact"):
            if x.is_integer():
                if x < 0:
                    raise OtherMathError("Factorial of a negative integer")
                return self._single(float(math.factorial(int(x))))
            return self._single(math.gamma(x + 1.0))

    def sin(self, env: 'Environment') -> Answer:
        with translate_errors("sin"):
            return self._single(math.sin(self.value))

    def cos(self, env: 'Environment') -> Answer:
        with translate_errors("cos"):
            return self._single(math.cos(self.value))

    def tan(self, env: 'Environment') -> Answer:
        with translate_errors("tan"):
            return self._single(math.tan(self.value))

    def asin(self, env: 'Environment') -> Answer:
        with translate_errors("asin"):
            return self._single(math.asin(self.value))

    def acos(self, env: 'Environment') -> Answer:
        with translate_errors("acos"):
            return self._single(math.acos(self.value))

    def atan(self, env: 'Environment') -> Answer:
        return self._single(math.atan(self.value))

    def atan2(self, other: 'Float', env: 'Environment') -> Answer:
        return self._single(math.atan2(self.value, other.value))

    def log(self, other: 'Float', env: 'Environment') -> Answer:
        if other.value == 1.0:
            raise DivideByZero()
        with translate_errors("log"):
            if other.value == 10.0:
                return self._single(math.log10(self.value))
            return self._single(math.log(self.value, other.value))

    def floor(self, env: 'Environment') -> Answer:
        with translate_errors("floor"):
            return self._single(float(math.floor(self.value)))

    def ceil(self, env: 'Environment') -> Answer:
        with translate_errors("ceil"):
            return self._single(float(math.ceil(self.value)))

    def round(self, env: 'Environment') -> Answer:
        with translate_errors("round"):
            return self._single(round_half_away(self.value))
