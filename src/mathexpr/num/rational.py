"""
Exact rational backend on ``fractions.Fraction``.

Partial: no roots, logarithms or trigonometry. Those raise Unimplemented.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING, Tuple

from ..answer import Answer, Single
from ..errors import DivideByZero, OtherMathError
from .base import Num, translate_errors

if TYPE_CHECKING:
    from ..environment import Environment


@dataclass(frozen=True)
class Rational(Num):
    value: Fraction

    def __str__(self) -> str:
        return str(self.value)

    def __float__(self) -> float:
        return float(self.value)

    def _single(self, value) -> Answer:
        return Single(Rational(Fraction(value)))

    @classmethod
    def from_f64(cls, value: float, env: 'Environment') -> Answer:
        # Go through the shortest repr so 0.1 becomes 1/10, not its binary expansion
        with translate_errors("from_f64"):
            return Single(cls(Fraction(repr(float(value)))))

    @classmethod
    def from_f64_complex(cls, value: Tuple[float, float], env: 'Environment') -> Answer:
        return cls.from_f64(value[0], env)

    def tryord(self, other: 'Rational', env: 'Environment') -> int:
        return (self.value > other.value) - (self.value < other.value)

    def add(self, other: 'Rational', env: 'Environment') -> Answer:
        return self._single(self.value + other.value)

    def sub(self, other: 'Rational', env: 'Environment') -> Answer:
        return self._single(self.value - other.value)

    def mul(self, other: 'Rational', env: 'Environment') -> Answer:
        return self._single(self.value * other.value)

    def div(self, other: 'Rational', env: 'Environment') -> Answer:
        if other.value == 0:
            raise DivideByZero()
        return self._single(self.value / other.value)

    def pow(self, other: 'Rational', env: 'Environment') -> Answer:
        if other.value.denominator != 1:
            raise OtherMathError("Rational powers need an integer exponent")
        with translate_errors("pow"):
            return self._single(self.value ** other.value.numerator)

    def abs(self, env: 'Environment') -> Answer:
        return self._single(abs(self.value))

    def fact(self, env: 'Environment') -> Answer:
        if self.value.denominator != 1 or self.value < 0:
            raise OtherMathError("Factorial needs a non-negative integer")
        return self._single(math.factorial(self.value.numerator))

    def floor(self, env: 'Environment') -> Answer:
        return self._single(math.floor(self.value))

    def ceil(self, env: 'Environment') -> Answer:
        return self._single(math.ceil(self.value))

    def round(self, env: 'Environment') -> Answer:
        half = Fraction(1, 2)
        if self.value >= 0:
            return self._single(math.floor(self.value + half))
        return self._single(-math.floor(-self.value + half))
