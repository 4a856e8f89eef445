"""Complex backend on top of Python's ``complex`` and ``cmath``."""

from __future__ import annotations

import cmath
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

from ..answer import Answer, Single
from ..errors import CmpError, DivideByZero
from ..utils import format_real
from .base import Num, signed_roots, translate_errors
from .float64 import float_cmp

if TYPE_CHECKING:
    from ..environment import Environment


@dataclass(frozen=True)
class ComplexFloat(Num):
    value: complex

    def __str__(self) -> str:
        r, i = self.value.real, self.value.imag
        if i == 0:
            return format_real(r)
        if r == 0:
            return f"{format_real(i)}i"
        sign = "-" if i < 0 else "+"
        return f"{format_real(r)} {sign} {format_real(abs(i))}i"

    def __complex__(self) -> complex:
        return self.value

    def _single(self, value: complex) -> Answer:
        return Single(ComplexFloat(complex(value)))

    @classmethod
    def from_f64(cls, value: float, env: 'Environment') -> Answer:
        return Single(cls(complex(value, 0.0)))

    @classmethod
    def from_f64_complex(cls, value: Tuple[float, float], env: 'Environment') -> Answer:
        return Single(cls(complex(value[0], value[1])))

    def tryord(self, other: 'ComplexFloat', env: 'Environment') -> int:
        # Only values on the real line are ordered
        if self.value.imag != 0 or other.value.imag != 0:
            raise CmpError("Complex values with an imaginary part cannot be ordered")
        return float_cmp(self.value.real, other.value.real)

    def add(self, other: 'ComplexFloat', env: 'Environment') -> Answer:
        return self._single(self.value + other.value)

    def sub(self, other: 'ComplexFloat', env: 'Environment') -> Answer:
        return self._single(self.value - other.value)

    def mul(self, other: 'ComplexFloat', env: 'Environment') -> Answer:
        return self._single(self.value * other.value)

    def div(self, other: 'ComplexFloat', env: 'Environment') -> Answer:
        if other.value == 0:
            raise DivideByZero()
        return self._single(self.value / other.value)

    def pow(self, other: 'ComplexFloat', env: 'Environment') -> Answer:
        with translate_errors("pow"):
            return self._single(self.value ** other.value)

    def sqrt(self, env: 'Environment') -> Answer:
        root = cmath.sqrt(self.value)
        return signed_roots(ComplexFloat(root), ComplexFloat(-root), env.config.sqrt_both)

    def nrt(self, other: 'ComplexFloat', env: 'Environment') -> Answer:
        if other.value == 0:
            raise DivideByZero()
        with translate_errors("nrt"):
            return self._single(self.value ** (1 / other.value))

    def abs(self, env: 'Environment') -> Answer:
        return self._single(abs(self.value))

    def sin(self, env: 'Environment') -> Answer:
        with translate_errors("sin"):
            return self._single(cmath.sin(self.value))

    def cos(self, env: 'Environment') -> Answer:
        with translate_errors("cos"):
            return self._single(cmath.cos(self.value))

    def tan(self, env: 'Environment') -> Answer:
        with translate_errors("tan"):
            return self._single(cmath.tan(self.value))

    def asin(self, env: 'Environment') -> Answer:
        with translate_errors("asin"):
            return self._single(cmath.asin(self.value))

    def acos(self, env: 'Environment') -> Answer:
        with translate_errors("acos"):
            return self._single(cmath.acos(self.value))

    def atan(self, env: 'Environment') -> Answer:
        with translate_errors("atan"):
            return self._single(cmath.atan(self.value))

    def log(self, other: 'ComplexFloat', env: 'Environment') -> Answer:
        if other.value == 1:
            raise DivideByZero()
        with translate_errors("log"):
            return self._single(cmath.log(self.value, other.value))
