from __future__ import annotations

from typing import Dict, Type

from .base import Num, signed_roots, translate_errors
from .complexfloat import ComplexFloat
from .decimalnum import DecimalNum
from .float64 import Float, float_cmp
from .rational import Rational

BACKENDS: Dict[str, Type[Num]] = {
    "float": Float,
    "complex": ComplexFloat,
    "rational": Rational,
    "decimal": DecimalNum,
}

__all__ = [
    "BACKENDS",
    "ComplexFloat",
    "DecimalNum",
    "Float",
    "Num",
    "Rational",
    "float_cmp",
    "signed_roots",
    "translate_errors",
]
