"""
Numeric contract.

A number type usable in expressions subclasses ``Num``. Every operation
returns an ``Answer`` (most return ``Single``; square roots may return
``Multiple``) or raises a ``MathError``. The base class implements every
operation by raising ``Unimplemented`` so a partial backend stays usable
for what it does support.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Tuple

from ..answer import Answer, Multiple, Single
from ..errors import DivideByZero, OtherMathError, Unimplemented

if TYPE_CHECKING:
    from ..environment import Environment


@contextmanager
def translate_errors(op: str) -> Iterator[None]:
    """Turn Python arithmetic exceptions raised inside the block into MathErrors."""
    try:
        yield
    except ZeroDivisionError as exc:
        raise DivideByZero() from exc
    except (ValueError, ArithmeticError) as exc:
        raise OtherMathError(f"{op}: {exc}") from exc


class Num:
    """Base class for numeric backends."""

    @classmethod
    def type_name(cls) -> str:
        return cls.__name__

    def _unimplemented(self, op: str) -> Answer:
        raise Unimplemented(op, self.type_name())

    # ---------- Constructors ----------

    @classmethod
    def from_f64(cls, value: float, env: 'Environment') -> Answer:
        raise Unimplemented("from_f64", cls.type_name())

    @classmethod
    def from_f64_complex(cls, value: Tuple[float, float], env: 'Environment') -> Answer:
        """Build from (real, imaginary). Backends without an imaginary part may drop it."""
        raise Unimplemented("from_f64_complex", cls.type_name())

    # ---------- Ordering ----------

    def tryord(self, other: 'Num', env: 'Environment') -> int:
        """Compare with ``other``: -1, 0 or 1. Raises CmpError when unorderable."""
        raise Unimplemented("tryord", self.type_name())

    # ---------- Arithmetic ----------

    def add(self, other: 'Num', env: 'Environment') -> Answer:
        return self._unimplemented("add")

    def sub(self, other: 'Num', env: 'Environment') -> Answer:
        return self._unimplemented("sub")

    def mul(self, other: 'Num', env: 'Environment') -> Answer:
        return self._unimplemented("mul")

    def div(self, other: 'Num', env: 'Environment') -> Answer:
        return self._unimplemented("div")

    def pow(self, other: 'Num', env: 'Environment') -> Answer:
        return self._unimplemented("pow")

    def sqrt(self, env: 'Environment') -> Answer:
        return self._unimplemented("sqrt")

    def nrt(self, other: 'Num', env: 'Environment') -> Answer:
        return self._unimplemented("nrt")

    def abs(self, env: 'Environment') -> Answer:
        return self._unimplemented("abs")

    def fact(self, env: 'Environment') -> Answer:
        return self._unimplemented("fact")

    # ---------- Transcendental ----------

    def sin(self, env: 'Environment') -> Answer:
        return self._unimplemented("sin")

    def cos(self, env: 'Environment') -> Answer:
        return self._unimplemented("cos")

    def tan(self, env: 'Environment') -> Answer:
        return self._unimplemented("tan")

    def asin(self, env: 'Environment') -> Answer:
        return self._unimplemented("asin")

    def acos(self, env: 'Environment') -> Answer:
        return self._unimplemented("acos")

    def atan(self, env: 'Environment') -> Answer:
        return self._unimplemented("atan")

    def atan2(self, other: 'Num', env: 'Environment') -> Answer:
        return self._unimplemented("atan2")

    def log(self, other: 'Num', env: 'Environment') -> Answer:
        """Logarithm of self in base ``other``."""
        return self._unimplemented("log")

    # ---------- Rounding ----------

    def floor(self, env: 'Environment') -> Answer:
        return self._unimplemented("floor")

    def ceil(self, env: 'Environment') -> Answer:
        return self._unimplemented("ceil")

    def round(self, env: 'Environment') -> Answer:
        return self._unimplemented("round")


def signed_roots(root: Num, negated: Num, both: bool) -> Answer:
    """Return ``root`` alone, or ``{root, -root}`` when both signs are wanted."""
    if both and root != negated:
        return Multiple([root, negated])
    return Single(root)
