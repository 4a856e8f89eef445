"""
Answer algebra.

An evaluation yields either one value or an ordered list of equally valid
values (``sqrt(4)`` is both 2 and -2). Operations over answers apply to
every combination of their inputs and flatten the results in encounter
order. Nothing is deduplicated, and the first failure aborts the whole
combination.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, List, Sequence, Tuple

if TYPE_CHECKING:
    from .num.base import Num

BinaryOp = Callable[['Num', 'Num'], 'Answer']
UnaryOp = Callable[['Num'], 'Answer']


class Answer:
    """Common base for ``Single`` and ``Multiple``."""

    def values(self) -> Tuple['Num', ...]:
        raise NotImplementedError

    def __iter__(self) -> Iterator['Num']:
        return iter(self.values())

    def __len__(self) -> int:
        return len(self.values())

    @staticmethod
    def of(values: Sequence['Num']) -> 'Answer':
        """Build an answer from a list of values, collapsing one value to ``Single``."""
        if not values:
            raise ValueError("an answer needs at least one value")
        if len(values) == 1:
            return Single(values[0])
        return Multiple(tuple(values))

    def combine(self, other: 'Answer', op: BinaryOp) -> 'Answer':
        """Apply ``op`` to every (self, other) pair and flatten the results."""
        if isinstance(self, Single) and isinstance(other, Single):
            return op(self.value, other.value)

        results: List['Num'] = []
        for a in self.values():
            for b in other.values():
                results.extend(op(a, b).values())

        return Answer.of(results)

    def map(self, op: UnaryOp) -> 'Answer':
        """Apply ``op`` to every value and flatten the results."""
        if isinstance(self, Single):
            return op(self.value)

        results: List['Num'] = []
        for a in self.values():
            results.extend(op(a).values())

        return Answer.of(results)

    def unwrap(self) -> 'Num':
        """Return the only value of a ``Single``; raise ``ValueError`` for ``Multiple``."""
        if isinstance(self, Single):
            return self.value
        raise ValueError(f"expected a single value, got {self}")


@dataclass(frozen=True)
class Single(Answer):
    value: 'Num'

    def values(self) -> Tuple['Num', ...]:
        return (self.value,)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Multiple(Answer):
    items: Tuple['Num', ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, 'items', tuple(self.items))
        if len(self.items) < 2:
            raise ValueError("Multiple needs at least two values; use Single or Answer.of")

    def values(self) -> Tuple['Num', ...]:
        return self.items

    def __str__(self) -> str:
        return "{" + ", ".join(str(v) for v in self.items) + "}"
