from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))

from mathexpr import (
    Answer,
    Config,
    Environment,
    Multiple,
    Single,
    default_environment,
    eval_str,
)

# ("number", 14) / ("multi", (2, -2)) / ("text", "{2, -2}")
Expectation = Optional[Tuple[str, object]]


def make_env(num=None, **config) -> Environment:
    """Default environment with Config overrides, e.g. make_env(implicit_multiplication=False)."""
    kwargs = {} if num is None else {"num": num}
    return default_environment(config=Config(**config), **kwargs)


def _close(actual: float, expected: float) -> bool:
    if math.isnan(expected):
        return math.isnan(actual)
    return math.isclose(actual, expected, rel_tol=1e-9, abs_tol=1e-9)


def floats(answer: Answer) -> List[float]:
    return [float(value) for value in answer.values()]


def verify_result(answer: Answer, kind: str, expected: object) -> None:
    """Assert the answer's shape and value."""
    match kind:
        case "number":
            assert isinstance(answer, Single), f"expected Single, got {answer}"
            actual = float(answer.value)
            assert _close(actual, float(expected)), f"expected {expected}, got {actual}"
            return
        case "multi":
            assert isinstance(answer, Multiple), f"expected Multiple, got {answer}"
            expected_values: Sequence[float] = expected  # type: ignore[assignment]
            actual_values = floats(answer)
            assert len(actual_values) == len(expected_values), f"expected {expected}, got {answer}"
            for got, want in zip(actual_values, expected_values):
                assert _close(got, float(want)), f"expected {expected}, got {answer}"
            return
        case "text":
            assert str(answer) == expected, f"expected {expected!r}, got {str(answer)!r}"
            return

    raise AssertionError(f"unknown expectation kind {kind!r}")


def run_case(
    source: str,
    expectation: Expectation,
    expected_exc: Optional[type],
    env: Optional[Environment] = None,
) -> None:
    """Evaluate one scenario with optional expected exception."""
    if expected_exc is not None:
        with pytest.raises(expected_exc):
            eval_str(source, env)
        return

    result = eval_str(source, env)
    if expectation is not None:
        verify_result(result, expectation[0], expectation[1])
