from __future__ import annotations

import math
import os

DEBUG_PY_TRACE_ENV = "MATHEXPR_DEBUG_PY_TRACE"


def debug_py_trace_enabled() -> bool:
    """True when error reports should include the Python traceback."""
    return os.environ.get(DEBUG_PY_TRACE_ENV, "").lower() in ("1", "true", "yes", "on")


def format_real(value: float) -> str:
    """Render a float without a trailing '.0' for integral values."""
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)
