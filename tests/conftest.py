from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))

from mathexpr import Environment, default_environment
from mathexpr.utils import DEBUG_PY_TRACE_ENV


@pytest.fixture
def env() -> Environment:
    """Fresh default environment (Float backend, builtins loaded)."""
    return default_environment()


@pytest.fixture(autouse=True)
def _no_py_trace(monkeypatch: pytest.MonkeyPatch) -> None:
    # Error output checks assume the traceback toggle is off
    monkeypatch.delenv(DEBUG_PY_TRACE_ENV, raising=False)
