from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from .environment import Config, Environment, default_environment
from .errors import ExpressionError
from .num import BACKENDS
from .term import Expression
from .utils import debug_py_trace_enabled

def run(source: str, env: Optional[Environment] = None) -> List[str]:
    """Evaluate every non-blank line of ``source`` and return the rendered answers."""
    if env is None:
        env = default_environment()

    results: List[str] = []

    for line in source.splitlines():
        if not line.strip():
            continue
        results.append(str(Expression(line, env).eval()))

    return results

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal expression text.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data.strip():
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.is_file():
        return candidate.read_text(encoding="utf-8")

    return arg

def _parse_precision(value: str) -> int:
    try:
        precision = int(value)
    except ValueError:
        raise SystemExit(f"--precision expects an integer; got {value!r}") from None

    if precision < 1:
        raise SystemExit("--precision must be at least 1")
    return precision

def _parse_backend(value: str):
    try:
        return BACKENDS[value]
    except KeyError:
        choices = "|".join(BACKENDS)
        raise SystemExit(f"--num expects one of {choices}; got {value!r}") from None

def main(argv: Optional[List[str]] = None) -> None:
    config = Config()
    num = BACKENDS["float"]
    force_repl = False
    arg = None
    it = iter(sys.argv[1:] if argv is None else argv)

    for token in it:
        if token == "--no-implicit":
            config.implicit_multiplication = False
            continue

        if token == "--single-sqrt":
            config.sqrt_both = False
            continue

        if token == "--debug":
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
            continue

        if token == "--repl":
            force_repl = True
            continue

        if token.startswith("--precision="):
            config.precision = _parse_precision(token.split("=", 1)[1])
            continue

        if token == "--precision":
            try:
                config.precision = _parse_precision(next(it))
            except StopIteration:
                raise SystemExit("--precision flag requires a value") from None
            continue

        if token.startswith("--num="):
            num = _parse_backend(token.split("=", 1)[1])
            continue

        if token == "--num":
            try:
                num = _parse_backend(next(it))
            except StopIteration:
                raise SystemExit("--num flag requires a value") from None
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    env = default_environment(num, config)

    if force_repl or (arg is None and sys.stdin.isatty()):
        from .repl import repl  # prompt_toolkit is only needed interactively

        repl(env)
        return

    source = _load_source(arg)
    try:
        for line in run(source, env):
            print(line)
    except ExpressionError as exc:
        if debug_py_trace_enabled():
            traceback.print_exc()
        print(f"Error: {exc.message}", file=sys.stderr)
        raise SystemExit(1) from None

if __name__ == "__main__":
    main()
