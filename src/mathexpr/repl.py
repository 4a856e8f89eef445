"""Interactive REPL for mathexpr, powered by prompt_toolkit."""

from __future__ import annotations

import os
import re
import sys
import traceback
from typing import Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from .answer import Answer
from .environment import Environment, default_environment
from .errors import ExpressionError
from .repl_highlight import ASSIGN_RE, ExpressionLexer
from .term import Expression, Literal
from .utils import DEBUG_PY_TRACE_ENV, debug_py_trace_enabled

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/implicit": ("Toggle implicit multiplication", "[on|off]"),
    "/py-traceback": ("Toggle Python traceback on errors", "[on|off]"),
    "/reset": ("Reset variables to the defaults", ""),
    "/sqrt": ("Square roots yield both signs or one", "[both|single]"),
    "/vars": ("List bound variables", ""),
}

_ON = ("on", "1", "true", "yes")
_OFF = ("off", "0", "false", "no")


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=f"{desc} {hint}".strip(),
                )


def _toggle(arg: str, current: bool) -> Optional[bool]:
    """Parse an on/off argument; an empty argument flips ``current``. None means unrecognised."""
    if arg.lower() in _ON:
        return True
    if arg.lower() in _OFF:
        return False
    if arg == "":
        return not current
    return None


def _handle_slash(line: str, env_box: list[Environment]) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1].strip() if len(parts) > 1 else ""
    env = env_box[0]

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/py-traceback":
        enabled = _toggle(arg, debug_py_trace_enabled())
        if enabled is None:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return True

        if enabled:
            os.environ[DEBUG_PY_TRACE_ENV] = "1"
        else:
            os.environ.pop(DEBUG_PY_TRACE_ENV, None)

        state = "on" if debug_py_trace_enabled() else "off"
        print(f"Python traceback: {state}")
        return True

    if cmd == "/implicit":
        enabled = _toggle(arg, env.config.implicit_multiplication)
        if enabled is None:
            print("Usage: /implicit [on|off]", file=sys.stderr)
            return True

        env.config.implicit_multiplication = enabled
        print(f"Implicit multiplication: {'on' if enabled else 'off'}")
        return True

    if cmd == "/sqrt":
        if arg == "both":
            env.config.sqrt_both = True
        elif arg == "single":
            env.config.sqrt_both = False
        elif arg == "":
            env.config.sqrt_both = not env.config.sqrt_both
        else:
            print("Usage: /sqrt [both|single]", file=sys.stderr)
            return True

        print(f"Square roots: {'both' if env.config.sqrt_both else 'single'}")
        return True

    if cmd == "/vars":
        for name in sorted(env.vars):
            print(f"{name} = {env.vars[name]}")
        return True

    if cmd == "/reset":
        env_box[0] = default_environment(env.num, env.config)
        print("Environment reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def repl_eval(text: str, env: Environment) -> Tuple[Answer, Optional[str]]:
    """Evaluate one REPL line. Returns the answer and, for ``name = expr``, the bound name."""
    match = ASSIGN_RE.match(text)
    if match is None:
        return Expression(text, env).eval(), None

    name = match.group(2)
    answer = Expression(text[match.end():], env).eval()
    # Bind the value, not the expression, so later lines see a snapshot
    env.add_var(name, Literal(answer))
    return answer, name


def repl(env: Optional[Environment] = None) -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    # Use a mutable box so /reset can swap the environment.
    env_box: list[Environment] = [env if env is not None else default_environment()]

    history = InMemoryHistory()
    lexer = ExpressionLexer(lambda: env_box[0].funcs.keys())

    bindings = KeyBindings()

    @bindings.add("backspace")
    def _backspace(event):
        buf = event.app.current_buffer
        buf.delete_before_cursor(1)
        if buf.text.startswith("/"):
            buf.start_completion()

    session: PromptSession[str] = PromptSession(
        history=history,
        lexer=lexer,
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
    )

    print(f"mathexpr repl ({env_box[0].num.type_name()}) - Ctrl-D to exit, / for commands")

    while True:
        try:
            text = session.prompt("> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        if _handle_slash(text, env_box):
            continue

        try:
            answer, name = repl_eval(text, env_box[0])
        except ExpressionError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            if debug_py_trace_enabled():
                print("\nPython traceback:", file=sys.stderr)
                print("".join(traceback.format_tb(exc.__traceback__)), file=sys.stderr, end="")
            continue

        if name is not None:
            print(f"{name} = {answer}")
        else:
            print(answer)
