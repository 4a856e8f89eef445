from __future__ import annotations

import os

import pytest
from prompt_toolkit.document import Document

from mathexpr import NameInUse, UndefinedVariable, default_environment
from mathexpr.repl import _handle_slash, _normalize, _SlashCompleter, repl_eval
from mathexpr.repl_highlight import GROUP_STYLE, ExpressionLexer, highlight_expression
from mathexpr.utils import DEBUG_PY_TRACE_ENV


@pytest.fixture
def env_box():
    return [default_environment()]

# ---------- Evaluation ----------

def test_repl_eval_expression(env_box) -> None:
    answer, name = repl_eval("2(3 + 4)", env_box[0])
    assert str(answer) == "14"
    assert name is None


def test_repl_eval_assignment_binds_value(env_box) -> None:
    env = env_box[0]
    answer, name = repl_eval("x = 3 + 4", env)
    assert (str(answer), name) == ("7", "x")

    answer, _ = repl_eval("2x", env)
    assert str(answer) == "14"

    # Bound as a value: rebinding x does not change y
    repl_eval("y = x + 1", env)
    repl_eval("x = 100", env)
    assert str(repl_eval("y", env)[0]) == "8"


def test_repl_eval_assignment_keeps_multiple(env_box) -> None:
    answer, name = repl_eval("r = sqrt(9)", env_box[0])
    assert str(answer) == "{3, -3}"
    assert str(repl_eval("r + 1", env_box[0])[0]) == "{4, -2}"


def test_repl_eval_refuses_function_names(env_box) -> None:
    with pytest.raises(NameInUse):
        repl_eval("sin = 2", env_box[0])


def test_normalize_strips_invisible_characters() -> None:
    assert _normalize("1\u200b +\u00a0 2\r") == "1 + 2"

# ---------- Slash commands ----------

def test_not_a_slash_command(env_box) -> None:
    assert _handle_slash("1 + 1", env_box) is False


def test_implicit_toggle(env_box, capsys) -> None:
    assert _handle_slash("/implicit off", env_box)
    assert env_box[0].config.implicit_multiplication is False
    assert capsys.readouterr().out == "Implicit multiplication: off\n"

    _handle_slash("/implicit", env_box)
    assert env_box[0].config.implicit_multiplication is True


def test_sqrt_mode(env_box, capsys) -> None:
    _handle_slash("/sqrt single", env_box)
    assert str(repl_eval("sqrt(4)", env_box[0])[0]) == "2"

    _handle_slash("/sqrt both", env_box)
    assert str(repl_eval("sqrt(4)", env_box[0])[0]) == "{2, -2}"
    assert capsys.readouterr().out.splitlines() == ["Square roots: single", "Square roots: both"]


def test_vars_lists_bindings(env_box, capsys) -> None:
    repl_eval("k = 5", env_box[0])
    _handle_slash("/vars", env_box)
    out = capsys.readouterr().out.splitlines()
    assert "k = 5" in out
    assert any(line.startswith("pi = 3.14159") for line in out)


def test_reset_drops_user_variables(env_box, capsys) -> None:
    env_box[0].config.sqrt_both = False
    repl_eval("k = 5", env_box[0])

    _handle_slash("/reset", env_box)

    with pytest.raises(UndefinedVariable):
        repl_eval("k", env_box[0])
    assert env_box[0].config.sqrt_both is False
    assert "Environment reset." in capsys.readouterr().out


def test_py_traceback_toggle(env_box, capsys) -> None:
    _handle_slash("/py-traceback on", env_box)
    assert os.environ.get(DEBUG_PY_TRACE_ENV) == "1"

    _handle_slash("/py-traceback", env_box)
    assert DEBUG_PY_TRACE_ENV not in os.environ
    assert capsys.readouterr().out.splitlines() == ["Python traceback: on", "Python traceback: off"]


@pytest.mark.parametrize(
    "line",
    [
        pytest.param("/bogus", id="unknown"),
        pytest.param("/implicit maybe", id="bad-implicit"),
        pytest.param("/sqrt triple", id="bad-sqrt"),
    ],
)
def test_bad_commands_report_to_stderr(env_box, capsys, line: str) -> None:
    assert _handle_slash(line, env_box) is True
    assert capsys.readouterr().err


def test_slash_completer() -> None:
    completions = list(_SlashCompleter().get_completions(Document("/s"), None))
    assert [c.text for c in completions] == ["/sqrt"]
    assert list(_SlashCompleter().get_completions(Document("1 +"), None)) == []

# ---------- Highlighting ----------

def _styles(fragments):
    return [(style, text) for style, text in fragments if text.strip()]


def test_highlight_expression_groups() -> None:
    fragments = highlight_expression("sin(x) + 2", functions={"sin"})

    assert "".join(text for _, text in fragments) == "sin(x) + 2"
    assert _styles(fragments) == [
        (GROUP_STYLE["function"], "sin"),
        (GROUP_STYLE["punctuation"], "("),
        (GROUP_STYLE["identifier"], "x"),
        (GROUP_STYLE["punctuation"], ")"),
        (GROUP_STYLE["operator"], "+"),
        (GROUP_STYLE["number"], "2"),
    ]


def test_highlight_marks_lex_error() -> None:
    fragments = highlight_expression("1 + $ 2")

    assert "".join(text for _, text in fragments) == "1 + $ 2"
    assert fragments[-1] == (GROUP_STYLE["error"], "$ 2")


def test_lexer_handles_assignment_and_commands() -> None:
    lexer = ExpressionLexer(lambda: {"max"})

    assign = lexer.lex_document(Document("y = max(1, 2)"))(0)
    assert "".join(text for _, text in assign) == "y = max(1, 2)"
    assert (GROUP_STYLE["function"], "max") in assign

    command = lexer.lex_document(Document("/vars"))(0)
    assert command == [(GROUP_STYLE["command"], "/vars")]
