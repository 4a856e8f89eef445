from __future__ import annotations

import io

import pytest

from mathexpr import runner
from mathexpr.runner import main, run
from mathexpr.utils import DEBUG_PY_TRACE_ENV


def test_run_evaluates_each_line() -> None:
    assert run("1 + 1\n\n2(3)\n") == ["2", "6"]


def test_main_prints_answer(capsys: pytest.CaptureFixture[str]) -> None:
    main(["2(3 + 4)"])
    assert capsys.readouterr().out == "14\n"


def test_main_prints_multiple(capsys: pytest.CaptureFixture[str]) -> None:
    main(["sqrt(16)"])
    assert capsys.readouterr().out == "{4, -4}\n"


@pytest.mark.parametrize(
    "argv, expected",
    [
        pytest.param(["--single-sqrt", "sqrt(16)"], "4", id="single-sqrt"),
        pytest.param(["--num", "rational", "1/3 + 1/6"], "1/2", id="rational"),
        pytest.param(["--num=complex", "sqrt(-1)"], "{1i, -1i}", id="complex"),
        pytest.param(["--num", "decimal", "--precision", "5", "1/3"], "0.33333", id="decimal-precision"),
        pytest.param(["--precision=3", "--num=decimal", "2/3"], "0.667", id="decimal-precision-eq"),
    ],
)
def test_main_flags(capsys: pytest.CaptureFixture[str], argv, expected: str) -> None:
    main(argv)
    assert capsys.readouterr().out.strip() == expected


def test_main_no_implicit_reports_parse_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--no-implicit", "2x"])

    assert exc_info.value.code == 1
    assert capsys.readouterr().err == "Error: Expected another operator\n"


def test_main_reports_math_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["5 / 0"])

    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "Error: Attempted to divide by zero\n"


def test_main_traceback_toggle(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(DEBUG_PY_TRACE_ENV, "1")
    with pytest.raises(SystemExit):
        main(["nope + 1"])

    err = capsys.readouterr().err
    assert "Traceback" in err
    assert err.endswith("Error: Variable 'nope' is not defined\n")


def test_main_reads_stdin(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("1 + 2\n3!\n"))
    main(["-"])
    assert capsys.readouterr().out == "3\n6\n"


def test_main_reads_file(capsys: pytest.CaptureFixture[str], tmp_path) -> None:
    source = tmp_path / "exprs.txt"
    source.write_text("2 ^ 10\n", encoding="utf-8")
    main([str(source)])
    assert capsys.readouterr().out == "1024\n"


@pytest.mark.parametrize(
    "argv, message",
    [
        pytest.param(["--num", "octonion", "1"], "--num expects one of", id="bad-backend"),
        pytest.param(["--precision", "many", "1"], "--precision expects an integer", id="bad-precision"),
        pytest.param(["--precision", "0", "1"], "--precision must be at least 1", id="zero-precision"),
        pytest.param(["--num"], "--num flag requires a value", id="missing-backend"),
        pytest.param(["1", "2"], "Unexpected argument: 2", id="extra-argument"),
    ],
)
def test_main_usage_errors(argv, message: str) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert str(exc_info.value.code).startswith(message)


def test_main_starts_repl_without_input(monkeypatch: pytest.MonkeyPatch) -> None:
    started = []

    class _Tty(io.StringIO):
        def isatty(self) -> bool:
            return True

    monkeypatch.setattr("sys.stdin", _Tty())
    monkeypatch.setattr("mathexpr.repl.repl", lambda env: started.append(env))
    main(["--single-sqrt"])

    assert len(started) == 1
    assert started[0].config.sqrt_both is False


def test_debug_flag_configures_logging(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    calls = []
    monkeypatch.setattr(runner.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    main(["--debug", "1"])

    assert calls and calls[0]["level"] == runner.logging.DEBUG
    assert capsys.readouterr().out == "1\n"
