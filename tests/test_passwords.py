"""Tests for the command-line front end."""

import io
import os

import pytest

from onyx import passwords
from onyx.passwords import EXIT_CONFIG, EXIT_INTERRUPTED, EXIT_IO, EXIT_OK, PasswordMaker, main


def read_lines(path):
    with open(path, "rb") as fh:
        return fh.read().decode().split(os.linesep)[:-1]


def test_exhaustive_run(tmp_path):
    out = tmp_path / "out.txt"
    assert main(["-a", "d", "-l", "2", "-f", str(out), "--no-progress"]) == EXIT_OK
    lines = read_lines(out)
    assert len(lines) == 100
    assert lines[0] == "00" and lines[-1] == "99"


def test_random_run_with_exclusions(tmp_path, capsys):
    out = tmp_path / "out.txt"
    code = main(["-a", "l/d", "-e", "x/z", "-l", "3-5", "-n", "200", "-f", str(out), "--seed", "1"])
    assert code == EXIT_OK
    lines = read_lines(out)
    assert len(lines) == 200
    assert not any(s.islower() or s.isdecimal() for s in lines)
    status = capsys.readouterr().err
    assert "200 / 200 | 100%" in status


def test_extra_chars_and_unknown_codes(tmp_path, caplog):
    out = tmp_path / "out.txt"
    assert main(["-a", "q", "-c", "xy", "-e", "v", "-l", "1", "-f", str(out), "--no-progress"]) == EXIT_OK
    assert read_lines(out) == ["x", "y"]
    assert "unknown alphabet code: q" in caplog.text
    assert "unknown exclusion code: v" in caplog.text


@pytest.mark.parametrize("argv", [
    ["-a", "q", "-l", "2"],
    ["-a", "d", "-l", "5-2"],
    ["-a", "d", "-l", "0"],
    ["-a", "d", "-l", "two"],
    ["-a", "d", "-l", "2", "-n", "0"],
    ["-a", "d", "-e", "z", "-l", "2", "-n", "10"],
])
def test_configuration_errors(tmp_path, argv):
    out = tmp_path / "out.txt"
    assert main(argv + ["-f", str(out)]) == EXIT_CONFIG
    assert not out.exists()


def test_unwritable_output(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    assert main(["-a", "d", "-l", "1", "-f", str(blocker / "out.txt")]) == EXIT_IO


def test_interrupted_exit_code(tmp_path, monkeypatch):
    from onyx.engine import RunResult

    def interrupted(config, sink, reporter):
        sink.close()
        return RunResult(3, 10, True)

    monkeypatch.setattr(passwords, "generate", interrupted)
    assert main(["-a", "d", "-l", "1", "-f", str(tmp_path / "o.txt")]) == EXIT_INTERRUPTED


def test_help_when_incomplete(capsys):
    assert main(["-a", "d"]) == EXIT_OK
    assert "usage:" in capsys.readouterr().out


def test_manual():
    out = io.StringIO()
    PasswordMaker.show_man(out)
    text = out.getvalue()
    assert "l = abcdefghijklmnopqrstuvwxyz" in text
    assert "z = all-digits" in text


@pytest.mark.parametrize("chars", ["a\n", "a\r", "a\udcff"])
def test_unprintable_extra_chars_rejected_before_output(tmp_path, chars):
    out = tmp_path / "out.txt"
    assert main(["-c", chars, "-l", "2", "-f", str(out), "--no-progress"]) == EXIT_CONFIG
    assert not out.exists()


def test_dash_writes_to_stdout(capsys):
    assert main(["-a", "d", "-l", "1", "-f", "-", "--no-progress"]) == EXIT_OK
    assert capsys.readouterr().out.split(os.linesep)[:-1] == list("0123456789")
