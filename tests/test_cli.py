import errno
import io
import logging
import os

import pytest

from tabify import __version__
from tabify.cli import main, run_stdio
from tabify.config import parse_config
from tabify.errors import ConfigurationError
from tabify.models import Action, Config, Mode


def test_parse_defaults():
    cfg = parse_config([])
    assert cfg.action is Action.RUN
    assert cfg.mode is Mode.TABIFY
    assert cfg.width == 4
    assert cfg.files == []


def test_parse_mode_width_and_files():
    cfg = parse_config(["-u", "--width", "8", "a.txt", "b.txt"])
    assert cfg.mode is Mode.UNTABIFY
    assert cfg.width == 8
    assert cfg.files == ["a.txt", "b.txt"]


def test_last_mode_flag_wins():
    assert parse_config(["-u", "-t"]).mode is Mode.TABIFY
    assert parse_config(["--tabify", "--untabify"]).mode is Mode.UNTABIFY


@pytest.mark.parametrize("argv", [["-w", "four"], ["-w", "0"], ["-w", "-3"], ["-w"], ["--bogus"]])
def test_bad_arguments_raise(argv):
    with pytest.raises(ConfigurationError):
        parse_config(argv)


def test_help_and_version_are_actions():
    assert parse_config(["-h"]).action is Action.HELP
    assert parse_config(["--version"]).action is Action.VERSION


def test_main_help(capsys):
    assert main(["--help"]) == 0
    assert "--untabify" in capsys.readouterr().out


def test_main_version(capsys):
    assert main(["-V"]) == 0
    assert __version__ in capsys.readouterr().out


def test_main_bad_width_touches_nothing(tmp_path, capsys):
    target = tmp_path / "a.txt"
    target.write_bytes(b"    a\n")

    assert main(["-w", "x", str(target)]) != 0
    assert "Error:" in capsys.readouterr().err
    assert target.read_bytes() == b"    a\n"


def test_run_stdio():
    stdin = io.StringIO("\tx\n\t\ty\r\n", newline="\n")
    stdout = io.StringIO(newline="\n")

    rc = run_stdio(Config(mode=Mode.UNTABIFY, width=3), stdin, stdout)

    assert rc == 0
    assert stdout.getvalue() == "   x\n      y\r\n"


def test_main_without_files_uses_stdio(monkeypatch):
    stdout = io.StringIO()
    monkeypatch.setattr("sys.stdin", io.StringIO("    a\n"))
    monkeypatch.setattr("sys.stdout", stdout)

    assert main([]) == 0
    assert stdout.getvalue() == "\ta\n"


def test_batch_continues_after_failure(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    missing = tmp_path / "missing.txt"
    good = tmp_path / "good.txt"
    good.write_bytes(b"        g\n")

    assert main([str(missing), str(good)]) == 0

    assert good.read_bytes() == b"\t\tg\n"
    assert f"{missing}: file not found" in caplog.text


def test_batch_logs_cleanup_warning(tmp_path, monkeypatch, caplog):
    caplog.set_level(logging.INFO)
    target = tmp_path / "a.txt"
    target.write_bytes(b"    a\n")

    def cross_device(src, dst):
        raise OSError(errno.EXDEV, "Invalid cross-device link")

    def stuck_remove(path, *args, **kwargs):
        raise PermissionError(errno.EACCES, "Permission denied")

    monkeypatch.setattr(os, "replace", cross_device)
    monkeypatch.setattr(os, "remove", stuck_remove)

    assert main([str(target)]) == 0

    assert target.read_bytes() == b"\ta\n"
    warned = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warned) == 1
    assert str(target) in warned[0].getMessage()
    assert "could not be removed" in warned[0].getMessage()
