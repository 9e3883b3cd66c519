import logging
import subprocess

import pytest

from workstation_setup.errors import CommandFailed, ToolMissingError
from workstation_setup.lib.command import run_cmd


def test_command_is_logged_with_arguments(shell, caplog):
    with caplog.at_level(logging.INFO):
        run_cmd(["git", "config", "--global", "user.name", "Ada Lovelace"])
    assert "CMD git config --global user.name 'Ada Lovelace'" in caplog.text


def test_non_zero_exit_raises(shell):
    shell.on("false", returncode=3, stderr="bad")
    with pytest.raises(CommandFailed) as excinfo:
        run_cmd(["false"])
    assert excinfo.value.returncode == 3


def test_check_false_returns_result(shell):
    shell.on("false", returncode=3)
    assert run_cmd(["false"], check=False).returncode == 3


def test_missing_tool(shell):
    shell.missing.add("clang-format")
    with pytest.raises(ToolMissingError):
        run_cmd(["clang-format", "--version"])


def test_dry_run_does_not_execute(shell):
    r = run_cmd(["rm", "-rf", "/"], dry_run=True)
    assert r.ok
    assert shell.calls == []


def test_captured_command_reads_eof_from_stdin(shell):
    run_cmd(["ssh-keygen", "-q", "-f", "id_ed25519"])
    assert shell.kwargs[0]["stdin"] is subprocess.DEVNULL
    assert shell.kwargs[0]["stdout"] is subprocess.PIPE


def test_input_text_is_fed_instead_of_devnull(shell):
    run_cmd(["cat"], input_text="y\n")
    assert shell.kwargs[0]["input"] == "y\n"
    assert "stdin" not in shell.kwargs[0]


def test_uncaptured_command_inherits_terminal(shell):
    r = run_cmd(["vim", "notes.txt"], capture=False)
    assert r.ok
    for stream in ("stdin", "stdout", "stderr"):
        assert stream not in shell.kwargs[0]
