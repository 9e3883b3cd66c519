from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..errors import CommandFailed, ToolMissingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def which(name: str) -> str | None:
    return shutil.which(name)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
    quiet: bool = False,
    capture: bool = True,
) -> CmdResult:
    """Run a command with consistent logging.

    - Logs the command at INFO (DEBUG when quiet, for read-only probes).
    - Captures stdout/stderr; they are logged at DEBUG.
    - Captured commands get stdin from /dev/null (unless input_text is
      given), so a tool that unexpectedly prompts reads EOF and fails
      instead of waiting on the terminal.
    - capture=False inherits the terminal (for interactive programs).
    - dry_run logs but does not execute.
    - A missing executable raises ToolMissingError; a non-zero exit with
      check=True raises CommandFailed.
    """

    argv_list = [str(a) for a in argv]
    logger.log(logging.DEBUG if quiet else logging.INFO, "CMD %s", fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    streams: dict = {}
    if capture:
        streams = {"stdout": subprocess.PIPE, "stderr": subprocess.PIPE}
        if input_text is None:
            streams["stdin"] = subprocess.DEVNULL
    if input_text is not None:
        streams["input"] = input_text

    try:
        p = subprocess.run(
            argv_list,
            text=True,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
            **streams,
        )
    except FileNotFoundError as e:
        raise ToolMissingError(argv_list[0]) from e

    stdout = p.stdout or ""
    stderr = p.stderr or ""
    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    if check and p.returncode != 0:
        raise CommandFailed(argv_list, p.returncode, stderr)

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)
