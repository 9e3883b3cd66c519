from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def _apt(argv: Sequence[str], *, sudo: bool) -> list[str]:
    return (["sudo"] if sudo else []) + list(argv)


def apt_update(*, sudo: bool = True, dry_run: bool = False) -> None:
    run_cmd(_apt(["apt-get", "update"], sudo=sudo), dry_run=dry_run)


def apt_install(
    packages: Sequence[str],
    *,
    sudo: bool = True,
    with_recommends: bool = False,
    dry_run: bool = False,
) -> None:
    # apt skips packages that are already at the newest version.
    if not packages:
        return
    argv = [
        "apt-get",
        "install",
        "-y",
    ]
    if not with_recommends:
        argv.append("--no-install-recommends")
    run_cmd(
        _apt([*argv, *packages], sudo=sudo),
        env={"DEBIAN_FRONTEND": "noninteractive"},
        dry_run=dry_run,
    )


def pyenv_env(pyenv_root: Path) -> dict[str, str]:
    return {"PYENV_ROOT": str(pyenv_root)}


def pip_install(
    pyenv_bin: Path,
    pyenv_root: Path,
    packages: Sequence[str],
    *,
    upgrade: bool = True,
    dry_run: bool = False,
) -> None:
    if not packages:
        return
    argv = [str(pyenv_bin), "exec", "python", "-m", "pip", "install"]
    if upgrade:
        argv.append("--upgrade")
    run_cmd([*argv, *packages], env=pyenv_env(pyenv_root), dry_run=dry_run)
