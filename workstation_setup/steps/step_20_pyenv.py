from __future__ import annotations

import logging
from typing import List

from ..config import ProvisionConfig
from ..lib.command import run_cmd
from ..lib.facts import file_has_line, path_exists
from ..lib.files import append_line_once
from ..lib.net import run_remote_installer
from ..lib.pkg import pyenv_env
from ..pipeline import RunContext, Step

logger = logging.getLogger(__name__)


def profile_lines(cfg: ProvisionConfig) -> List[str]:
    return [
        f'export PYENV_ROOT="{cfg.pyenv_root}"',
        'export PATH="$PYENV_ROOT/bin:$PATH"',
        'eval "$(pyenv init -)"',
        f'export PATH="{cfg.local_bin}:$PATH"',
    ]


def _pyenv_installed(ctx: RunContext) -> bool:
    # Best-effort: an existing root is taken to mean pyenv is installed.
    return path_exists(ctx.cfg.pyenv_root)


def _install_pyenv(ctx: RunContext) -> None:
    run_remote_installer(
        ctx.cfg.pyenv_installer_url,
        env=pyenv_env(ctx.cfg.pyenv_root),
        dry_run=ctx.dry_run,
    )


def _profile_done(ctx: RunContext) -> bool:
    return all(file_has_line(ctx.cfg.profile, line) for line in profile_lines(ctx.cfg))


def _update_profile(ctx: RunContext) -> None:
    for line in profile_lines(ctx.cfg):
        append_line_once(ctx.cfg.profile, line, dry_run=ctx.dry_run)


def _install_python(ctx: RunContext) -> None:
    cfg = ctx.cfg
    env = pyenv_env(cfg.pyenv_root)
    # -s: skip if the version is already installed.
    run_cmd([str(cfg.pyenv_bin), "install", "-s", cfg.python_version], env=env, dry_run=ctx.dry_run)
    run_cmd([str(cfg.pyenv_bin), "global", cfg.python_version], env=env, dry_run=ctx.dry_run)


def pyenv_steps(cfg: ProvisionConfig) -> List[Step]:
    return [
        Step("20_pyenv_install", _install_pyenv, check=_pyenv_installed, description="install pyenv"),
        Step("21_pyenv_profile", _update_profile, check=_profile_done, description=f"update {cfg.profile}"),
        Step("22_python_install", _install_python, description=f"install Python {cfg.python_version}"),
    ]
