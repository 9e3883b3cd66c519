from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..config import ProvisionConfig
from ..lib.command import run_cmd
from ..lib.facts import path_exists
from ..lib.files import ensure_dir
from ..pipeline import RunContext, Step

logger = logging.getLogger(__name__)


def generate_key(path: Path, *, key_type: str, comment: str, dry_run: bool = False) -> None:
    run_cmd(
        ["ssh-keygen", "-q", "-t", key_type, "-N", "", "-C", comment, "-f", str(path)],
        dry_run=dry_run,
    )


def _key_step(step_id: str, key_attr: str) -> Step:
    """Key-pair step for the ProvisionConfig path property ``key_attr``."""

    def key(cfg: ProvisionConfig) -> Path:
        return getattr(cfg, key_attr)

    def check(ctx: RunContext) -> bool:
        return path_exists(key(ctx.cfg))

    def action(ctx: RunContext) -> None:
        cfg = ctx.cfg
        generate_key(key(cfg), key_type=cfg.ssh_key_type, comment=cfg.ssh_comment, dry_run=ctx.dry_run)

    return Step(step_id, action, check=check, description="generate ssh key pair")


def _ssh_dir_exists(ctx: RunContext) -> bool:
    return path_exists(ctx.cfg.ssh_dir)


def _ensure_ssh_dir(ctx: RunContext) -> None:
    ensure_dir(ctx.cfg.ssh_dir, mode=0o700, dry_run=ctx.dry_run)


def ssh_steps(cfg: ProvisionConfig) -> List[Step]:
    return [
        Step("40_ssh_dir", _ensure_ssh_dir, check=_ssh_dir_exists, description=f"create {cfg.ssh_dir}"),
        _key_step("41_ssh_auth_key", "ssh_auth_key"),
        _key_step("42_ssh_signing_key", "ssh_signing_key"),
    ]
