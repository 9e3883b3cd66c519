from __future__ import annotations

import logging
from typing import List

from ..config import ProvisionConfig
from ..lib.command import run_cmd
from ..lib.facts import git_config_get
from ..lib.prompt import matches, prompt_until_match
from ..pipeline import RunContext, Step

logger = logging.getLogger(__name__)


def git_config_set(key: str, value: str, *, dry_run: bool = False) -> None:
    run_cmd(["git", "config", "--global", key, value], dry_run=dry_run)


def literal_key(step_id: str, key: str, value: str) -> Step:
    """Step that sets ``key`` unless it already equals ``value``."""

    def check(ctx: RunContext) -> bool:
        return git_config_get(key) == value

    def action(ctx: RunContext) -> None:
        git_config_set(key, value, dry_run=ctx.dry_run)

    return Step(step_id, action, check=check, description=f"git {key}={value}")


def prompted_key(step_id: str, key: str, pattern: str, message: str) -> Step:
    """Step that asks for ``key`` until the answer matches ``pattern``.

    An existing value that already matches counts as satisfied.
    """

    def check(ctx: RunContext) -> bool:
        current = git_config_get(key)
        return current is not None and matches(pattern, current)

    def action(ctx: RunContext) -> None:
        value = prompt_until_match(message, pattern, input_fn=ctx.input_fn)
        git_config_set(key, value, dry_run=ctx.dry_run)

    return Step(step_id, action, check=check, description=f"git {key} (prompted)")


def git_steps(cfg: ProvisionConfig) -> List[Step]:
    steps: List[Step] = []
    if cfg.git_name:
        steps.append(literal_key("50_git_user_name", "user.name", cfg.git_name))
    else:
        steps.append(prompted_key("50_git_user_name", "user.name", cfg.git_name_pattern, "Git user name"))
    steps.append(prompted_key("51_git_user_email", "user.email", cfg.git_email_pattern, "Git email"))
    steps.append(literal_key("52_git_default_branch", "init.defaultBranch", cfg.git_default_branch))

    if cfg.git_sign:
        steps += [
            literal_key("53_git_gpg_format", "gpg.format", "ssh"),
            literal_key("54_git_signing_key", "user.signingkey", f"{cfg.ssh_signing_key}.pub"),
            literal_key("55_git_commit_gpgsign", "commit.gpgsign", "true"),
            literal_key("56_git_tag_gpgsign", "tag.gpgsign", "true"),
        ]
    return steps
