from __future__ import annotations

import logging
from typing import Dict, List

from ..config import ProvisionConfig
from ..lib.facts import on_path
from ..lib.files import ensure_dir
from ..lib.net import run_remote_installer
from ..pipeline import RunContext, Step

logger = logging.getLogger(__name__)


def _tool_step(tool: Dict[str, str]) -> Step:
    def check(ctx: RunContext) -> bool:
        return on_path(tool["binary"], extra_dirs=[ctx.cfg.local_bin])

    def action(ctx: RunContext) -> None:
        ensure_dir(ctx.cfg.local_bin, dry_run=ctx.dry_run)
        # Both trivy and grype installers accept "-b <dir>".
        run_remote_installer(
            tool["installer_url"],
            args=["-b", str(ctx.cfg.local_bin)],
            dry_run=ctx.dry_run,
        )

    return Step(f"70_security_{tool['name']}", action, check=check, description=f"install {tool['name']}")


def security_tool_steps(cfg: ProvisionConfig) -> List[Step]:
    return [_tool_step(t) for t in cfg.security_tools]
