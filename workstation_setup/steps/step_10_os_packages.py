from __future__ import annotations

import logging
from typing import List

from ..config import ProvisionConfig
from ..lib.pkg import apt_install, apt_update
from ..pipeline import RunContext, Step

logger = logging.getLogger(__name__)


def _update(ctx: RunContext) -> None:
    apt_update(sudo=ctx.cfg.apt_sudo, dry_run=ctx.dry_run)


def _install(ctx: RunContext) -> None:
    packages = ctx.cfg.apt_packages
    apt_install(packages, sudo=ctx.cfg.apt_sudo, dry_run=ctx.dry_run)
    logger.info("Installed %d OS packages", len(packages))


def os_package_steps(cfg: ProvisionConfig) -> List[Step]:
    return [
        Step("10_apt_update", _update, description="refresh package index"),
        Step("11_apt_packages", _install, description="install OS packages"),
    ]
