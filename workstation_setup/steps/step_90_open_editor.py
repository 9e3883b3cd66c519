from __future__ import annotations

import logging
from typing import List

from ..config import ProvisionConfig
from ..lib.command import run_cmd, which
from ..pipeline import RunContext, Step

logger = logging.getLogger(__name__)


def _open_editor(ctx: RunContext) -> None:
    editor = ctx.cfg.editor
    if not editor:
        logger.info("No editor configured; done")
        return
    if not which(editor):
        logger.warning("Editor %s not on PATH; open %s manually", editor, ctx.cfg.scratch_dir)
        return
    # Inherit the terminal so console editors can draw.
    run_cmd([editor, str(ctx.cfg.scratch_dir)], capture=False, dry_run=ctx.dry_run)


def editor_steps(cfg: ProvisionConfig) -> List[Step]:
    return [Step("90_open_editor", _open_editor, description="hand off to editor")]
