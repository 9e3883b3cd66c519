from __future__ import annotations

import logging
from typing import List

from ..config import ProvisionConfig
from ..lib.files import write_file
from ..lib.pkg import pip_install
from ..pipeline import RunContext, Step

logger = logging.getLogger(__name__)

FLAKE8_CONFIG = """\
[flake8]
max-line-length = 100
extend-ignore = E203, W503
exclude = .git,__pycache__,.venv,build,dist
"""

CLANG_FORMAT_CONFIG = """\
---
BasedOnStyle: Google
IndentWidth: 4
ColumnLimit: 100
AllowShortFunctionsOnASingleLine: Empty
...
"""


def _install_tools(ctx: RunContext) -> None:
    cfg = ctx.cfg
    pip_install(cfg.pyenv_bin, cfg.pyenv_root, cfg.python_tools, dry_run=ctx.dry_run)


def _write_linter_config(ctx: RunContext) -> None:
    write_file(ctx.cfg.linter_config, FLAKE8_CONFIG, dry_run=ctx.dry_run)


def _write_formatter_config(ctx: RunContext) -> None:
    write_file(ctx.cfg.formatter_config, CLANG_FORMAT_CONFIG, dry_run=ctx.dry_run)


def python_tool_steps(cfg: ProvisionConfig) -> List[Step]:
    return [
        Step("30_python_tools", _install_tools, description="install lint/format tools"),
        Step("31_linter_config", _write_linter_config, description=f"write {cfg.linter_config}"),
        Step("32_formatter_config", _write_formatter_config, description=f"write {cfg.formatter_config}"),
    ]
