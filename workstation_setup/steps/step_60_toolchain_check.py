from __future__ import annotations

import logging
from typing import List

from ..config import ProvisionConfig
from ..lib.command import run_cmd
from ..lib.files import ensure_dir, write_file
from ..lib.pkg import pyenv_env
from ..pipeline import RunContext, Step

logger = logging.getLogger(__name__)

CPP_SAMPLE_NAME = "hello.cpp"
PY_SAMPLE_NAME = "hello.py"
BINARY_NAME = "hello"

# Deliberately misformatted so the formatter has something to fix.
CPP_SAMPLE = """\
#include <iostream>
#include <string>
int main(  ){std::string who="toolchain";
  std::cout<<"hello, "<<who<<std::endl;
      return 0;}
"""

PY_SAMPLE = '''\
"""Sample module used to check the Python linter."""


def greet(who: str) -> str:
    return f"hello, {who}"


if __name__ == "__main__":
    print(greet("toolchain"))
'''


def _write_samples(ctx: RunContext) -> None:
    d = ctx.cfg.scratch_dir
    ensure_dir(d, dry_run=ctx.dry_run)
    write_file(d / CPP_SAMPLE_NAME, CPP_SAMPLE, dry_run=ctx.dry_run)
    write_file(d / PY_SAMPLE_NAME, PY_SAMPLE, dry_run=ctx.dry_run)


def _compile(ctx: RunContext) -> None:
    d = ctx.cfg.scratch_dir
    run_cmd(
        [ctx.cfg.compiler, "-std=c++17", "-Wall", "-Werror", "-o", BINARY_NAME, CPP_SAMPLE_NAME],
        cwd=str(d),
        dry_run=ctx.dry_run,
    )
    run_cmd([str(d / BINARY_NAME)], cwd=str(d), dry_run=ctx.dry_run)


def _style_arg(ctx: RunContext) -> str:
    # Explicit so a scratch dir outside home still uses the written config.
    return f"--style=file:{ctx.cfg.formatter_config}"


def format_check(ctx: RunContext, *, strict: bool) -> bool:
    """Return True when the sample already matches the style."""
    r = run_cmd(
        [ctx.cfg.formatter, _style_arg(ctx), "--dry-run", "--Werror", CPP_SAMPLE_NAME],
        cwd=str(ctx.cfg.scratch_dir),
        check=strict,
        dry_run=ctx.dry_run,
    )
    if not r.ok:
        logger.info("Formatter reports a diff for %s", CPP_SAMPLE_NAME)
    return r.ok


def _format_apply(ctx: RunContext) -> None:
    run_cmd(
        [ctx.cfg.formatter, _style_arg(ctx), "-i", CPP_SAMPLE_NAME],
        cwd=str(ctx.cfg.scratch_dir),
        dry_run=ctx.dry_run,
    )


def _format_check_initial(ctx: RunContext) -> None:
    # The sample is misformatted on purpose; a diff here is expected.
    format_check(ctx, strict=False)


def _format_verify(ctx: RunContext) -> None:
    format_check(ctx, strict=True)


def _lint(ctx: RunContext) -> None:
    cfg = ctx.cfg
    run_cmd(
        [str(cfg.pyenv_bin), "exec", "flake8", "--config", str(cfg.linter_config), PY_SAMPLE_NAME],
        cwd=str(cfg.scratch_dir),
        env=pyenv_env(cfg.pyenv_root),
        dry_run=ctx.dry_run,
    )


def toolchain_steps(cfg: ProvisionConfig) -> List[Step]:
    return [
        Step("60_toolchain_samples", _write_samples, description=f"write samples to {cfg.scratch_dir}"),
        Step("61_toolchain_compile", _compile, description=f"compile {CPP_SAMPLE_NAME}"),
        Step("62_format_check", _format_check_initial, description="formatter check"),
        Step("63_format_apply", _format_apply, description="formatter apply"),
        Step("64_format_verify", _format_verify, description="formatter verify"),
        Step("65_lint_sample", _lint, description=f"lint {PY_SAMPLE_NAME}"),
    ]
