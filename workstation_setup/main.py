from __future__ import annotations

import argparse
import logging
from typing import Callable, Optional

from .config import load_config
from .errors import ConfigError, StepFailure
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import PipelineResult, RunContext, run_pipeline
from .steps import build_steps

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 2


def run(
    *,
    config_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    force: bool = False,
    dry_run: bool = False,
    input_fn: Callable[[str], str] = input,
) -> PipelineResult:
    """Provision the workstation, stopping at the first failed step."""

    actual_log_path = configure_logging(log_path=log_path)

    cfg = load_config(config_path)
    ctx = RunContext(cfg=cfg, dry_run=dry_run, input_fn=input_fn)
    steps = build_steps(cfg)

    logger.info(
        "Starting run: %d steps (config=%s, dry_run=%s, log=%s)",
        len(steps),
        config_path or "<defaults>",
        dry_run,
        actual_log_path,
    )

    try:
        result = run_pipeline(
            ctx=ctx,
            steps=steps,
            start_at=start_at,
            stop_after=stop_after,
            force=force,
        )
    except StepFailure as e:
        logger.error("Run aborted at step %s (exit %d)", e.step_id, e.exit_code)
        raise

    logger.info("Run complete: ran=%s skipped=%s", result.ran_steps, result.skipped_steps)
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="workstation-setup")
    p.add_argument("--config", default=None, help="Path to YAML config (defaults are used if omitted)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the append-only run log")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 40_ssh_dir)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--force", action="store_true", help="Run actions even if their check is satisfied")
    p.add_argument("--dry-run", action="store_true", help="Log actions without executing them")
    p.add_argument("--list-steps", action="store_true", help="Print step ids and exit")

    args = p.parse_args(argv)

    if args.list_steps:
        try:
            cfg = load_config(args.config)
        except ConfigError as e:
            print(f"error: {e}")
            return EXIT_CONFIG_ERROR
        for step in build_steps(cfg):
            print(f"{step.step_id}\t{step.description}")
        return 0

    try:
        run(
            config_path=args.config,
            log_path=args.log,
            start_at=args.start_at,
            stop_after=args.stop_after,
            force=args.force,
            dry_run=args.dry_run,
        )
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return EXIT_CONFIG_ERROR
    except StepFailure as e:
        return e.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
