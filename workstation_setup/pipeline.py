from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .config import ProvisionConfig
from .errors import ConfigError, StepFailure

logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    cfg: ProvisionConfig
    dry_run: bool = False
    input_fn: Callable[[str], str] = input


@dataclass(frozen=True)
class Step:
    """A single idempotent step.

    ``check`` returns True when the target condition already holds; the
    action is then skipped. A step without a check always runs.
    """

    step_id: str
    action: Callable[[RunContext], None]
    check: Optional[Callable[[RunContext], bool]] = None
    description: str = ""


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str] = field(default_factory=list)
    skipped_steps: List[str] = field(default_factory=list)


def _validate_bounds(steps: Sequence[Step], start_at: Optional[str], stop_after: Optional[str]) -> None:
    ids = [s.step_id for s in steps]
    for label, value in (("start_at", start_at), ("stop_after", stop_after)):
        if value is not None and value not in ids:
            raise ConfigError(f"Unknown step for {label}: {value}")


def run_pipeline(
    *,
    ctx: RunContext,
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    force: bool = False,
) -> PipelineResult:
    """Run steps in order; abort on the first failure.

    Checks read live state every time. Any exception from a check or an
    action is re-raised as StepFailure and no later step is attempted.
    """

    _validate_bounds(steps, start_at, stop_after)

    ran: List[str] = []
    skipped: List[str] = []

    started = start_at is None

    for step in steps:
        if not started:
            if step.step_id == start_at:
                started = True
            else:
                continue

        try:
            satisfied = (not force) and step.check is not None and step.check(ctx)
            if satisfied:
                logger.info("Skipping step %s (already satisfied)", step.step_id)
                skipped.append(step.step_id)
            else:
                logger.info("Running step %s%s", step.step_id, f": {step.description}" if step.description else "")
                step.action(ctx)
                ran.append(step.step_id)
        except StepFailure:
            raise
        except Exception as e:
            logger.error("Step %s failed: %s", step.step_id, e)
            raise StepFailure(step.step_id, e) from e

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    return PipelineResult(ran_steps=ran, skipped_steps=skipped)
