from __future__ import annotations

from typing import Optional, Sequence


class ProvisionError(RuntimeError):
    pass


class ToolMissingError(ProvisionError):
    """A prerequisite executable is not installed."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"Required tool not found: {tool}")
        self.tool = tool


class CommandFailed(ProvisionError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed ({returncode}): {' '.join(self.argv)}"
        if stderr:
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)


class ConfigError(ProvisionError):
    pass


class StepFailure(ProvisionError):
    """Raised by the runner when a step's check or action fails."""

    def __init__(self, step_id: str, cause: Optional[BaseException] = None) -> None:
        self.step_id = step_id
        self.cause = cause
        super().__init__(f"Step {step_id} failed: {cause}")

    @property
    def exit_code(self) -> int:
        if isinstance(self.cause, CommandFailed) and self.cause.returncode > 0:
            return self.cause.returncode
        return 1
