from __future__ import annotations

from typing import List

from ..config import ProvisionConfig
from ..pipeline import Step
from .step_10_os_packages import os_package_steps
from .step_20_pyenv import pyenv_steps
from .step_30_python_tools import python_tool_steps
from .step_40_ssh_keys import ssh_steps
from .step_50_git_config import git_steps
from .step_60_toolchain_check import toolchain_steps
from .step_70_security_tools import security_tool_steps
from .step_90_open_editor import editor_steps


def build_steps(cfg: ProvisionConfig) -> List[Step]:
    """The full ordered step list. SSH keys come before git signing config."""
    return [
        *os_package_steps(cfg),
        *pyenv_steps(cfg),
        *python_tool_steps(cfg),
        *ssh_steps(cfg),
        *git_steps(cfg),
        *toolchain_steps(cfg),
        *security_tool_steps(cfg),
        *editor_steps(cfg),
    ]


__all__ = [
    "build_steps",
    "os_package_steps",
    "pyenv_steps",
    "python_tool_steps",
    "ssh_steps",
    "git_steps",
    "toolchain_steps",
    "security_tool_steps",
    "editor_steps",
]
