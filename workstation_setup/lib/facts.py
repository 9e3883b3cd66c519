"""Live environment facts read by step checks.

Nothing here caches; every call re-reads the machine. Reads run even in
dry-run mode since they never mutate anything.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from .command import run_cmd, which

logger = logging.getLogger(__name__)


def path_exists(path: Path) -> bool:
    return Path(path).exists()


def on_path(executable: str, *, extra_dirs: Iterable[Path] = ()) -> bool:
    if which(executable):
        return True
    return any((Path(d) / executable).exists() for d in extra_dirs)


def git_config_get(key: str) -> Optional[str]:
    """Return the global git config value, or None when unset."""
    r = run_cmd(["git", "config", "--global", "--get", key], check=False, quiet=True)
    if r.returncode != 0:
        return None
    return r.stdout.strip()


def file_has_line(path: Path, line: str) -> bool:
    p = Path(path)
    if not p.exists():
        return False
    return line in p.read_text(encoding="utf-8").splitlines()
