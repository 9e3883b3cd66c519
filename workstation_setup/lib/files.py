from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .facts import file_has_line

logger = logging.getLogger(__name__)


def write_file(path: Path, contents: str, *, mode: Optional[int] = None, dry_run: bool = False) -> None:
    """Write (overwrite) a file; last writer wins."""
    p = Path(path)
    if dry_run:
        logger.info("Would write %s", str(p))
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")
    if mode is not None:
        p.chmod(mode)
    logger.info("WROTE %s (%d bytes)", str(p), len(contents.encode("utf-8")))


def ensure_dir(path: Path, *, mode: int = 0o755, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would create directory %s", str(p))
        return
    p.mkdir(parents=True, exist_ok=True)
    p.chmod(mode)
    logger.info("MKDIR %s (mode=%o)", str(p), mode)


def append_line_once(path: Path, line: str, *, dry_run: bool = False) -> bool:
    """Append ``line`` unless the file already contains it. Returns True if appended."""
    p = Path(path)
    if file_has_line(p, line):
        return False
    if dry_run:
        logger.info("Would append to %s: %s", str(p), line)
        return True
    p.parent.mkdir(parents=True, exist_ok=True)
    existing = p.read_text(encoding="utf-8") if p.exists() else ""
    with p.open("a", encoding="utf-8") as f:
        if existing and not existing.endswith("\n"):
            f.write("\n")
        f.write(line + "\n")
    logger.info("APPEND %s: %s", str(p), line)
    return True
