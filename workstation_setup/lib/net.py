from __future__ import annotations

import logging
from typing import Mapping, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def run_remote_installer(
    url: str,
    *,
    args: Sequence[str] = (),
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    """Fetch an installer script over HTTPS and run it with bash."""

    if not url.startswith("https://"):
        raise ValueError(f"Refusing to fetch installer over a non-HTTPS URL: {url}")

    script = 'set -euo pipefail; curl --proto "=https" --tlsv1.2 -fsSL "$1" | bash -s -- "${@:2}"'
    run_cmd(["bash", "-c", script, "install", url, *args], env=env, dry_run=dry_run)
