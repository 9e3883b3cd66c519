from __future__ import annotations

import logging
import re
from typing import Callable

logger = logging.getLogger(__name__)


def matches(pattern: str, value: str) -> bool:
    return re.fullmatch(pattern, value) is not None


def prompt_until_match(
    message: str,
    pattern: str,
    *,
    input_fn: Callable[[str], str] = input,
) -> str:
    """Ask until the answer fully matches ``pattern``.

    Blocks with no timeout and no retry limit; the operator either supplies
    a valid value or interrupts the process.
    """

    regex = re.compile(pattern)
    while True:
        value = input_fn(f"{message}: ").strip()
        if regex.fullmatch(value):
            return value
        logger.warning("Value %r does not match %s; asking again", value, pattern)
