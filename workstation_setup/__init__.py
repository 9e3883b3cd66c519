"""Developer workstation setup (Python-first, step-driven).

Core design goals:
- Ordered, fail-fast steps
- Idempotent by live precondition checks
- Every mutation recorded in an append-only log
"""

__all__ = []
