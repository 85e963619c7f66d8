"""
action-pin core library.

This package contains the core functionality:
- scanner: extraction of ``uses:`` references from workflow text
- resolver: remote version resolution with a per-run cache
- rewrite: comment-replacing, idempotent in-place rewrite
- pipeline: scan -> resolve -> rewrite orchestration
"""

__all__: list[str] = []
