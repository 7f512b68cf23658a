"""Staging key generation."""

import time
from pathlib import Path

DEFAULT_KEY_PREFIX = "github-actions-transfer"


def epoch_ms() -> int:
    """Current wall-clock time in whole milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def staging_key(
    local_path: str,
    *,
    prefix: str = DEFAULT_KEY_PREFIX,
    now_ms: int | None = None,
) -> str:
    """Derive a unique, traceable object key for a local file.

    Args:
        local_path: Path of the file being staged
        prefix: Key namespace inside the bucket
        now_ms: Clock reading in epoch milliseconds (default: time of call)

    Returns:
        Key of the form "<prefix>/<epoch-ms>-<basename>".

    Examples:
        >>> staging_key("dist/app.tar.gz", now_ms=1700000000123)
        'github-actions-transfer/1700000000123-app.tar.gz'
    """
    if now_ms is None:
        now_ms = epoch_ms()
    return f"{prefix.rstrip('/')}/{now_ms}-{Path(local_path).name}"
