"""Shell command safety utilities."""

import shlex


def quote_path(path: str) -> str:
    """Safely quote a path for shell commands.

    Args:
        path: File system path or s3:// URI to quote

    Returns:
        Shell-safe quoted path
    """
    return shlex.quote(path)
