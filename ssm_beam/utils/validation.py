"""Input validation and normalization utilities."""

import re
from typing import Final

S3_SCHEME: Final[str] = "s3://"

# Characters that have no business in an instance id and could enable injection
SUSPICIOUS_CHARS: Final[list[str]] = [
    "/", "\\", ";", "&", "|", "$", "`", " ", "\n", "\r", "\x00",
]


def normalize_bucket(name: str) -> str:
    """Strip an s3:// scheme prefix so bare and URI forms are interchangeable.

    Examples:
        >>> normalize_bucket("s3://artifacts")
        'artifacts'
        >>> normalize_bucket("artifacts")
        'artifacts'
    """
    bucket = re.sub(r"^s3://", "", name.strip(), flags=re.IGNORECASE)
    return bucket.rstrip("/")


def validate_instance_id(instance_id: str) -> str:
    """Validate an SSM target identifier.

    Args:
        instance_id: EC2 or managed instance id (e.g. i-1234567890abcdef0)

    Returns:
        The stripped identifier

    Raises:
        ValueError: If the id is empty or contains shell metacharacters
    """
    value = instance_id.strip()
    if not value:
        raise ValueError("Instance id cannot be empty")

    for char in SUSPICIOUS_CHARS:
        if char in value:
            raise ValueError(f"Instance id contains invalid characters: {value!r}")

    return value


def validate_remote_path(path: str) -> str:
    """Validate the destination path on the target instance.

    Raises:
        ValueError: If path is empty or contains a null byte
    """
    if not path or not path.strip():
        raise ValueError("Remote path cannot be empty")

    # Null bytes can truncate the path inside the remote shell
    if "\x00" in path:
        raise ValueError(f"Remote path contains null byte: {path!r}")

    return path
