"""Staged object data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StagedObject:
    """File copy parked in the intermediate bucket."""

    bucket: str
    key: str
    locator: str  # s3://bucket/key

    @classmethod
    def at(cls, bucket: str, key: str) -> "StagedObject":
        """Build a staged object with its canonical s3:// locator."""
        return cls(bucket=bucket, key=key, locator=f"s3://{bucket}/{key}")
