"""Object stager: local file -> intermediate S3 bucket."""

import asyncio
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from ssm_beam.errors import LocalFileError, StagingError
from ssm_beam.models import StagedObject
from ssm_beam.utils.keys import DEFAULT_KEY_PREFIX, staging_key
from ssm_beam.utils.progress import LoggingObserver
from ssm_beam.utils.validation import normalize_bucket

if TYPE_CHECKING:
    from ssm_beam.protocols import BlobStore, TransferObserver


def check_local_file(local_path: str) -> Path:
    """Ensure local_path names an existing regular file.

    Raises:
        LocalFileError: If the path is missing, unreadable, or not a file
    """
    path = Path(local_path)
    try:
        mode = path.stat().st_mode
    except OSError as e:
        raise LocalFileError(local_path, e) from e

    if not stat.S_ISREG(mode):
        raise LocalFileError(local_path, f"{local_path} is not a file")
    return path


async def stage_file(
    local_path: str,
    bucket: str,
    region: str | None = None,
    *,
    store: "BlobStore | None" = None,
    observer: "TransferObserver | None" = None,
    key_prefix: str = DEFAULT_KEY_PREFIX,
    now_ms: int | None = None,
) -> StagedObject:
    """Upload a local file to the intermediate bucket.

    Exactly one put is attempted; nothing is retried and the object is
    never removed afterwards.

    Args:
        local_path: File to stage (directories are rejected)
        bucket: Bucket name, bare or as an s3:// URI
        region: Optional AWS region for the default S3 store
        store: BlobStore to write to (default: S3BlobStore for region)
        observer: Progress observer (default: LoggingObserver)
        key_prefix: Namespace for the staging key
        now_ms: Clock reading for the staging key in epoch ms (default: time of call)

    Returns:
        StagedObject describing where the file landed

    Raises:
        LocalFileError: If local_path is not a readable regular file
        StagingError: If the default store cannot be built or the put fails
    """
    observer = observer or LoggingObserver()

    path = check_local_file(local_path)
    key = staging_key(local_path, prefix=key_prefix, now_ms=now_ms)
    staged = StagedObject.at(normalize_bucket(bucket), key)

    observer.info(f"Uploading {local_path} to {staged.locator}")

    try:
        body = path.read_bytes()
    except OSError as e:
        raise LocalFileError(local_path, e) from e

    try:
        if store is None:
            from ssm_beam.services.aws import S3BlobStore

            store = S3BlobStore.for_region(region)
        await asyncio.to_thread(store.put_object, staged.bucket, staged.key, body)
    except Exception as e:
        raise StagingError(staged.locator, e) from e

    observer.info(f"Successfully uploaded file to {staged.locator}")
    return staged
