"""Validation and storage of incoming video uploads."""

import logging
import uuid
from collections.abc import Collection
from pathlib import Path

from fastapi import UploadFile

from .exceptions import UploadTooLargeError, ValidationError
from .models import UploadedVideo

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def validate_extension(filename: str, allowed: Collection[str]) -> str:
    """Return the lower-cased extension of ``filename`` or raise ValidationError."""
    extension = Path(filename).suffix.lower().lstrip(".")
    if extension not in allowed:
        raise ValidationError("Invalid file type. Only video files are allowed.")
    return extension


async def save_upload(
    upload: UploadFile,
    extension: str,
    upload_dir: Path,
    max_bytes: int,
) -> UploadedVideo:
    """
    Stream ``upload`` to a uniquely named file in ``upload_dir``.

    The partial file is removed when the upload exceeds ``max_bytes``.
    """
    if upload.size is not None and upload.size > max_bytes:
        raise UploadTooLargeError("File too large")

    upload_dir.mkdir(parents=True, exist_ok=True)
    stored_path = upload_dir / uuid.uuid4().hex

    size = 0
    try:
        with open(stored_path, "wb") as f:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    raise UploadTooLargeError("File too large")
                f.write(chunk)
    except BaseException:
        stored_path.unlink(missing_ok=True)
        raise

    logger.info(
        "Upload stored",
        extra={"file_name": upload.filename, "stored_path": str(stored_path), "size": size},
    )
    return UploadedVideo(
        original_filename=upload.filename or "",
        stored_path=stored_path,
        size=size,
        extension=extension,
    )
