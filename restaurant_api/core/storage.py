# =========================================================
# IMAGE STORAGE
#
# Stores uploaded product photos and enterprise logos on disk
# under settings.UPLOAD_DIR, served back at /uploads/<filename>.
# Writes happen outside any database transaction and are never
# rolled back.
# =========================================================

import logging
import uuid
from pathlib import Path

from fastapi import UploadFile

from restaurant_api.core.config import settings
from restaurant_api.core.errors import InvalidFormat, TooLarge

logger = logging.getLogger("restaurant_api")

ALLOWED_MIMES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}

CHUNK_SIZE = 64 * 1024


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _extension(upload: UploadFile) -> str:
    # The declared type decides, never the client's filename
    return ALLOWED_MIMES[upload.content_type]


def validate_image(upload: UploadFile | None) -> None:
    if upload is None or upload.content_type not in ALLOWED_MIMES:
        raise InvalidFormat()


def save_image(upload: UploadFile, max_bytes: int | None = None) -> str:
    validate_image(upload)

    limit = settings.MAX_UPLOAD_BYTES if max_bytes is None else max_bytes
    filename = f"{uuid.uuid4()}{_extension(upload)}"
    destination = upload_dir() / filename

    written = 0
    try:
        with open(destination, "wb") as buffer:
            while True:
                chunk = upload.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > limit:
                    raise TooLarge(f"File too large, maximum of {limit} bytes")
                buffer.write(chunk)
    except TooLarge:
        destination.unlink(missing_ok=True)
        raise
    finally:
        upload.file.close()

    logger.info(f"Stored upload {filename} ({written} bytes)")

    return filename
