from __future__ import annotations

import os
import time
import uuid
from collections.abc import Collection

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename


class ImageUploadError(Exception):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def validate_image(
    file_storage: FileStorage,
    *,
    allowed_extensions: Collection[str],
    max_bytes: int,
) -> str:
    """Check the upload and return its sanitized filename.

    Raises :class:`ImageUploadError` with 400 for a bad name or extension and
    413 when the file is larger than ``max_bytes``.
    """
    filename = secure_filename(file_storage.filename or "")
    if not filename:
        raise ImageUploadError("invalid image filename")

    ext = os.path.splitext(filename)[1].lower()
    if ext not in allowed_extensions:
        allowed = ", ".join(sorted(allowed_extensions))
        raise ImageUploadError(f"only {allowed} images are allowed")

    size = _stream_size(file_storage)
    if size > max_bytes:
        raise ImageUploadError(f"image exceeds max size of {max_bytes} bytes", status_code=413)

    return filename


def store_image(
    file_storage: FileStorage,
    upload_dir: str,
    *,
    allowed_extensions: Collection[str],
    max_bytes: int,
    url_prefix: str = "/uploads",
) -> str:
    """Validate and write the upload, returning its public relative path."""
    filename = validate_image(file_storage, allowed_extensions=allowed_extensions, max_bytes=max_bytes)

    os.makedirs(upload_dir, exist_ok=True)
    stored_name = f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}_{filename}"
    file_storage.save(os.path.join(upload_dir, stored_name))
    return f"{url_prefix.rstrip('/')}/{stored_name}"


def discard_image(relative_path: str | None, upload_dir: str) -> bool:
    """Remove a file written by :func:`store_image`; True if one was removed."""
    if not relative_path:
        return False
    stored_name = os.path.basename(relative_path)
    abs_path = os.path.join(upload_dir, stored_name)
    try:
        os.remove(abs_path)
    except FileNotFoundError:
        return False
    return True


def _stream_size(file_storage: FileStorage) -> int:
    stream = file_storage.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size
