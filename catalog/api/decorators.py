from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import current_app, g, jsonify, request

from catalog.services.image_storage import ImageUploadError, store_image


def upload_folder() -> str:
    return current_app.config["UPLOAD_FOLDER"]


def accepts_image(field_name: str = "image") -> Callable[..., Any]:
    """Store an optional uploaded image before the view runs.

    The view finds the public path in ``g.uploaded_image`` (``None`` when no
    file was sent). A rejected upload answers the request without calling the
    view.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            g.uploaded_image = None
            file_storage = request.files.get(field_name)

            if file_storage is not None and file_storage.filename:
                try:
                    g.uploaded_image = store_image(
                        file_storage,
                        upload_folder(),
                        allowed_extensions=current_app.config["ALLOWED_IMAGE_EXTENSIONS"],
                        max_bytes=current_app.config["MAX_IMAGE_BYTES"],
                        url_prefix=current_app.config["UPLOAD_URL_PREFIX"],
                    )
                except ImageUploadError as exc:
                    current_app.logger.info("rejected image upload %r: %s", file_storage.filename, exc.message)
                    return jsonify({"message": exc.message}), exc.status_code

            return func(*args, **kwargs)

        return wrapper

    return decorator
