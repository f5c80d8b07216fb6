from __future__ import annotations

from flask import Blueprint, send_from_directory

from catalog.api.decorators import upload_folder

upload_bp = Blueprint("uploads", __name__)


@upload_bp.get("/<path:filename>")
def get_uploaded_file(filename: str):
    return send_from_directory(upload_folder(), filename)
