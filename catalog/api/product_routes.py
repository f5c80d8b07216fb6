from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from flask import Blueprint, current_app, g, request

from catalog.api.decorators import accepts_image, upload_folder
from catalog.models import Product
from catalog.services.image_storage import discard_image
from catalog.services.product_store import StorageError, get_product_store

product_bp = Blueprint("products", __name__)

# wire key -> model attribute
TEXT_FIELDS = {
    "name": "name",
    "mainTitle": "main_title",
    "subTitle": "sub_title",
    "weight": "weight",
    "category": "category",
}
FLOAT_FIELDS = {
    "price": "price",
    "mrp": "mrp",
    "rating": "rating",
}
INT_FIELDS = {
    "reviews": "reviews",
}


@product_bp.post("")
@accepts_image()
def create_product() -> tuple[dict[str, object], int]:
    fields, error = _read_product_fields()
    if error:
        _discard_uploaded_image()
        return {"message": error}, 400

    fields["image"] = g.uploaded_image
    try:
        product_id = get_product_store().insert(fields)
    except StorageError:
        current_app.logger.exception("Error saving product")
        _discard_uploaded_image()
        return {"message": "Error saving product"}, 500

    return _build_product_response(Product(id=product_id, **fields)), 200


@product_bp.get("")
def list_products() -> tuple[list[dict[str, object]] | dict[str, str], int]:
    try:
        products = get_product_store().select_all()
    except StorageError:
        current_app.logger.exception("Error fetching products")
        return {"message": "Error fetching products"}, 500

    return [_build_product_response(product) for product in products], 200


@product_bp.put("/<int:product_id>")
@accepts_image()
def update_product(product_id: int) -> tuple[dict[str, str], int]:
    fields, error = _read_product_fields()
    if error:
        _discard_uploaded_image()
        return {"message": error}, 400

    if g.uploaded_image is not None:
        fields["image"] = g.uploaded_image

    try:
        matched = get_product_store().update(product_id, fields)
    except StorageError:
        current_app.logger.exception("Error updating product %s", product_id)
        _discard_uploaded_image()
        return {"message": "Error updating product"}, 500

    if matched == 0:
        current_app.logger.warning("update matched no product with id %s", product_id)
        if _missing_as_not_found():
            _discard_uploaded_image()
            return {"message": "product not found"}, 404

    return {"message": "Product updated successfully"}, 200


@product_bp.delete("/<int:product_id>")
def delete_product(product_id: int) -> tuple[dict[str, str], int]:
    try:
        matched = get_product_store().delete(product_id)
    except StorageError:
        current_app.logger.exception("Error deleting product %s", product_id)
        return {"message": "Error deleting product"}, 500

    if matched == 0:
        current_app.logger.warning("delete matched no product with id %s", product_id)
        if _missing_as_not_found():
            return {"message": "product not found"}, 404

    return {"message": "Product deleted successfully"}, 200


def _read_product_fields() -> tuple[dict[str, Any], str | None]:
    if request.is_json:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return {}, "request body must be a JSON object"
        return _parse_product_fields(payload)
    return _parse_product_fields(request.form)


def _parse_product_fields(payload: Mapping[str, Any]) -> tuple[dict[str, Any], str | None]:
    fields: dict[str, Any] = {}

    for wire_key, attr in TEXT_FIELDS.items():
        fields[attr] = _optional_trimmed_str(payload.get(wire_key))

    for wire_key, attr in FLOAT_FIELDS.items():
        raw = _optional_trimmed_str(payload.get(wire_key))
        if raw is None:
            fields[attr] = None
            continue
        try:
            value = float(raw)
        except ValueError:
            return {}, f"{wire_key} must be a number"
        if not math.isfinite(value):
            return {}, f"{wire_key} must be a number"
        fields[attr] = value

    for wire_key, attr in INT_FIELDS.items():
        raw = _optional_trimmed_str(payload.get(wire_key))
        if raw is None:
            fields[attr] = None
            continue
        try:
            fields[attr] = int(raw)
        except ValueError:
            return {}, f"{wire_key} must be an integer"

    return fields, None


def _optional_trimmed_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def _build_product_response(product: Product) -> dict[str, object]:
    return {
        "id": product.id,
        "name": product.name,
        "mainTitle": product.main_title,
        "subTitle": product.sub_title,
        "price": product.price,
        "mrp": product.mrp,
        "rating": product.rating,
        "reviews": product.reviews,
        "weight": product.weight,
        "category": product.category,
        "image": product.image,
    }


def _discard_uploaded_image() -> None:
    if discard_image(g.get("uploaded_image"), upload_folder()):
        current_app.logger.info("removed orphaned upload %s", g.uploaded_image)


def _missing_as_not_found() -> bool:
    return bool(current_app.config.get("PRODUCTS_MISSING_AS_NOT_FOUND", False))
