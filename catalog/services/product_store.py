from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from catalog.models import Product

EXTENSION_KEY = "product_store"

PRODUCT_FIELDS = (
    "name",
    "main_title",
    "sub_title",
    "price",
    "mrp",
    "image",
    "rating",
    "reviews",
    "weight",
    "category",
)


class StorageError(Exception):
    """A statement against the products table failed.

    The driver exception is kept as ``__cause__``; callers only learn that the
    operation failed.
    """


class ProductStore:
    """Issues the four product statements through the pooled session.

    One instance is built by the app factory and shared by every request.
    Sessions are scoped to the application context, so requests never share
    a connection.
    """

    def __init__(self, database: SQLAlchemy) -> None:
        self._db = database

    def init_app(self, app: Flask) -> None:
        app.extensions[EXTENSION_KEY] = self

    def insert(self, fields: Mapping[str, Any]) -> int:
        product = Product(**_known_fields(fields))
        session = self._db.session
        session.add(product)
        try:
            session.flush()
            product_id = product.id
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError("insert into products failed") from exc
        return product_id

    def select_all(self) -> list[Product]:
        stmt = select(Product).order_by(Product.id.asc())
        try:
            return list(self._db.session.execute(stmt).scalars().all())
        except SQLAlchemyError as exc:
            self._db.session.rollback()
            raise StorageError("select from products failed") from exc

    def update(self, product_id: int, fields: Mapping[str, Any]) -> int:
        values = _known_fields(fields)
        if not values:
            return 0
        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return self._execute_write(stmt, "update of products failed")

    def delete(self, product_id: int) -> int:
        stmt = (
            delete(Product)
            .where(Product.id == product_id)
            .execution_options(synchronize_session=False)
        )
        return self._execute_write(stmt, "delete from products failed")

    def _execute_write(self, stmt, failure_message: str) -> int:
        session = self._db.session
        try:
            result = session.execute(stmt)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(failure_message) from exc
        return result.rowcount


def get_product_store() -> ProductStore:
    return current_app.extensions[EXTENSION_KEY]


def _known_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if key in PRODUCT_FIELDS}
