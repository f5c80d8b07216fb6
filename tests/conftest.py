from __future__ import annotations

import io

import pytest

from catalog import create_app
from catalog.config import Config
from catalog.extensions import db


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS: dict[str, object] = {}
    PRODUCTS_MISSING_AS_NOT_FOUND = False
    CORS_ORIGINS = "*"
    LOG_LEVEL = "DEBUG"


@pytest.fixture()
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture()
def config_class(upload_dir) -> type[TestConfig]:
    class _Config(TestConfig):
        UPLOAD_FOLDER = str(upload_dir)

    return _Config


@pytest.fixture()
def app(config_class):
    app = create_app(config_class)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def product_form() -> dict[str, str]:
    return {
        "name": "Basmati Rice",
        "mainTitle": "Premium Basmati",
        "subTitle": "Aged 2 years",
        "price": "499.5",
        "mrp": "650",
        "rating": "4.3",
        "reviews": "128",
        "weight": "5kg",
        "category": "Staples",
    }


def image_file(filename: str = "photo.png", size: int = 64) -> tuple[io.BytesIO, str]:
    return io.BytesIO(b"\x89PNG" + b"\x00" * max(size - 4, 0)), filename


def post_product(client, form: dict[str, str], image: tuple[io.BytesIO, str] | None = None):
    data: dict[str, object] = dict(form)
    if image is not None:
        data["image"] = image
    return client.post("/api/products", data=data, content_type="multipart/form-data")
