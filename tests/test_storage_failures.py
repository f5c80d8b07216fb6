from __future__ import annotations

import pytest

from catalog.services.product_store import ProductStore, StorageError
from tests.conftest import image_file, post_product


def _fail(*args, **kwargs):
    raise StorageError("connection lost")


@pytest.fixture()
def broken_store(monkeypatch):
    for name in ("insert", "select_all", "update", "delete"):
        monkeypatch.setattr(ProductStore, name, _fail)


def test_create_returns_500_and_removes_upload(client, product_form, upload_dir, broken_store, caplog):
    with caplog.at_level("ERROR", logger="catalog"):
        response = post_product(client, product_form, image_file("photo.png"))

    assert response.status_code == 500
    assert response.get_json() == {"message": "Error saving product"}
    assert list(upload_dir.iterdir()) == []
    assert any("Error saving product" in record.getMessage() for record in caplog.records)


def test_list_returns_500(client, broken_store):
    response = client.get("/api/products")
    assert response.status_code == 500
    assert response.get_json() == {"message": "Error fetching products"}


def test_update_returns_500(client, product_form, broken_store):
    response = client.put("/api/products/1", data=product_form, content_type="multipart/form-data")
    assert response.status_code == 500
    assert response.get_json() == {"message": "Error updating product"}


def test_delete_returns_500(client, broken_store):
    response = client.delete("/api/products/1")
    assert response.status_code == 500
    assert response.get_json() == {"message": "Error deleting product"}


def test_service_keeps_running_after_failure(client, product_form, monkeypatch):
    monkeypatch.setattr(ProductStore, "select_all", _fail)
    assert client.get("/api/products").status_code == 500

    monkeypatch.undo()
    assert post_product(client, product_form).status_code == 200
    assert len(client.get("/api/products").get_json()) == 1
