"""Product endpoints via TestClient."""

import pytest
from conftest import API, PNG_BYTES


def _add_product(client, **fields):
    data = {"name": "Widget", "price": "5", "stock": "10"}
    data.update(fields)
    return client.post(f"{API}/products/", data=data)


def test_product_list_is_public(client, widget):
    response = client.get(f"{API}/products/")
    assert response.status_code == 200
    body = response.json()
    assert body["total_count"] == 1
    assert body["current_page"] == 1
    assert body["total_pages"] == 1
    assert body["products"][0]["name"] == "Widget"


def test_anonymous_add_product_is_unauthorized(client):
    response = _add_product(client)
    assert response.status_code == 401
    assert client.get(f"{API}/products/").json()["total_count"] == 0


def test_worker_add_product_is_forbidden(worker_client):
    response = _add_product(worker_client)
    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden: admin only"


def test_admin_adds_product(admin_client):
    response = _add_product(admin_client, description="sturdy", size="S", color="green")
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Widget"
    assert body["price"] == 5.0
    assert body["stock"] == 10
    assert body["image_url"] is None

    fetched = admin_client.get(f"{API}/products/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["color"] == "green"


def test_admin_adds_product_with_image(admin_client, storage):
    response = admin_client.post(
        f"{API}/products/",
        data={"name": "Widget", "price": "5", "stock": "10"},
        files={"image": ("widget.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 201
    assert response.json()["image_url"] == "https://res.cloudinary.test/products/fake_1.jpg"
    assert storage.uploads == ["widget.png"]


def test_missing_fields_is_validation_error(admin_client):
    response = admin_client.post(f"{API}/products/", data={"name": "Widget"})
    assert response.status_code == 400
    assert response.json()["detail"] == "name, price and stock are required"


def test_update_product(admin_client, widget):
    response = admin_client.put(f"{API}/products/{widget.id}", json={"stock": 25, "price": 7.5})
    assert response.status_code == 200
    assert response.json()["stock"] == 25
    assert response.json()["price"] == 7.5


def test_update_product_negative_stock_is_rejected(admin_client, widget):
    response = admin_client.put(f"{API}/products/{widget.id}", json={"stock": -1})
    assert response.status_code == 422


def test_delete_product(admin_client, widget):
    response = admin_client.delete(f"{API}/products/{widget.id}")
    assert response.status_code == 200
    assert admin_client.get(f"{API}/products/{widget.id}").status_code == 404
    assert admin_client.delete(f"{API}/products/{widget.id}").status_code == 404


def test_worker_cannot_delete_product(worker_client, widget):
    assert worker_client.delete(f"{API}/products/{widget.id}").status_code == 403
    assert worker_client.get(f"{API}/products/{widget.id}").status_code == 200


def test_pagination_and_search_query(admin_client):
    for i in range(1, 7):
        assert _add_product(admin_client, name=f"Bolt {i}").status_code == 201
    _add_product(admin_client, name="Nut")

    response = admin_client.get(f"{API}/products/", params={"page": 2, "limit": 4, "search": "BOLT"})
    body = response.json()
    assert body["total_count"] == 6
    assert body["total_pages"] == 2
    assert len(body["products"]) == 2

    fallback = admin_client.get(f"{API}/products/", params={"page": "-1", "limit": "x"})
    assert fallback.json()["current_page"] == 1
    assert fallback.json()["total_count"] == 7


def test_image_upload_endpoint(admin_client, storage):
    response = admin_client.post(
        f"{API}/images/upload",
        files={"image": ("shot.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 200
    assert response.json() == {"image_url": "https://res.cloudinary.test/products/fake_1.jpg"}


def test_image_upload_rejects_non_images(admin_client, storage):
    response = admin_client.post(
        f"{API}/images/upload",
        files={"image": ("notes.txt", b"hello there, not an image", "text/plain")},
    )
    assert response.status_code == 400
    assert storage.uploads == []


def test_image_upload_requires_admin(worker_client):
    response = worker_client.post(
        f"{API}/images/upload",
        files={"image": ("shot.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 403


def test_page_past_the_end_is_empty(client, widget):
    response = client.get(f"{API}/products/", params={"page": "99999999999999999999"})
    assert response.status_code == 200
    body = response.json()
    assert body["products"] == []
    assert body["total_count"] == 1


def test_search_matches_accented_names(admin_client):
    assert _add_product(admin_client, name="Éclair").status_code == 201
    _add_product(admin_client, name="Eclipse")

    body = admin_client.get(f"{API}/products/", params={"search": "éclair"}).json()
    assert [p["name"] for p in body["products"]] == ["Éclair"]


@pytest.mark.parametrize("price", ["1e999", "inf", "nan"])
def test_non_finite_price_is_rejected(admin_client, price):
    response = _add_product(admin_client, price=price)
    assert response.status_code == 400
    assert admin_client.get(f"{API}/products/").json()["total_count"] == 0


def test_update_rejects_non_finite_price(admin_client, widget):
    response = admin_client.put(
        f"{API}/products/{widget.id}",
        content='{"price": 1e999}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert admin_client.get(f"{API}/products/{widget.id}").json()["price"] == 5.0
