# tests/test_categories.py
from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from app.crud import category as category_crud
from helpers import _assert_status, _dump_response, create_product


def _store_down(*args, **kwargs):
    raise OperationalError("SELECT DISTINCT", {}, Exception("connection reset"))


def _sub_categories(client, category: str) -> list:
    r = client.get(f"/api/categories/{category}/subcategories")
    _assert_status(r, 200)
    return r.json()


@pytest.mark.timeout(10)
def test_categories_are_distinct_and_backed_by_rows(client):
    cat = f"Cat_{uuid.uuid4().hex[:8]}"
    create_product(client, category=cat)
    create_product(client, category=cat)

    r = client.get("/api/categories")
    _assert_status(r, 200)
    cats = r.json()
    assert len(cats) == len(set(cats)), cats
    assert cats.count(cat) == 1

    products = client.get("/api/products").json()
    existing = {p["category"] for p in products}
    assert set(cats) <= existing


@pytest.mark.timeout(10)
def test_categories_include_disabled_products(client):
    cat = f"Cat_{uuid.uuid4().hex[:8]}"
    p = create_product(client, category=cat)
    _assert_status(client.patch(f"/api/products/{p['id']}/toggle"), 200)

    cats = client.get("/api/categories").json()
    assert cat in cats


@pytest.mark.timeout(10)
def test_sub_categories_for_unknown_category_is_empty(client):
    assert _sub_categories(client, f"Nope_{uuid.uuid4().hex[:8]}") == []


@pytest.mark.timeout(10)
def test_sub_categories_are_distinct_and_exact_match(client):
    cat = f"Cat_{uuid.uuid4().hex[:8]}"
    create_product(client, category=cat, sub_category="Hand")
    create_product(client, category=cat, sub_category="Hand")
    create_product(client, category=cat, sub_category="Power")

    subs = _sub_categories(client, cat)
    assert sorted(subs) == ["Hand", "Power"], subs
    # potrivire exactă pe categorie
    assert _sub_categories(client, cat.upper()) == []


@pytest.mark.timeout(10)
def test_create_sub_category_twice_lists_once(client):
    cat = f"Cat_{uuid.uuid4().hex[:8]}"
    sub = f"Sub_{uuid.uuid4().hex[:8]}"

    for _ in range(2):
        r = client.post(f"/api/categories/{cat}/subcategories", json={"subCategory": sub})
        _assert_status(r, 201)
        assert r.json() == {"subCategory": sub}, _dump_response(r)

    assert _sub_categories(client, cat) == [sub]
    assert cat in client.get("/api/categories").json()

    # storage-ul păstrează două rânduri placeholder dezactivate
    placeholders = [p for p in client.get("/api/products").json() if p["category"] == cat]
    assert len(placeholders) == 2
    for p in placeholders:
        assert p["name"] == "Dummy Product"
        assert p["sku"] == "DUMMY-SKU"
        assert p["description"] == "Dummy description"
        assert p["image"] == ""
        assert float(p["price"]) == 0
        assert p["disabled"] is True
        assert p["sub_category"] == sub


@pytest.mark.timeout(10)
def test_create_sub_category_missing_body_field_returns_generic_message(client):
    r = client.post("/api/categories/Tools/subcategories", json={})
    _assert_status(r, 500)
    assert r.json() == {"message": "Error adding sub-category"}, _dump_response(r)


@pytest.mark.timeout(10)
def test_create_sub_category_constraint_violation_returns_generic_message(client, monkeypatch):
    cat = f"Cat-{uuid.uuid4().hex[:8]}"
    # placeholder fără `name` -> NOT NULL respins de DB
    monkeypatch.setitem(category_crud.PLACEHOLDER_PRODUCT, "name", None)

    r = client.post(f"/api/categories/{cat}/subcategories", json={"subCategory": "Hand"})
    _assert_status(r, 500)
    assert r.json() == {"message": "Error adding sub-category"}, _dump_response(r)
    assert _sub_categories(client, cat) == []


@pytest.mark.timeout(10)
@pytest.mark.parametrize(
    "fn, method, path, body, message",
    [
        ("list_categories", "GET", "/api/categories", None, "Error fetching categories"),
        ("list_sub_categories", "GET", "/api/categories/Tools/subcategories", None, "Error fetching sub-categories"),
        ("create_sub_category", "POST", "/api/categories/Tools/subcategories", {"subCategory": "X"}, "Error adding sub-category"),
    ],
)
def test_store_failures_return_generic_message(client, monkeypatch, fn, method, path, body, message):
    monkeypatch.setattr(category_crud, fn, _store_down)
    r = client.request(method, path, json=body)
    _assert_status(r, 500)
    assert r.json() == {"message": message}, _dump_response(r)
