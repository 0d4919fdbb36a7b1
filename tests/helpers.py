# tests/helpers.py
from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

import httpx


# --- Utilitare ----------------------------------------------------------------
def _dump_response(r: httpx.Response) -> str:
    """Diagnostic compact pentru mesaje de aserție."""
    try:
        j = r.json()
    except Exception:
        j = None
    snippet = (r.text or "")[:500].replace("\n", "\\n")
    return (
        f"status={r.status_code} {r.request.method} {r.request.url} "
        f"json={j!r} text='{snippet}...'"
    )


def _assert_status(r: httpx.Response, expected: int | tuple[int, ...]):
    if isinstance(expected, int):
        ok = r.status_code == expected
        exp_str = str(expected)
    else:
        ok = r.status_code in expected
        exp_str = "|".join(map(str, expected))
    assert ok, f"expected {exp_str} but got: {_dump_response(r)}"


def product_payload(
    *,
    name: Optional[str] = None,
    price: Any = 10.5,
    category: Optional[str] = None,
    sub_category: Optional[str] = None,
    sku: Optional[str] = None,
    description: Optional[str] = "test",
    image: Optional[str] = "",
) -> Dict[str, Any]:
    return {
        "name": name or f"Prod_{uuid.uuid4().hex[:8]}",
        "price": price,
        "category": category or f"Cat_{uuid.uuid4().hex[:8]}",
        "subCategory": sub_category or f"Sub_{uuid.uuid4().hex[:8]}",
        "sku": sku or f"SKU-TST-{uuid.uuid4().hex[:10]}",
        "description": description,
        "image": image,
    }


def create_product(c: httpx.Client, **overrides: Any) -> Dict[str, Any]:
    payload = product_payload(**overrides)
    r = c.post("/api/products", json=payload)
    _assert_status(r, 201)
    j = r.json()
    assert isinstance(j.get("id"), int), j
    assert j["sku"] == payload["sku"], j
    return j


