# app/crud/category.py
from __future__ import annotations

from decimal import Decimal
from typing import List

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from app.models.product import Product

# Valorile fixe ale rândului placeholder care "materializează" o subcategorie.
PLACEHOLDER_PRODUCT = {
    "name": "Dummy Product",
    "price": Decimal("0"),
    "sku": "DUMMY-SKU",
    "description": "Dummy description",
    "image": "",
    "disabled": True,
}


def list_categories(db: Session) -> List[str]:
    """SELECT DISTINCT category; include rândurile dezactivate, fără sortare."""
    stmt = select(Product.category).distinct()
    return list(db.execute(stmt).scalars().all())


def list_sub_categories(db: Session, category: str) -> List[str]:
    """
    SELECT DISTINCT sub_category WHERE category = :category (potrivire exactă).
    Categorie fără produse -> listă goală.
    """
    stmt = select(Product.sub_category).where(Product.category == category).distinct()
    return list(db.execute(stmt).scalars().all())


def create_sub_category(db: Session, category: str, sub_category: str) -> str:
    """
    Inserează un produs placeholder dezactivat pentru perechea (category, sub_category).
    Nu e idempotent: două apeluri -> două rânduri; listarea rămâne distinctă.
    """
    stmt = (
        insert(Product)
        .values(category=category, sub_category=sub_category, **PLACEHOLDER_PRODUCT)
        .returning(Product.sub_category)
    )
    value = db.execute(stmt).scalar_one()
    db.commit()
    return value
