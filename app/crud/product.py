# app/crud/product.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import insert, not_, select
from sqlalchemy import update as sa_update
from sqlalchemy.orm import Session

from app.models.product import Product
from app.schemas.product import ProductCreate, ProductUpdate


# Fiecare funcție = un singur statement SQL. Erorile SQLAlchemy NU sunt prinse aici:
# router-ul le transformă în răspunsul generic al endpoint-ului.


def list_products(db: Session) -> List[Product]:
    """
    Toate rândurile din `products`, nefiltrate (inclusiv cele dezactivate).
    Fără ORDER BY: ordinea e cea a store-ului.
    """
    return list(db.execute(select(Product)).scalars().all())


def create(db: Session, data: ProductCreate) -> Product:
    """INSERT ... RETURNING; `disabled` vine din default-ul serverului."""
    stmt = insert(Product).values(**data.to_row()).returning(Product)
    obj = db.execute(stmt).scalar_one()
    db.commit()
    return obj


def update(db: Session, product_id: int, data: ProductUpdate) -> Optional[Product]:
    """
    Înlocuire completă după id (toate coloanele, inclusiv `disabled`).
    Returnează None dacă nu există rândul; nu creează nimic.
    """
    stmt = (
        _update_by_id(product_id)
        .values(**data.to_row())
        .returning(Product)
    )
    obj = db.execute(stmt).scalar_one_or_none()
    db.commit()
    return obj


def toggle_disabled(db: Session, product_id: int) -> Optional[Product]:
    """
    `disabled = NOT disabled` atomic în DB (fără read-then-write).
    Returnează None dacă id-ul nu există.
    """
    stmt = (
        _update_by_id(product_id)
        .values(disabled=not_(Product.disabled))
        .returning(Product)
    )
    obj = db.execute(stmt).scalar_one_or_none()
    db.commit()
    return obj


def _update_by_id(product_id: int):
    # populate_existing: dacă rândul e deja în identity map, îl suprascriem cu valorile RETURNING
    return (
        sa_update(Product)
        .where(Product.id == product_id)
        .execution_options(synchronize_session=False, populate_existing=True)
    )
