# app/routers/product.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ProductNotFoundError, failure_message, store_failure
from app.crud import product as crud
from app.database import get_db
from app.schemas.product import ProductCreate, ProductRead, ProductUpdate

logger = logging.getLogger("catalog-api.products")

router = APIRouter(prefix="/products", tags=["products"])

# Limita driver-ului (INTEGER pe 64 biți); peste ea SQLite ridică OverflowError.
MAX_PRODUCT_ID = 2**63 - 1

FETCH_FAILED = "Error fetching products"
ADD_FAILED = "Error adding product"
UPDATE_FAILED = "Error updating product"
TOGGLE_FAILED = "Error toggling product status"


@router.get(
    "",
    response_model=List[ProductRead],
    summary="List all products (including disabled ones)",
)
@failure_message(FETCH_FAILED)
def list_products(db: Session = Depends(get_db)):
    try:
        return crud.list_products(db)
    except SQLAlchemyError as e:
        raise store_failure(db, FETCH_FAILED, e, logger) from e


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
@failure_message(ADD_FAILED)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    try:
        return crud.create(db, payload)
    except SQLAlchemyError as e:
        # fără diferențiere pe tipul erorii (constrângeri, conexiune, tipuri respinse)
        raise store_failure(db, ADD_FAILED, e, logger) from e


@router.put(
    "/{product_id}",
    response_model=ProductRead,
    summary="Replace a product (all fields required)",
)
@failure_message(UPDATE_FAILED)
def update_product(
    payload: ProductUpdate,
    product_id: int = Path(..., le=MAX_PRODUCT_ID),
    db: Session = Depends(get_db),
):
    """
    Înlocuire completă: toate câmpurile din body (inclusiv `disabled`) sunt scrise.
    404 dacă id-ul nu există; nu se creează niciun rând.
    """
    try:
        obj = crud.update(db, product_id, payload)
    except SQLAlchemyError as e:
        raise store_failure(db, UPDATE_FAILED, e, logger) from e
    if obj is None:
        raise ProductNotFoundError()
    return obj


@router.patch(
    "/{product_id}/toggle",
    response_model=ProductRead,
    summary="Flip the disabled flag of a product",
)
@failure_message(TOGGLE_FAILED)
def toggle_product_status(
    product_id: int = Path(..., le=MAX_PRODUCT_ID),
    db: Session = Depends(get_db),
):
    try:
        obj = crud.toggle_disabled(db, product_id)
    except SQLAlchemyError as e:
        raise store_failure(db, TOGGLE_FAILED, e, logger) from e
    if obj is None:
        raise ProductNotFoundError()
    return obj
