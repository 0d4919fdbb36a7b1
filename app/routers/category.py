# app/routers/category.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import failure_message, store_failure
from app.crud import category as crud
from app.database import get_db
from app.schemas.category import SubCategoryCreate, SubCategoryRead

logger = logging.getLogger("catalog-api.categories")

router = APIRouter(prefix="/categories", tags=["categories"])

FETCH_CATEGORIES_FAILED = "Error fetching categories"
FETCH_SUB_CATEGORIES_FAILED = "Error fetching sub-categories"
ADD_SUB_CATEGORY_FAILED = "Error adding sub-category"


@router.get(
    "",
    response_model=List[str],
    summary="Distinct categories across all products",
)
@failure_message(FETCH_CATEGORIES_FAILED)
def list_categories(db: Session = Depends(get_db)):
    try:
        return crud.list_categories(db)
    except SQLAlchemyError as e:
        raise store_failure(db, FETCH_CATEGORIES_FAILED, e, logger) from e


@router.get(
    "/{category}/subcategories",
    response_model=List[str],
    summary="Distinct sub-categories of a category",
)
@failure_message(FETCH_SUB_CATEGORIES_FAILED)
def list_sub_categories(category: str, db: Session = Depends(get_db)):
    """Listă goală (nu 404) pentru o categorie fără produse."""
    try:
        return crud.list_sub_categories(db, category)
    except SQLAlchemyError as e:
        raise store_failure(db, FETCH_SUB_CATEGORIES_FAILED, e, logger) from e


@router.post(
    "/{category}/subcategories",
    response_model=SubCategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a sub-category (stored as a disabled placeholder product)",
    description="Nu e idempotent: fiecare apel inserează un rând placeholder nou.",
)
@failure_message(ADD_SUB_CATEGORY_FAILED)
def create_sub_category(category: str, payload: SubCategoryCreate, db: Session = Depends(get_db)):
    try:
        value = crud.create_sub_category(db, category, payload.sub_category)
    except SQLAlchemyError as e:
        raise store_failure(db, ADD_SUB_CATEGORY_FAILED, e, logger) from e
    return SubCategoryRead(subCategory=value)
