# app/core/errors.py
from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from fastapi import status
from sqlalchemy.orm import Session

F = TypeVar("F", bound=Callable)


class CatalogError(Exception):
    """
    Eroare la granița request-ului, randată ca `{"message": ...}`.
    - 404: id inexistent (update/toggle)
    - 500: orice eșec al store-ului sau request invalid, cu mesaj fix per endpoint
    """

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProductNotFoundError(CatalogError):
    def __init__(self) -> None:
        super().__init__("Product not found", status.HTTP_404_NOT_FOUND)


def failure_message(message: str) -> Callable[[F], F]:
    """
    Atașează endpoint-ului mesajul generic de eșec.
    Handler-ul de RequestValidationError îl folosește ca body-urile/path-urile invalide
    să primească același 500 `{"message": ...}` ca o eroare de store.
    """
    def deco(fn: F) -> F:
        fn.failure_message = message  # type: ignore[attr-defined]
        return fn
    return deco


def endpoint_failure_message(endpoint: object) -> Optional[str]:
    return getattr(endpoint, "failure_message", None)


def store_failure(db: Session, message: str, exc: Exception, log: logging.Logger) -> CatalogError:
    # rollback explicit ca sesiunea să se întoarcă curată în pool
    db.rollback()
    log.exception("%s: %s", message, exc)
    return CatalogError(message)
