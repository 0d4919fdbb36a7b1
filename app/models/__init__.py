# app/models/__init__.py
from app.models.product import Product

__all__ = ["Product"]
