# app/models/product.py
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Boolean, Index, Numeric, String, false
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Product(Base):
    """
    Singura entitate persistată (tabela `products`).

    Note:
    - `category` / `sub_category` nu au tabele proprii: o subcategorie există doar
      ca valoare distinctă în rândurile categoriei (inclusiv rânduri placeholder dezactivate).
    - `sku` NU e unic la acest nivel.
    - `disabled` are default pe server (false); nu ștergem niciodată fizic un rând.
    """
    __tablename__ = "products"
    __table_args__ = (
        # distinct pe sub_category filtrat după category
        Index("ix_products_category_sub_category", "category", "sub_category"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    sub_category: Mapped[str] = mapped_column(String, nullable=False)
    sku: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    image: Mapped[str | None] = mapped_column(String, nullable=True)
    disabled: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())

    def __repr__(self) -> str:
        # scurtează numele în repr pentru loguri mai curate
        name_preview = (self.name[:32] + "…") if self.name and len(self.name) > 33 else self.name
        return (
            f"<Product id={self.id!r} name={name_preview!r} sku={self.sku!r} "
            f"category={self.category!r}/{self.sub_category!r} disabled={self.disabled!r}>"
        )
