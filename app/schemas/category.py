# app/schemas/category.py
from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict


class SubCategoryCreate(BaseModel):
    """Payload pentru adăugarea unei subcategorii într-o categorie (din path)."""
    model_config = ConfigDict(
        json_schema_extra={"examples": [{"subCategory": "Power"}]},
    )

    sub_category: str = Field(..., alias="subCategory")


class SubCategoryRead(BaseModel):
    """Răspuns: `{"subCategory": ...}` (valoarea întoarsă de INSERT ... RETURNING)."""
    sub_category: str = Field(..., alias="subCategory")
