"""Product ORM: the persisted product document and its write-time validation.

Invariants:
    - id is a UUID generated on insert, unique, never reused
    - name, brand, category are non-empty; price is finite and >= 0
    - in_stock defaults to True when the insert omits it
    - seq is a monotonic autoincrement key; it alone orders list results

Design Decisions:
    - @validates runs on every attribute write (insert and partial update), so the
      store rejects bad data even when a caller skips the schema layer
    - CheckConstraints mirror the validators for writes that bypass the ORM
    - sqlalchemy.Uuid over the postgresql type: native on PostgreSQL, CHAR(32) on SQLite
    - Text columns: no length cap, so long names are accepted on every backend
    - Integer primary key for seq: SQLite only autoincrements an INTEGER PRIMARY KEY
"""

import math
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from product_api.db.base import Base


class ProductValidationError(ValueError):
    """A field value the store refuses to persist."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Product validation failed: {field}: {message}")
        self.field = field


class Product(Base):
    """Product document."""
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("length(name) > 0", name="ck_products_name_not_empty"),
        CheckConstraint("length(brand) > 0", name="ck_products_brand_not_empty"),
        CheckConstraint("length(category) > 0", name="ck_products_category_not_empty"),
    )

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, index=True, nullable=False, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    brand: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    in_stock: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @validates("name", "brand", "category")
    def validate_text(self, key: str, value: str | None) -> str:
        if value is None or not str(value):
            raise ProductValidationError(key, f"{key.capitalize()} Required")
        return value

    @validates("price")
    def validate_price(self, key: str, value: float | None) -> float:
        if value is None:
            raise ProductValidationError(key, "Price Required")
        if math.isnan(value) or math.isinf(value):
            raise ProductValidationError(key, "Price must be a finite number")
        if value < 0:
            raise ProductValidationError(key, "Price cannot be negative")
        return value

    @validates("in_stock")
    def validate_in_stock(self, key: str, value: bool | None) -> bool:
        # Explicit None on insert means "not supplied"
        return True if value is None else value
