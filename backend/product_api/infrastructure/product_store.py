"""SQL Product Store: the ProductStore protocol over an async SQLAlchemy session.

Invariants:
    - One public call = one unit of work = at most one commit
    - Every failure (driver, constraint, field validation, filter cast) is rolled back
      and re-raised as StoreError with the stringified cause; no retries
    - "Not found" returns None; the handler decides the status code
    - Results are schema Products, never live ORM rows

Design Decisions:
    - Session injected per request (get_db): the store holds no connection of its own
    - Partial update assigns attributes on the loaded row so ORM validators run on write
    - Rows are addressed by their public UUID; the integer seq key never leaves the store
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.core.domain_types import ProductId, RawFilter
from product_api.core.errors import ErrorContext, StoreError
from product_api.core.identifiers import is_valid_id, parse_id
from product_api.core.product_filter import coerce_filter
from product_api.models.product import Product as ProductModel
from product_api.schemas.product import Product, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class SqlProductStore:
    """Product persistence backed by the products table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def is_valid_id(self, product_id: str) -> bool:
        return is_valid_id(product_id)

    async def find(self, filters: RawFilter) -> list[Product]:
        """All products matching every filter, in insertion order."""
        async with self._store_call("find"):
            coerced = coerce_filter(filters)
            if coerced is None:
                return []
            result = await self.db.execute(
                select(ProductModel)
                .filter_by(**coerced)
                .order_by(ProductModel.seq),
            )
            return [Product.model_validate(row) for row in result.scalars().all()]

    async def find_by_id(self, product_id: ProductId) -> Product | None:
        async with self._store_call("find_by_id", product_id):
            row = await self._get_row(product_id)
            return Product.model_validate(row) if row else None

    async def insert(self, fields: ProductCreate) -> Product:
        """Insert a product; the store assigns the id and the in_stock default."""
        async with self._store_call("insert"):
            row = ProductModel(
                name=fields.name,
                brand=fields.brand,
                category=fields.category,
                price=fields.price,
                in_stock=True if fields.in_stock is None else fields.in_stock,
            )
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
            logger.info(
                "Product inserted", extra={"product_id": str(row.id)},
            )
            return Product.model_validate(row)

    async def update_by_id(
        self, product_id: ProductId, changes: ProductUpdate,
    ) -> Product | None:
        """Overwrite only the supplied fields and return the new state."""
        async with self._store_call("update_by_id", product_id):
            row = await self._get_row(product_id)
            if row is None:
                return None
            for attribute, value in changes.changes().items():
                setattr(row, attribute, value)
            await self.db.commit()
            await self.db.refresh(row)
            return Product.model_validate(row)

    async def delete_by_id(self, product_id: ProductId) -> Product | None:
        async with self._store_call("delete_by_id", product_id):
            row = await self._get_row(product_id)
            if row is None:
                return None
            deleted = Product.model_validate(row)
            await self.db.delete(row)
            await self.db.commit()
            return deleted

    async def _get_row(self, product_id: ProductId) -> ProductModel | None:
        result = await self.db.execute(
            select(ProductModel).where(ProductModel.id == parse_id(product_id)),
        )
        return result.scalar_one_or_none()

    @asynccontextmanager
    async def _store_call(
        self, operation: str, product_id: str | None = None,
    ) -> AsyncIterator[None]:
        """Map every failure inside one store call to StoreError."""
        context = ErrorContext(product_id=product_id, operation=operation)
        try:
            yield
        except ValueError as e:
            # Field validation, filter casts and unparseable ids
            await self.db.rollback()
            raise StoreError(str(e), operation, context) from e
        except (SQLAlchemyError, OSError) as e:
            await self.db.rollback()
            logger.error(
                f"Store {operation} failed: {e}",
                extra={"operation": operation, "product_id": product_id},
            )
            raise StoreError(str(e), operation, context) from e
