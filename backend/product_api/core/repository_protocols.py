"""Boundary Protocols: the contract between the product handler and its store.

Invariants:
    - The handler NEVER imports a concrete store; it receives one by injection
    - Every store method is one atomic call; no multi-step transactions
    - Store failures surface as StoreError (core/errors.py), never as driver exceptions
    - "Not found" is a None return, not an exception

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; is_valid_id stays sync because it is pure
"""

from typing import Protocol

from product_api.core.domain_types import ProductId, RawFilter
from product_api.schemas.product import Product, ProductCreate, ProductUpdate


class ProductStore(Protocol):
    """Contract for product persistence, implemented by infrastructure."""

    def is_valid_id(self, product_id: str) -> bool: ...

    async def find(self, filters: RawFilter) -> list[Product]: ...

    async def find_by_id(self, product_id: ProductId) -> Product | None: ...

    async def insert(self, fields: ProductCreate) -> Product: ...

    async def update_by_id(
        self, product_id: ProductId, changes: ProductUpdate,
    ) -> Product | None: ...

    async def delete_by_id(self, product_id: ProductId) -> Product | None: ...
