"""Product Handler: list, get, create, update, delete over an injected ProductStore.

Invariants:
    - Stateless: the store is the only source of truth, injected per request
    - Each operation is validate -> one store call -> shape response
    - Ids are checked with store.is_valid_id BEFORE the store is called
    - ValidationError (400), NotFoundError (404), StoreError (500) are all caught here
      and returned as HandlerResult; none escape to the caller
    - No retries: a store failure is reported immediately

Design Decisions:
    - HandlerResult instead of raising: the status/body pair is the contract, the
      router only serializes it (ADR: transport-agnostic core)
    - Empty List result is 404, not an empty 200: clients rely on it to tell
      "nothing matched" from "request failed"
"""

import logging
from dataclasses import dataclass
from typing import Any

from product_api.core.domain_types import ProductId, RawFilter
from product_api.core.errors import (
    ErrorContext, ErrorSeverity, NotFoundError, ProductApiError, StoreError,
    ValidationError,
)
from product_api.core.repository_protocols import ProductStore
from product_api.core.validate_product import (
    validate_create_payload, validate_update_payload,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


@dataclass(frozen=True)
class HandlerResult:
    """Status code plus JSON-ready body for one operation."""
    status_code: int
    body: Any


class ProductHandler:
    """The five product operations."""

    def __init__(self, store: ProductStore):
        self.store = store

    async def list_products(self, filters: RawFilter | None = None) -> HandlerResult:
        """All products matching every filter (AND); no filters means all."""
        try:
            products = await self.store.find(dict(filters or {}))
            if not products:
                raise NotFoundError("No products found")
            return HandlerResult(200, [p.to_json() for p in products])
        except ProductApiError as e:
            return self._error_result(e, "list")

    async def get_product(self, product_id: str) -> HandlerResult:
        try:
            pid = self._checked_id(product_id, required=False)
            product = await self.store.find_by_id(pid)
            if product is None:
                raise NotFoundError(context=ErrorContext(product_id=pid))
            return HandlerResult(200, product.to_json())
        except ProductApiError as e:
            return self._error_result(e, "get")

    async def create_product(self, payload: object) -> HandlerResult:
        """Validate the payload, then insert. The store assigns id and defaults."""
        try:
            fields = validate_create_payload(payload)
            created = await self.store.insert(fields)
            return HandlerResult(201, {
                "message": "Product created successfully",
                "product": created.to_json(),
            })
        except ProductApiError as e:
            return self._error_result(e, "create")

    async def update_product(self, product_id: str | None, payload: object) -> HandlerResult:
        """Partial overwrite: fields absent from the payload keep their values."""
        try:
            pid = self._checked_id(product_id, required=True)
            changes = validate_update_payload(payload)
            updated = await self.store.update_by_id(pid, changes)
            if updated is None:
                raise NotFoundError(context=ErrorContext(product_id=pid))
            return HandlerResult(200, {
                "message": "Product updated successfully",
                "product": updated.to_json(),
            })
        except ProductApiError as e:
            return self._error_result(e, "update")

    async def delete_product(self, product_id: str | None) -> HandlerResult:
        try:
            pid = self._checked_id(product_id, required=True)
            deleted = await self.store.delete_by_id(pid)
            if deleted is None:
                raise NotFoundError(context=ErrorContext(product_id=pid))
            return HandlerResult(200, {"message": "Product deleted successfully"})
        except ProductApiError as e:
            return self._error_result(e, "delete")

    def _checked_id(self, product_id: str | None, required: bool) -> ProductId:
        if required and not product_id:
            raise ValidationError("Id Parameter Missing", field="id")
        if not self.store.is_valid_id(product_id):
            raise ValidationError(
                "Invalid product ID", field="id",
                context=ErrorContext(product_id=str(product_id)),
            )
        return ProductId(product_id)

    def _error_result(self, exc: ProductApiError, operation: str) -> HandlerResult:
        """Shape any handled error into its status code and JSON body."""
        extra = {
            "operation": operation,
            "error_code": exc.code,
            "category": exc.category.value,
            "product_id": exc.context.product_id,
            "debug_info": exc.context.debug_info,
        }
        if isinstance(exc, StoreError):
            text = f"Product {operation} failed: {exc.detail}"
        elif isinstance(exc, ValidationError):
            text = f"Rejected product {operation}: {exc.message}"
        else:
            text = f"Product {operation}: {exc.message}"
        logger.log(_LOG_LEVELS[exc.severity], text, extra=extra)
        return HandlerResult(exc.http_status, exc.to_response())
