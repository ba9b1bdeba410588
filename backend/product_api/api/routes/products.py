"""Products Routes: HTTP surface for the product handler.

Invariants:
    - Routes contain no validation or business logic; ProductHandler owns both
    - Status code and body come straight from HandlerResult
    - Query parameters are passed to List verbatim (last value wins on repeats)
    - Bodies are read raw so the handler, not FastAPI, words validation errors

Design Decisions:
    - One ProductHandler per request, built over the request's AsyncSession
      (ADR: store injected explicitly, no module-level connection)
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.infrastructure.database import get_db
from product_api.infrastructure.product_store import SqlProductStore
from product_api.services.product_handler import HandlerResult, ProductHandler

router = APIRouter(prefix="/api/v1/products", tags=["products"])

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"description": "Invalid id or payload"},
    status.HTTP_404_NOT_FOUND: {"description": "Product not found"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Server error"},
}


def get_product_handler(db: AsyncSession = Depends(get_db)) -> ProductHandler:
    return ProductHandler(SqlProductStore(db))


def _respond(result: HandlerResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.get("", responses=_ERRORS)
async def list_products(
    request: Request, handler: ProductHandler = Depends(get_product_handler),
):
    """Retrieve all products, optionally filtered by exact field values."""
    return _respond(await handler.list_products(dict(request.query_params)))


@router.get("/{product_id}", responses=_ERRORS)
async def get_product(
    product_id: str, handler: ProductHandler = Depends(get_product_handler),
):
    """Retrieve a product by id."""
    return _respond(await handler.get_product(product_id))


@router.post("", status_code=status.HTTP_201_CREATED, responses=_ERRORS)
async def create_product(
    payload: Any = Body(None),
    handler: ProductHandler = Depends(get_product_handler),
):
    """Create a new product."""
    return _respond(await handler.create_product(payload))


@router.put("/{product_id}", responses=_ERRORS)
async def update_product(
    product_id: str,
    payload: Any = Body(None),
    handler: ProductHandler = Depends(get_product_handler),
):
    """Update the supplied fields of a product."""
    return _respond(await handler.update_product(product_id, payload))


@router.delete("/{product_id}", responses=_ERRORS)
async def delete_product(
    product_id: str, handler: ProductHandler = Depends(get_product_handler),
):
    """Remove a product by id."""
    return _respond(await handler.delete_product(product_id))
