"""Product Handler: validate -> one store call -> shaped response.

Invariants:
    - Malformed ids are rejected with 400 before the store is called
    - Create checks required fields before the store is called
    - Store failures become 500 with the cause in "error"
    - Empty List result is 404 "No products found"
"""

import logging
from uuid import uuid4

import pytest


async def _create(handler, **overrides):
    payload = {"name": "Pen", "brand": "Acme", "category": "Stationery", "price": 1.5}
    payload.update(overrides)
    result = await handler.create_product(payload)
    assert result.status_code == 201
    return result.body["product"]


# ─── create ──────────────────────────────────────────────────────

async def test_create_returns_201_with_assigned_id_and_default_in_stock(handler):
    result = await handler.create_product(
        {"name": "Pen", "brand": "Acme", "category": "Stationery", "price": 1.5},
    )
    assert result.status_code == 201
    assert result.body["message"] == "Product created successfully"
    product = result.body["product"]
    assert product["id"]
    assert product["inStock"] is True
    assert product["price"] == 1.5


async def test_create_accepts_zero_price(handler):
    product = await _create(handler, price=0)
    assert product["price"] == 0


async def test_create_keeps_explicit_in_stock_false(handler):
    product = await _create(handler, inStock=False)
    assert product["inStock"] is False


async def test_create_rejects_negative_price_without_store_call(handler, fake_store):
    result = await handler.create_product(
        {"name": "Pen", "brand": "Acme", "category": "Stationery", "price": -1},
    )
    assert result.status_code == 400
    assert result.body == {"message": "Price cannot be negative"}
    assert fake_store.calls == []


@pytest.mark.parametrize("missing", ["name", "brand", "category", "price"])
async def test_create_requires_every_mandatory_field(handler, fake_store, missing):
    payload = {"name": "Pen", "brand": "Acme", "category": "Stationery", "price": 1.5}
    del payload[missing]
    result = await handler.create_product(payload)
    assert result.status_code == 400
    assert result.body["message"] == "Name, brand, category, and price are required"
    assert fake_store.calls == []


async def test_create_without_payload_is_bad_request(handler):
    result = await handler.create_product(None)
    assert result.status_code == 400
    assert result.body == {"message": "Product data is required"}


async def test_create_store_failure_is_server_error(handler, fake_store):
    fake_store.fail_with = "connection refused"
    result = await handler.create_product(
        {"name": "Pen", "brand": "Acme", "category": "Stationery", "price": 1.5},
    )
    assert result.status_code == 500
    assert result.body == {"message": "Server error", "error": "connection refused"}


# ─── get ─────────────────────────────────────────────────────────

async def test_get_returns_created_product(handler):
    created = await _create(handler)
    result = await handler.get_product(created["id"])
    assert result.status_code == 200
    assert result.body == created


@pytest.mark.parametrize("bad_id", ["abc", "123", "", "not-a-uuid-at-all-0000000000000"])
async def test_get_rejects_malformed_id_before_store(handler, fake_store, bad_id):
    result = await handler.get_product(bad_id)
    assert result.status_code == 400
    assert result.body == {"message": "Invalid product ID"}
    assert fake_store.calls == []


async def test_get_unknown_id_is_not_found(handler):
    result = await handler.get_product(str(uuid4()))
    assert result.status_code == 404
    assert result.body == {"message": "Product not found"}


# ─── list ────────────────────────────────────────────────────────

async def test_list_empty_store_is_not_found(handler):
    result = await handler.list_products({})
    assert result.status_code == 404
    assert result.body == {"message": "No products found"}


async def test_list_without_filters_returns_everything(handler):
    a = await _create(handler, name="Pen")
    b = await _create(handler, name="Pencil")
    result = await handler.list_products()
    assert result.status_code == 200
    assert {p["id"] for p in result.body} == {a["id"], b["id"]}


async def test_list_filters_by_equality(handler):
    await _create(handler, name="Pen", brand="Acme")
    wanted = await _create(handler, name="Pencil", brand="Bic")
    result = await handler.list_products({"brand": "Bic"})
    assert result.status_code == 200
    assert result.body == [wanted]


async def test_list_store_failure_is_server_error(handler, fake_store):
    fake_store.fail_with = "timeout"
    result = await handler.list_products({})
    assert result.status_code == 500
    assert result.body["error"] == "timeout"


# ─── update ──────────────────────────────────────────────────────

async def test_update_changes_only_supplied_fields(handler):
    created = await _create(handler)
    result = await handler.update_product(created["id"], {"price": 2.0})
    assert result.status_code == 200
    assert result.body["message"] == "Product updated successfully"
    assert result.body["product"] == {**created, "price": 2.0}


async def test_update_missing_id_is_bad_request(handler, fake_store):
    result = await handler.update_product("", {"price": 2.0})
    assert result.status_code == 400
    assert result.body == {"message": "Id Parameter Missing"}
    assert fake_store.calls == []


async def test_update_malformed_id_is_bad_request(handler, fake_store):
    result = await handler.update_product("12345", {"price": 2.0})
    assert result.status_code == 400
    assert result.body == {"message": "Invalid product ID"}
    assert fake_store.calls == []


async def test_update_unknown_id_is_not_found(handler):
    result = await handler.update_product(str(uuid4()), {"price": 2.0})
    assert result.status_code == 404


async def test_update_rejects_invalid_field_values(handler, fake_store):
    created = await _create(handler)
    fake_store.calls.clear()
    result = await handler.update_product(created["id"], {"name": ""})
    assert result.status_code == 400
    assert result.body == {"message": "name cannot be empty"}
    assert fake_store.calls == []


async def test_update_store_failure_is_server_error(handler, fake_store):
    created = await _create(handler)
    fake_store.fail_with = "write conflict"
    result = await handler.update_product(created["id"], {"price": 3})
    assert result.status_code == 500
    assert result.body == {"message": "Server error", "error": "write conflict"}


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_then_get_is_not_found(handler):
    created = await _create(handler)
    result = await handler.delete_product(created["id"])
    assert result.status_code == 200
    assert result.body == {"message": "Product deleted successfully"}

    again = await handler.get_product(created["id"])
    assert again.status_code == 404


async def test_delete_malformed_id_is_bad_request(handler, fake_store):
    result = await handler.delete_product("xyz")
    assert result.status_code == 400
    assert fake_store.calls == []


async def test_delete_unknown_id_is_not_found(handler):
    result = await handler.delete_product(str(uuid4()))
    assert result.status_code == 404
    assert result.body == {"message": "Product not found"}


# ─── logging ─────────────────────────────────────────────────────

HANDLER_LOGGER = "product_api.services.product_handler"


async def test_rejected_create_logs_missing_fields(handler, caplog):
    caplog.set_level(logging.INFO, logger=HANDLER_LOGGER)
    await handler.create_product({"price": 1})

    [record] = [r for r in caplog.records if r.name == HANDLER_LOGGER]
    assert record.levelno == logging.WARNING
    assert record.category == "validation"
    assert record.debug_info == {"missing": ["name", "brand", "category"]}


async def test_store_failure_logs_at_error(handler, fake_store, caplog):
    caplog.set_level(logging.INFO, logger=HANDLER_LOGGER)
    fake_store.fail_with = "timeout"
    await handler.list_products({})

    [record] = [r for r in caplog.records if r.name == HANDLER_LOGGER]
    assert record.levelno == logging.ERROR
    assert record.category == "database"
    assert record.operation == "list"


async def test_not_found_logs_at_info(handler, caplog):
    caplog.set_level(logging.INFO, logger=HANDLER_LOGGER)
    missing_id = str(uuid4())
    await handler.get_product(missing_id)

    [record] = [r for r in caplog.records if r.name == HANDLER_LOGGER]
    assert record.levelno == logging.INFO
    assert record.category == "resource_not_found"
    assert record.product_id == missing_id
