"""List Filter Coercion: casts raw query-string values to product field types.

Invariants:
    - Pure: same raw filter in, same typed filter out
    - Equality only; every entry is ANDed by the store
    - A field outside ProductField matches nothing (returns None, not an error)
    - A value that cannot be cast raises FilterCastError; the store reports it as a failure

Design Decisions:
    - Document-store cast rules: booleans accept true/false/1/0/yes/no, price accepts
      any float literal (ADR: query strings keep working for existing clients)
"""

import math

from product_api.core.domain_types import ProductField, ProductFilter, RawFilter
from product_api.core.identifiers import parse_id


_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})


class FilterCastError(ValueError):
    """A filter value does not fit its field's type."""

    def __init__(self, field: str, value: str, type_name: str):
        super().__init__(
            f'Cast to {type_name} failed for value "{value}" at path "{field}"',
        )
        self.field = field
        self.value = value


def coerce_filter(raw: RawFilter) -> ProductFilter | None:
    """Typed filter keyed by ORM attribute, or None when it can match nothing."""
    known = {f.value: f for f in ProductField}
    coerced: ProductFilter = {}
    for key, value in raw.items():
        field = known.get(key)
        if field is None:
            return None
        coerced[field.attribute] = _cast(field, value)
    return coerced


def _cast(field: ProductField, value: str):
    if field is ProductField.ID:
        try:
            return parse_id(value)
        except ValueError:
            raise FilterCastError(field.value, value, "ObjectId") from None
    if field is ProductField.PRICE:
        try:
            number = float(value)
        except ValueError:
            raise FilterCastError(field.value, value, "Number") from None
        if math.isnan(number):
            raise FilterCastError(field.value, value, "Number")
        return number
    if field is ProductField.IN_STOCK:
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise FilterCastError(field.value, value, "Boolean")
    return value
