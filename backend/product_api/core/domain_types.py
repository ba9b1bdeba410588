"""Domain Types: names for the values that flow between handler and store.

Invariants:
    - ProductId is the canonical text form of a store identifier
    - ProductField lists every field a List filter may name, by its JSON name

Design Decisions:
    - NewType over wrapper classes: zero runtime cost (ADR: ids cross the wire as text)
    - str Enum for fields: members compare equal to raw query-string keys
"""

from enum import Enum
from typing import Any, NewType


ProductId = NewType("ProductId", str)

# Raw query string: field name -> value as sent by the client
RawFilter = dict[str, str]

# Coerced filter: ORM attribute name -> typed value
ProductFilter = dict[str, Any]


class ProductField(str, Enum):
    """Filterable product fields, keyed by their JSON name."""
    ID = "id"
    NAME = "name"
    BRAND = "brand"
    CATEGORY = "category"
    PRICE = "price"
    IN_STOCK = "inStock"

    @property
    def attribute(self) -> str:
        """ORM attribute backing this field."""
        return "in_stock" if self is ProductField.IN_STOCK else self.value
