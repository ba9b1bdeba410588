"""Product Schemas: Pydantic models with field-level validation for API boundaries.

Invariants:
    - ProductCreate: name/brand/category non-empty, price finite and >= 0, inStock optional
    - ProductUpdate: every field optional, but a field that is present cannot be null
    - Unknown fields (including "id") are rejected on input
    - Product serializes with JSON names (inStock) and a text id

Design Decisions:
    - Aliases over renamed attributes: Python keeps snake_case, the wire keeps inStock
    - Same field rules on create and update (ADR: symmetric validation)
"""

import uuid

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def _check_price(v: float | None) -> float | None:
    if v is not None and v < 0:
        raise ValueError("Price cannot be negative")
    return v


class ProductCreate(BaseModel):
    """Create payload. The store assigns the id and the inStock default."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    category: str = Field(min_length=1)
    price: float = Field(allow_inf_nan=False)
    in_stock: bool | None = Field(None, alias="inStock")

    price_not_negative = field_validator("price")(_check_price)


class ProductUpdate(BaseModel):
    """Partial overwrite payload: only fields present in the request change."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1)
    brand: str | None = Field(None, min_length=1)
    category: str | None = Field(None, min_length=1)
    price: float | None = Field(None, allow_inf_nan=False)
    in_stock: bool | None = Field(None, alias="inStock")

    price_not_negative = field_validator("price")(_check_price)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "ProductUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                alias = type(self).model_fields[name].alias or name
                raise ValueError(f"{alias} cannot be null")
        return self

    def changes(self) -> dict:
        """Supplied fields keyed by ORM attribute name."""
        return self.model_dump(exclude_unset=True)


class Product(BaseModel):
    """Persisted product as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    brand: str
    category: str
    price: float
    in_stock: bool = Field(
        True,
        validation_alias=AliasChoices("inStock", "in_stock"),
        serialization_alias="inStock",
    )

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v: object) -> object:
        if isinstance(v, uuid.UUID):
            return str(v)
        return v

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
