"""Product DTOs for the Service Layer.

Data transfer objects using Pydantic v2.  These are the contracts
between the API layer (DRF views) and the Service layer.  DTOs are
immutable (``frozen=True``); only ``PageRequestDTO`` reads Django
settings, for its page-size limits.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``PageRequestDTO``: paging / sorting parameters for paged listings.
- ``PriceRangeQueryDTO`` / ``SearchQueryDTO``: query-string inputs.
- ``ProductOutputDTO``: output with all product fields.
- ``ProductPageDTO``: one page of ``ProductOutputDTO``.
"""

from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, List

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.products.constants import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    TYPE_MAX_LENGTH,
)

if TYPE_CHECKING:
    from modules.products.models import Product


def _price_from_json(v: Any) -> Any:
    # JSON numbers arrive as floats; go through ``str`` so 2.99 stays 2.99.
    if isinstance(v, float):
        return Decimal(str(v))
    return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``type`` and ``name`` are non-blank and within their length limits.
    - ``description`` is at most 1000 characters.
    - ``price`` is greater than zero with at most 8 integer and 2
      fraction digits.
    """

    model_config = ConfigDict(frozen=True)

    type: str = Field(max_length=TYPE_MAX_LENGTH)
    name: str = Field(max_length=NAME_MAX_LENGTH)
    price: Decimal = Field(
        gt=0, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    image_url: str | None = None

    @field_validator("type", "name")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_from_json(cls, v: Any) -> Any:
        return _price_from_json(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional.  ``None`` means "leave unchanged", never
    "clear the value".
    """

    model_config = ConfigDict(frozen=True)

    type: str | None = Field(default=None, max_length=TYPE_MAX_LENGTH)
    name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    price: Decimal | None = Field(
        default=None,
        gt=0,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )
    image_url: str | None = None

    @field_validator("type", "name")
    @classmethod
    def must_not_be_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_from_json(cls, v: Any) -> Any:
        return _price_from_json(v)


class PageRequestDTO(BaseModel):
    """Paging parameters for ``GET /api/products/paginated``.

    ``size`` above ``settings.MAX_PAGE_SIZE`` is clamped rather than
    rejected.
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0)
    size: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=1)
    sort_by: str = "id"
    sort_dir: str = "asc"

    @field_validator("size")
    @classmethod
    def clamp_size(cls, v: int) -> int:
        return min(v, settings.MAX_PAGE_SIZE)


class PriceRangeQueryDTO(BaseModel):
    """Query parameters for ``GET /api/products/price-range``."""

    model_config = ConfigDict(frozen=True)

    min_price: Decimal
    max_price: Decimal
    type: str | None = None


class SearchQueryDTO(BaseModel):
    """Query parameters for ``GET /api/products/search``."""

    model_config = ConfigDict(frozen=True)

    q: str


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    id: int
    type: str
    name: str
    description: str | None
    price: Decimal
    image_url: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            type=product.type,
            name=product.name,
            description=product.description,
            price=product.price,
            image_url=product.image_url,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductPageDTO(BaseModel):
    """One page of products plus the totals needed to navigate the rest."""

    model_config = ConfigDict(frozen=True)

    content: List[ProductOutputDTO]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def first(self) -> bool:
        return self.page == 0

    @property
    def last(self) -> bool:
        return self.page + 1 >= self.total_pages

    @property
    def empty(self) -> bool:
        return not self.content
