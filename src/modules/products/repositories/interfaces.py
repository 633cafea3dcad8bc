"""Product repository interface.

Extends ``IRepository[Product]`` with the catalog look-ups the service
needs: paged listing, type filter, free-text search, price range,
distinct types and per-type counts.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository, Page

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product entity."""

    @abstractmethod
    def find_all_paged(
        self, page: int, size: int, sort_by: str, descending: bool = False
    ) -> Page["Product"]:
        """Return one zero-based page of products ordered by ``sort_by``.

        Raises:
            InvalidSortField: if ``sort_by`` is not a product attribute.
        """

    @abstractmethod
    def find_by_type(self, type: str) -> List["Product"]:
        """Products whose ``type`` equals ``type`` exactly."""

    @abstractmethod
    def find_by_name_or_description_containing(self, term: str) -> List["Product"]:
        """Case-insensitive substring match on name or description."""

    @abstractmethod
    def find_by_price_between(
        self, min_price: Decimal, max_price: Decimal, type: Optional[str] = None
    ) -> List["Product"]:
        """Products priced within ``[min_price, max_price]``, optionally of one type."""

    @abstractmethod
    def find_distinct_types(self) -> List[str]:
        """Every distinct ``type`` value, ascending."""

    @abstractmethod
    def count_by_type(self, type: str) -> int:
        """Number of products with the given ``type``."""
