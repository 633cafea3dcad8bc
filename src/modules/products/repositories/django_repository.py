"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern for look-ups: methods
return ``None`` instead of raising HTTP-level exceptions, and the Service
Layer decides how to translate a missing entity into an API response.
Only store-level query errors (unknown sort field) surface as domain
exceptions.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

import structlog

from django.core.exceptions import FieldDoesNotExist
from django.db import transaction
from django.db.models import Q

from modules.core.repositories.interfaces import Page
from modules.products.exceptions import InvalidSortField
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

# API field names that differ from the model attribute names.
SORT_ALIASES = {
    "imageUrl": "image_url",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def find_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or non-numeric IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def find_all(self) -> List[Product]:
        return list(Product.objects.all())

    def find_all_paged(
        self, page: int, size: int, sort_by: str, descending: bool = False
    ) -> Page[Product]:
        field_name = self._resolve_sort_field(sort_by)
        ordering = f"-{field_name}" if descending else field_name
        order_by = [ordering] if field_name == "id" else [ordering, "id"]

        queryset = Product.objects.order_by(*order_by)
        total = queryset.count()
        offset = page * size
        items = list(queryset[offset : offset + size]) if offset < total else []
        return Page(items=items, total=total, page=page, size=size)

    def find_by_type(self, type: str) -> List[Product]:
        return list(Product.objects.filter(type=type))

    def find_by_name_or_description_containing(self, term: str) -> List[Product]:
        """Search name OR description, case-insensitively.

        An empty ``term`` matches every product.
        """
        return list(
            Product.objects.filter(
                Q(name__icontains=term) | Q(description__icontains=term)
            )
        )

    def find_by_price_between(
        self, min_price: Decimal, max_price: Decimal, type: Optional[str] = None
    ) -> List[Product]:
        """Inclusive range; reversed bounds match nothing."""
        queryset = Product.objects.filter(price__range=(min_price, max_price))
        if type is not None:
            queryset = queryset.filter(type=type)
        return list(queryset)

    def find_distinct_types(self) -> List[str]:
        return list(
            Product.objects.order_by("type")
            .values_list("type", flat=True)
            .distinct()
        )

    def count_by_type(self, type: str) -> int:
        return Product.objects.filter(type=type).count()

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (insert or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=entity.id)
        return entity

    def exists_by_id(self, id: int) -> bool:
        try:
            return Product.objects.filter(id=id).exists()
        except (TypeError, ValueError):
            return False

    @transaction.atomic
    def delete_by_id(self, id: int) -> None:
        """Hard-delete a product; deleting a missing ID is a no-op."""
        deleted, _ = Product.objects.filter(id=id).delete()
        if deleted:
            logger.info("product.hard_deleted", product_id=id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_sort_field(sort_by: str) -> str:
        field_name = SORT_ALIASES.get(sort_by, sort_by)
        try:
            Product._meta.get_field(field_name)
        except FieldDoesNotExist as exc:
            raise InvalidSortField(
                f"Cannot sort products by '{sort_by}'."
            ) from exc
        return field_name
