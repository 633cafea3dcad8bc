"""Product model for the catalog.

Constraints mirrored from the API contract:
- ``type`` and ``name`` are required and never blank.
- ``price`` has at most 8 integer digits, 2 fraction digits and is
  strictly greater than zero (also enforced by a DB check constraint).
- ``description`` and ``image_url`` are optional.
- Deletion is a hard delete; there is no soft-delete column.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from django.core.exceptions import ValidationError
from django.core.validators import MaxLengthValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.products.constants import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    TYPE_MAX_LENGTH,
)

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """Catalog product.

    ``id`` is the default ``BigAutoField`` so identifiers are monotonic
    integers assigned by the database.  ``type`` and ``price`` are indexed
    because the listing endpoints filter on them.
    """

    type = models.CharField(max_length=TYPE_MAX_LENGTH)
    name = models.CharField(max_length=NAME_MAX_LENGTH)
    description = models.TextField(  # noqa: DJ01
        null=True,
        blank=True,
        default=None,
        validators=[MaxLengthValidator(DESCRIPTION_MAX_LENGTH)],
    )
    price = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    image_url = models.TextField(null=True, blank=True, default=None)  # noqa: DJ01

    class Meta:
        db_table = "products"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["type"], name="products_type_idx"),
            models.Index(fields=["price"], name="products_price_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        errors = {}
        if self.type is not None and not self.type.strip():
            errors["type"] = "Product type is required."
        if self.name is not None and not self.name.strip():
            errors["name"] = "Product name is required."
        if self.price is not None and self.price <= 0:
            errors["price"] = "Price must be greater than 0."
        if errors:
            raise ValidationError(errors)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_inserted",
                product_id=self.id,
                type=self.type,
                name=self.name,
            )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.type} - {self.name}"
