"""Product DRF serializers for API output.

The serializers operate at the Interface layer (API Views) and render
the service's pydantic projections with the camelCase field names of the
public API.  Input goes through the pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.constants import PRICE_DECIMAL_PLACES, PRICE_MAX_DIGITS


class ProductSerializer(serializers.Serializer):
    """Read-only serializer for ``ProductOutputDTO``."""

    id = serializers.IntegerField(read_only=True)
    type = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True, allow_null=True)
    price = serializers.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        read_only=True,
    )
    imageUrl = serializers.CharField(  # noqa: N815
        source="image_url", read_only=True, allow_null=True
    )
    createdAt = serializers.DateTimeField(  # noqa: N815
        source="created_at", read_only=True
    )
    updatedAt = serializers.DateTimeField(  # noqa: N815
        source="updated_at", read_only=True
    )


class ProductPageSerializer(serializers.Serializer):
    """Read-only serializer for ``ProductPageDTO``."""

    content = ProductSerializer(many=True, read_only=True)
    page = serializers.IntegerField(read_only=True)
    size = serializers.IntegerField(read_only=True)
    totalElements = serializers.IntegerField(  # noqa: N815
        source="total_elements", read_only=True
    )
    totalPages = serializers.IntegerField(  # noqa: N815
        source="total_pages", read_only=True
    )
    numberOfElements = serializers.IntegerField(  # noqa: N815
        source="number_of_elements", read_only=True
    )
    first = serializers.BooleanField(read_only=True)
    last = serializers.BooleanField(read_only=True)
    empty = serializers.BooleanField(read_only=True)
