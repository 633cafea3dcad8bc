"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into the standard error
body (see ``modules.core.errors``); the view never swallows generic
exceptions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.errors import error_response, validation_error_response
from modules.products.dtos import (
    CreateProductDTO,
    PageRequestDTO,
    PriceRangeQueryDTO,
    SearchQueryDTO,
    UpdateProductDTO,
)
from modules.products.exceptions import InvalidSortField, ProductNotFound
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductPageSerializer, ProductSerializer
from modules.products.services import ProductService

PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
INVALID_PAGE_PARAMS = "INVALID_PAGE_PARAMS"
INVALID_SORT_FIELD = "INVALID_SORT_FIELD"

# Wire name -> DTO attribute.
PRODUCT_FIELDS = {
    "type": "type",
    "name": "name",
    "description": "description",
    "price": "price",
    "imageUrl": "image_url",
}
PAGE_PARAMS = {"page": "page", "size": "size", "sortBy": "sort_by", "sortDir": "sort_dir"}
PRICE_RANGE_PARAMS = {"minPrice": "min_price", "maxPrice": "max_price", "type": "type"}


def _from_wire(data: Any, fields: dict[str, str]) -> Any:
    """Rename the wire keys present in ``data`` to DTO attribute names."""
    if not isinstance(data, Mapping):
        return data
    return {attr: data.get(wire) for wire, attr in fields.items() if wire in data}


def _wire_names(fields: dict[str, str]) -> dict[str, str]:
    return {attr: wire for wire, attr in fields.items()}


def _not_found(exc: ProductNotFound) -> Response:
    return error_response(PRODUCT_NOT_FOUND, str(exc), status.HTTP_404_NOT_FOUND)


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD, search and listing endpoints.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    All ORM access goes through the service/repository layer.
    """

    serializer_class = ProductSerializer
    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/products"""
        products = self._service.list_products()
        return Response(ProductSerializer(products, many=True).data)

    @action(detail=False, methods=["get"], url_path="paginated")
    def paginated(self, request: Request) -> Response:
        """GET /api/products/paginated?page=&size=&sortBy=&sortDir="""
        try:
            params = PageRequestDTO.model_validate(
                _from_wire(request.query_params, PAGE_PARAMS)
            )
        except PydanticValidationError as exc:
            return validation_error_response(
                exc, _wire_names(PAGE_PARAMS), error_code=INVALID_PAGE_PARAMS
            )

        try:
            page = self._service.list_products_paged(
                params.page, params.size, params.sort_by, params.sort_dir
            )
        except InvalidSortField as exc:
            return error_response(
                INVALID_SORT_FIELD, str(exc), status.HTTP_400_BAD_REQUEST
            )
        return Response(ProductPageSerializer(page).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        try:
            product = self._service.get_product(int(pk))
        except ProductNotFound as exc:
            return _not_found(exc)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/products"""
        try:
            dto = CreateProductDTO.model_validate(
                _from_wire(request.data, PRODUCT_FIELDS)
            )
        except PydanticValidationError as exc:
            return validation_error_response(exc, _wire_names(PRODUCT_FIELDS))

        product = self._service.create_product(dto)
        return Response(
            ProductSerializer(product).data, status=status.HTTP_201_CREATED
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/products/{pk}

        Partial semantics: absent or null fields keep their stored value.
        """
        try:
            dto = UpdateProductDTO.model_validate(
                _from_wire(request.data, PRODUCT_FIELDS)
            )
        except PydanticValidationError as exc:
            return validation_error_response(exc, _wire_names(PRODUCT_FIELDS))

        try:
            product = self._service.update_product(int(pk), dto)
        except ProductNotFound as exc:
            return _not_found(exc)
        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/products/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/products/{pk}"""
        try:
            self._service.delete_product(int(pk))
        except ProductNotFound as exc:
            return _not_found(exc)
        return Response({"message": "Product deleted successfully"})

    # ------------------------------------------------------------------
    # Filtered listings
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path=r"type/(?P<product_type>[^/]+)")
    def by_type(self, request: Request, product_type: str) -> Response:
        """GET /api/products/type/{type}"""
        products = self._service.list_products_by_type(product_type)
        return Response(ProductSerializer(products, many=True).data)

    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/products/search?q="""
        try:
            query = SearchQueryDTO.model_validate(
                _from_wire(request.query_params, {"q": "q"})
            )
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        products = self._service.search_products(query.q)
        return Response(ProductSerializer(products, many=True).data)

    @action(detail=False, methods=["get"], url_path="price-range")
    def price_range(self, request: Request) -> Response:
        """GET /api/products/price-range?minPrice=&maxPrice=[&type=]"""
        try:
            query = PriceRangeQueryDTO.model_validate(
                _from_wire(request.query_params, PRICE_RANGE_PARAMS)
            )
        except PydanticValidationError as exc:
            return validation_error_response(exc, _wire_names(PRICE_RANGE_PARAMS))

        products = self._service.list_products_by_price_range(
            query.min_price, query.max_price, query.type
        )
        return Response(ProductSerializer(products, many=True).data)

    @action(detail=False, methods=["get"], url_path="types")
    def types(self, request: Request) -> Response:
        """GET /api/products/types"""
        return Response(self._service.list_product_types())

    @action(
        detail=False, methods=["get"], url_path=r"count/type/(?P<product_type>[^/]+)"
    )
    def count_by_type(self, request: Request, product_type: str) -> Response:
        """GET /api/products/count/type/{type}"""
        return Response({"count": self._service.count_products_by_type(product_type)})
