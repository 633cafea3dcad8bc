"""Product service layer (Use Cases).

Orchestrates business logic for the Product entity, delegating
persistence to the injected ``IProductRepository`` and converting
persisted entities into ``ProductOutputDTO`` projections.

Rules enforced here:
- Missing products raise ``ProductNotFound`` on read, update and delete.
- Updates are partial: a ``None`` field leaves the stored value untouched.
- Paged sorting is ascending unless the direction is ``desc``
  (case-insensitive).

Input validation is a precondition, done once by the DTOs at the API
boundary.  Concurrent updates of the same product are last-write-wins.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

from modules.products.dtos import ProductOutputDTO, ProductPageDTO
from modules.products.exceptions import ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> ProductOutputDTO:
        """Create a new product; the store assigns id and timestamps."""
        product = Product(
            type=dto.type,
            name=dto.name,
            description=dto.description,
            price=dto.price,
            image_url=dto.image_url,
        )
        product = self._repo.save(product)
        logger.info("product.created", product_id=product.id, type=product.type)
        return ProductOutputDTO.from_entity(product)

    @transaction.atomic
    def update_product(self, id: int, dto: UpdateProductDTO) -> ProductOutputDTO:
        """Overwrite only the fields supplied in ``dto``.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)
        log = logger.bind(product_id=id)

        changed = []
        if dto.type is not None:
            product.type = dto.type
            changed.append("type")
        if dto.name is not None:
            product.name = dto.name
            changed.append("name")
        if dto.description is not None:
            product.description = dto.description
            changed.append("description")
        if dto.price is not None:
            product.price = dto.price
            changed.append("price")
        if dto.image_url is not None:
            product.image_url = dto.image_url
            changed.append("image_url")

        product = self._repo.save(product)
        log.info("product.updated", fields=changed)
        return ProductOutputDTO.from_entity(product)

    @transaction.atomic
    def delete_product(self, id: int) -> None:
        """Hard-delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.exists_by_id(id):
            logger.warning("product.not_found", product_id=id)
            raise ProductNotFound(f"Product not found with id: {id}")
        self._repo.delete_by_id(id)
        logger.info("product.deleted", product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[ProductOutputDTO]:
        """Return every product in store order."""
        return self._to_output(self._repo.find_all())

    def list_products_paged(
        self, page: int, size: int, sort_by: str, sort_dir: str
    ) -> ProductPageDTO:
        """Return one page of products.

        Raises:
            InvalidSortField: propagated from the repository when
                ``sort_by`` is not a product attribute.
        """
        descending = sort_dir.lower() == "desc"
        result = self._repo.find_all_paged(page, size, sort_by, descending)
        return ProductPageDTO(
            content=self._to_output(result.items),
            page=result.page,
            size=result.size,
            total_elements=result.total,
        )

    def get_product(self, id: int) -> ProductOutputDTO:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        return ProductOutputDTO.from_entity(self._get_or_raise(id))

    def list_products_by_type(self, type: str) -> List[ProductOutputDTO]:
        return self._to_output(self._repo.find_by_type(type))

    def search_products(self, term: str) -> List[ProductOutputDTO]:
        """Case-insensitive match on name or description; ``""`` matches all."""
        return self._to_output(
            self._repo.find_by_name_or_description_containing(term)
        )

    def list_products_by_price_range(
        self, min_price: Decimal, max_price: Decimal, type: Optional[str] = None
    ) -> List[ProductOutputDTO]:
        """Inclusive price range.  ``min_price > max_price`` yields ``[]``."""
        if min_price > max_price:
            return []
        return self._to_output(
            self._repo.find_by_price_between(min_price, max_price, type)
        )

    def list_product_types(self) -> List[str]:
        return self._repo.find_distinct_types()

    def count_products_by_type(self, type: str) -> int:
        return self._repo.count_by_type(type)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(self, id: int) -> Product:
        product = self._repo.find_by_id(id)
        if not product:
            logger.warning("product.not_found", product_id=id)
            raise ProductNotFound(f"Product not found with id: {id}")
        return product

    @staticmethod
    def _to_output(products: List[Product]) -> List[ProductOutputDTO]:
        return [ProductOutputDTO.from_entity(p) for p in products]
