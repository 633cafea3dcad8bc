"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend, and ``Page[T]``, the
store-agnostic result of a paged query.  Service-layer code depends on
these abstractions, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of an ordered result set.

    ``page`` is zero-based; ``total`` counts every row matched by the query,
    not just the rows in ``items``.
    """

    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = 1


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    @abstractmethod
    def find_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def find_all(self) -> List[T]:
        """Return every entity in store order."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (insert or update) an entity."""

    @abstractmethod
    def exists_by_id(self, id: int) -> bool:
        """Return ``True`` when an entity with this primary key exists."""

    @abstractmethod
    def delete_by_id(self, id: int) -> None:
        """Permanently remove an entity by ID."""
