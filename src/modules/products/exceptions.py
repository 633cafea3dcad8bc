"""Product domain exceptions.

Raised by the Service Layer (or the repository, for store-level query
errors).  The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """The requested product does not exist."""


class InvalidSortField(Exception):
    """A paged listing was asked to sort by an unknown product attribute."""
