"""Base abstract model shared by the catalog modules.

Provides ``BaseModel``: ``created_at`` / ``updated_at`` bookkeeping on top of
the default ``BigAutoField`` primary key.

Timestamps are assigned in ``save()`` from a single clock reading instead of
``auto_now_add`` / ``auto_now`` (which read the clock twice), so a freshly
inserted row always has ``created_at == updated_at``.  Every later save moves
``updated_at`` strictly forward.
"""

from __future__ import annotations

from datetime import timedelta

from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    """Abstract base with timestamp bookkeeping."""

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Stamp ``created_at`` on insert and refresh ``updated_at`` on every save."""
        now = timezone.now()
        if self._state.adding:
            self.created_at = now
        elif self.updated_at is not None and now <= self.updated_at:
            # Clock did not advance between two saves of the same row.
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)
