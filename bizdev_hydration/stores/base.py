"""Abstract read-only stores the hydrator resolves placeholders against."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import ContactRecord, SnippetRecord, TenantRecord


class ContactStore(ABC):
    """Contact lookups by primary key or email."""

    @abstractmethod
    async def find_by_id(self, contact_id: str) -> ContactRecord | None:
        """Return the contact with *contact_id*, or None if it does not exist."""

    @abstractmethod
    async def find_by_email(self, email: str) -> ContactRecord | None:
        """Return the contact whose email matches *email*, or None."""


class TenantStore(ABC):
    """Lookups of the organization a message is sent on behalf of."""

    @abstractmethod
    async def find_by_id(self, tenant_id: str) -> TenantRecord | None:
        """Return the tenant with *tenant_id*, or None."""


class SnippetStore(ABC):
    """Lookups of reusable content snippets."""

    @abstractmethod
    async def find_by_slug(self, slug: str) -> SnippetRecord | None:
        """Return the snippet with *slug*, or None."""
