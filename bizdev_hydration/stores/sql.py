"""Read-only store adapters over the CRM database (async SQLAlchemy).

Lookups are retried on transient connection errors; anything else, and the
final failed attempt, propagates to the caller.  Each retry is logged as
``db_lookup_retry`` with the lookup name, e.g. ``contact.find_by_email``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from ..config import RetryConfig
from ..db.models import CompanyHQ, Contact, ContentSnip, Template
from ..models import ContactRecord, SnippetRecord, TemplateRecord, TenantRecord
from ..retry import with_retry
from .base import ContactStore, SnippetStore, TenantStore

T = TypeVar("T")

_TRANSIENT_ERRORS = (OperationalError, InterfaceError)


class _SqlStore:
    entity = "record"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        retry_config: RetryConfig | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._retry_config = retry_config or RetryConfig()

    async def _run(self, lookup: str, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async def _attempt() -> T:
            async with self._session_factory() as session:
                return await fn(session)

        retrying = with_retry(
            self._retry_config,
            retryable_exceptions=_TRANSIENT_ERRORS,
            operation=f"{self.entity}.{lookup}",
        )
        return await retrying(_attempt)()


class SqlContactStore(_SqlStore, ContactStore):
    entity = "contact"

    async def find_by_id(self, contact_id: str) -> ContactRecord | None:
        stmt = (
            select(Contact)
            .options(selectinload(Contact.company))
            .where(Contact.id == contact_id)
        )
        return await self._first("find_by_id", stmt)

    async def find_by_email(self, email: str) -> ContactRecord | None:
        stmt = (
            select(Contact)
            .options(selectinload(Contact.company))
            .where(func.lower(Contact.email) == email.strip().lower())
            .order_by(Contact.updated_at.desc())
            .limit(1)
        )
        return await self._first("find_by_email", stmt)

    async def _first(self, lookup: str, stmt: Select) -> ContactRecord | None:
        async def _query(session: AsyncSession) -> ContactRecord | None:
            result = await session.execute(stmt)
            contact = result.scalars().first()
            if contact is None:
                return None
            return ContactRecord.model_validate(contact, from_attributes=True)

        return await self._run(lookup, _query)


class SqlTenantStore(_SqlStore, TenantStore):
    entity = "tenant"

    async def find_by_id(self, tenant_id: str) -> TenantRecord | None:
        async def _query(session: AsyncSession) -> TenantRecord | None:
            hq = await session.get(CompanyHQ, tenant_id)
            if hq is None:
                return None
            return TenantRecord.model_validate(hq, from_attributes=True)

        return await self._run("find_by_id", _query)


class SqlSnippetStore(_SqlStore, SnippetStore):
    entity = "snippet"

    async def find_by_slug(self, slug: str) -> SnippetRecord | None:
        async def _query(session: AsyncSession) -> SnippetRecord | None:
            result = await session.execute(
                select(ContentSnip)
                .where(ContentSnip.slug == slug, ContentSnip.is_active.is_(True))
                .limit(1)
            )
            snip = result.scalar_one_or_none()
            if snip is None:
                return None
            return SnippetRecord.model_validate(snip, from_attributes=True)

        return await self._run("find_by_slug", _query)


class SqlTemplateStore(_SqlStore):
    """Outreach templates by id.  Used by the HTTP layer, not the hydrator."""

    entity = "template"

    async def find_by_id(self, template_id: str) -> TemplateRecord | None:
        async def _query(session: AsyncSession) -> TemplateRecord | None:
            template = await session.get(Template, template_id)
            if template is None:
                return None
            return TemplateRecord.model_validate(template, from_attributes=True)

        return await self._run("find_by_id", _query)
