"""Shared test fixtures for the hydration test suite."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bizdev_hydration.config import RetryConfig, Settings
from bizdev_hydration.db.models import Base, Company, CompanyHQ, Contact, ContentSnip, Template
from bizdev_hydration.hydrator import TemplateHydrator
from bizdev_hydration.models import (
    CompanyRecord,
    ContactRecord,
    SnippetRecord,
    TenantRecord,
)
from bizdev_hydration.stores.base import ContactStore, SnippetStore, TenantStore


def _test_settings(**overrides) -> Settings:
    """Create Settings with test defaults."""
    defaults = {
        "database_url": "sqlite+aiosqlite://",
        "retry": RetryConfig(max_attempts=2, initial_wait_seconds=0.01, max_wait_seconds=0.02),
    }
    defaults.update(overrides)
    return Settings(**defaults)


@pytest.fixture
def settings() -> Settings:
    return _test_settings()


# ------------------------------------------------------------------
# In-memory stores
# ------------------------------------------------------------------


class FakeContactStore(ContactStore):
    def __init__(
        self,
        contacts: list[ContactRecord] | None = None,
        *,
        fail_by_id: bool = False,
        fail_by_email: bool = False,
    ) -> None:
        self._contacts = list(contacts or [])
        self._fail_by_id = fail_by_id
        self._fail_by_email = fail_by_email
        self.calls: list[tuple[str, str]] = []

    async def find_by_id(self, contact_id: str) -> ContactRecord | None:
        self.calls.append(("id", contact_id))
        if self._fail_by_id:
            raise RuntimeError("contact lookup by id failed")
        return next((c for c in self._contacts if c.id == contact_id), None)

    async def find_by_email(self, email: str) -> ContactRecord | None:
        self.calls.append(("email", email))
        if self._fail_by_email:
            raise RuntimeError("contact lookup by email failed")
        return next(
            (c for c in self._contacts if c.email and c.email.lower() == email.lower()),
            None,
        )


class FakeTenantStore(TenantStore):
    def __init__(self, tenants: list[TenantRecord] | None = None, *, fail: bool = False) -> None:
        self._tenants = {t.id: t for t in tenants or []}
        self._fail = fail
        self.lookups: list[str] = []

    async def find_by_id(self, tenant_id: str) -> TenantRecord | None:
        self.lookups.append(tenant_id)
        if self._fail:
            raise RuntimeError("tenant lookup failed")
        return self._tenants.get(tenant_id)


class FakeSnippetStore(SnippetStore):
    def __init__(self, snippets: dict[str, str] | None = None, *, fail: bool = False) -> None:
        self._snippets = dict(snippets or {})
        self._fail = fail
        self.lookups: list[str] = []

    async def find_by_slug(self, slug: str) -> SnippetRecord | None:
        self.lookups.append(slug)
        if self._fail:
            raise RuntimeError("snippet lookup failed")
        text = self._snippets.get(slug)
        if text is None:
            return None
        return SnippetRecord(slug=slug, text=text)


# ------------------------------------------------------------------
# Record factories
# ------------------------------------------------------------------


def days_ago(days: int) -> datetime:
    return datetime.now(UTC) - timedelta(days=days)


def make_contact(**overrides) -> ContactRecord:
    defaults = dict(
        id="contact-1",
        first_name="Ann",
        last_name="Lee",
        full_name=None,
        goes_by=None,
        email="ann@client.com",
        title="VP Engineering",
        company_name="Client Co",
        updated_at=days_ago(10),
        company=None,
    )
    defaults.update(overrides)
    return ContactRecord(**defaults)


def make_company(name: str, company_id: str = "company-1") -> CompanyRecord:
    return CompanyRecord(id=company_id, company_name=name)


def make_tenant(name: str = "Acme Advisory", tenant_id: str = "tenant-1") -> TenantRecord:
    return TenantRecord(id=tenant_id, company_name=name)


DEFAULT_SNIPPETS = {
    "as_you_may_remember": "As you may remember, we worked together at Acme.",
    "intro": "I run a small advisory practice.",
    "cta": "Open to a quick call, {{firstName}}?",
}


def make_hydrator(
    contacts: list[ContactRecord] | None = None,
    tenants: list[TenantRecord] | None = None,
    snippets: dict[str, str] | None = None,
    *,
    contact_store: ContactStore | None = None,
    tenant_store: TenantStore | None = None,
    snippet_store: SnippetStore | None = None,
    **kwargs,
) -> TemplateHydrator:
    return TemplateHydrator(
        contacts=contact_store or FakeContactStore(contacts),
        tenants=tenant_store or FakeTenantStore(tenants),
        snippets=snippet_store or FakeSnippetStore(
            DEFAULT_SNIPPETS if snippets is None else snippets
        ),
        **kwargs,
    )


@pytest.fixture
def contact() -> ContactRecord:
    return make_contact()


@pytest.fixture
def hydrator(contact: ContactRecord) -> TemplateHydrator:
    return make_hydrator([contact], [make_tenant()])


# ------------------------------------------------------------------
# SQLite-backed CRM database
# ------------------------------------------------------------------


@pytest.fixture
async def session_factory():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add_all([
            Company(id="co-1", company_name="Acme Advisory"),
            Contact(
                id="c-1",
                company_id="co-1",
                first_name="Sam",
                last_name="Stone",
                email="Sam@Acme.com",
                company_name="Acme",
                updated_at=datetime(2025, 1, 1, 9, 30),
            ),
            Contact(
                id="c-2",
                first_name="Ann",
                last_name="Lee",
                full_name="Dr. Ann Lee",
                email="ann@client.com",
                updated_at=datetime(2026, 1, 1),
            ),
            CompanyHQ(id="t-1", company_name="Acme Advisory"),
            ContentSnip(
                id="s-1",
                slug="as_you_may_remember",
                name="As you may remember",
                text="As you may remember, we met at Acme.",
            ),
            ContentSnip(id="s-2", slug="intro", text="Quick intro, {{firstName}}."),
            ContentSnip(id="s-3", slug="retired", text="Old opener.", is_active=False),
            Template(id="tpl-1", title="Reconnect", subject="Hi {{firstName}}", body="{{snippet:intro}}"),
        ])
        await session.commit()

    yield factory
    await engine.dispose()
