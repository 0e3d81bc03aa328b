"""Contact identity resolution for template hydration.

Upstream callers are inconsistent about which identifiers they pass: a stale
id with a valid email, an email only, or just the raw "to" header typed into
the compose form.  The resolver tries each in turn and never raises; every
failed lookup is logged and treated as "not found".
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from .addresses import parse_email_header
from .models import ContactRecord, ResolutionContext
from .stores.base import ContactStore, TenantStore

logger = structlog.get_logger()


@dataclass(frozen=True)
class ResolvedIdentity:
    """Identifiers derived from a :class:`ResolutionContext` for one call."""

    contact_id: str | None
    email: str | None
    display_name: str | None

    @property
    def resolvable(self) -> bool:
        return bool(self.contact_id or self.email)


def resolve_identity(context: ResolutionContext) -> ResolvedIdentity:
    """Work out which contact identifiers are usable.

    ``contact_email`` wins over the "to" header.  The context itself is never
    modified.
    """
    display_name: str | None = None
    email = context.contact_email or None

    if context.to_header:
        parsed = parse_email_header(context.to_header)
        display_name = parsed.name
        if not email:
            email = parsed.email

    return ResolvedIdentity(
        contact_id=context.contact_id or None,
        email=email,
        display_name=display_name,
    )


def _normalize_company(name: str | None) -> str:
    return (name or "").strip().lower()


class ContactResolver:
    """Find the contact behind a context, falling back from id to email."""

    def __init__(self, contacts: ContactStore, tenants: TenantStore) -> None:
        self._contacts = contacts
        self._tenants = tenants

    async def find_contact(self, identity: ResolvedIdentity) -> ContactRecord | None:
        if identity.contact_id:
            try:
                contact = await self._contacts.find_by_id(identity.contact_id)
            except Exception:
                logger.warning(
                    "contact_lookup_by_id_failed",
                    contact_id=identity.contact_id,
                    exc_info=True,
                )
                contact = None
            if contact is not None:
                return contact
            logger.debug("contact_not_found_by_id", contact_id=identity.contact_id)

        if identity.email:
            try:
                contact = await self._contacts.find_by_email(identity.email)
            except Exception:
                logger.warning(
                    "contact_lookup_by_email_failed",
                    email=identity.email,
                    exc_info=True,
                )
                return None
            if contact is None:
                logger.debug("contact_not_found_by_email", email=identity.email)
            return contact

        return None

    async def is_same_company(self, contact_id: str | None, tenant_id: str | None) -> bool:
        """True iff the contact works at the tenant's company.

        Any missing identifier or failed lookup counts as a different company.
        """
        if not contact_id or not tenant_id:
            return False

        try:
            contact = await self._contacts.find_by_id(contact_id)
            tenant = await self._tenants.find_by_id(tenant_id)
        except Exception:
            logger.warning(
                "same_company_lookup_failed",
                contact_id=contact_id,
                tenant_id=tenant_id,
                exc_info=True,
            )
            return False

        if contact is None or tenant is None:
            return False

        contact_company = contact.company.company_name if contact.company else None
        contact_company = _normalize_company(contact_company or contact.company_name)
        tenant_company = _normalize_company(tenant.company_name)
        if not contact_company or not tenant_company:
            return False
        return contact_company == tenant_company
