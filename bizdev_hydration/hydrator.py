"""TemplateHydrator: fill snippet and variable placeholders in outreach templates."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog

from .addresses import first_name_from_display_name
from .catalog import VariableCatalog, default_catalog
from .models import (
    ContactField,
    ContactRecord,
    HydrationResult,
    ResolutionContext,
    ValidationResult,
    VariableDefinition,
    VariableSource,
)
from .placeholders import (
    SnippetTag,
    VariableTag,
    extract_variable_names,
    render,
    tokenize,
    validate,
)
from .resolver import ContactResolver, ResolvedIdentity, resolve_identity
from .stores.base import ContactStore, SnippetStore, TenantStore
from .timesince import FALLBACK_PHRASE, format_time_since

logger = structlog.get_logger()

# Relationship-softening openers, dropped when sender and recipient share an employer.
SAME_COMPANY_OMITTED_SLUGS = frozenset({
    "as_you_may_remember_softener",
    "as_you_may_remember",
    "as_you_remember",
    "you_may_remember",
})

_CONTACT_FIELD_ATTRS: dict[ContactField, str] = {
    ContactField.FIRST_NAME: "first_name",
    ContactField.LAST_NAME: "last_name",
    ContactField.GOES_BY: "goes_by",
    ContactField.EMAIL: "email",
    ContactField.TITLE: "title",
    ContactField.COMPANY_NAME: "company_name",
}


def _read_contact_field(contact: ContactRecord, field: ContactField) -> str:
    if field is ContactField.FULL_NAME:
        if contact.full_name:
            return contact.full_name
        return f"{contact.first_name or ''} {contact.last_name or ''}".strip()
    return getattr(contact, _CONTACT_FIELD_ATTRS[field]) or ""


def _stringify(value: Any) -> str:
    return "" if value is None else str(value)


class TemplateHydrator:
    """Resolve ``{{snippet:slug}}`` and ``{{variable}}`` placeholders.

    Collaborators are injected once per process.  The hydrator keeps no
    state between calls and never raises on missing or malformed data:
    anything it cannot resolve becomes an empty string.
    """

    def __init__(
        self,
        contacts: ContactStore,
        tenants: TenantStore,
        snippets: SnippetStore,
        *,
        catalog: VariableCatalog | None = None,
        time_since: Callable[[datetime | None], str] = format_time_since,
    ) -> None:
        self._snippets = snippets
        self._resolver = ContactResolver(contacts, tenants)
        self._catalog = catalog if catalog is not None else default_catalog()
        self._time_since = time_since

    @property
    def catalog(self) -> VariableCatalog:
        return self._catalog

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def hydrate(self, template: str | None, context: ResolutionContext) -> str:
        """Return *template* with every resolvable placeholder substituted."""
        if not template:
            return ""

        text = await self._substitute_snippets(template, context)
        return await self._substitute_variables(text, context)

    async def hydrate_message(
        self,
        subject: str | None,
        body: str | None,
        context: ResolutionContext,
    ) -> HydrationResult:
        """Hydrate an outreach message's subject and body with one context."""
        variables = list(dict.fromkeys(
            extract_variable_names(subject) + extract_variable_names(body)
        ))

        hydrated_subject = await self.hydrate(subject, context)
        hydrated_body = await self.hydrate(body, context)

        subject_check = validate(hydrated_subject)
        body_check = validate(hydrated_body)
        missing = list(dict.fromkeys(
            subject_check.missing_variables + body_check.missing_variables
        ))

        return HydrationResult(
            subject=hydrated_subject,
            body=hydrated_body,
            variables=variables,
            validation=ValidationResult(valid=not missing, missing_variables=missing),
        )

    @staticmethod
    def validate(content: str | None) -> ValidationResult:
        return validate(content)

    # ------------------------------------------------------------------
    # Pass 1: snippets
    # ------------------------------------------------------------------

    async def _substitute_snippets(self, template: str, context: ResolutionContext) -> str:
        segments = tokenize(template)
        tags = [s for s in segments if isinstance(s, SnippetTag) and s.slug]
        if not tags:
            return template

        same_company = False
        if any(tag.slug in SAME_COMPANY_OMITTED_SLUGS for tag in tags):
            same_company = await self._resolver.is_same_company(
                context.contact_id, context.tenant_id
            )

        values: dict[str, str] = {}
        for tag in tags:
            if tag.slug in values:
                continue
            if same_company and tag.slug in SAME_COMPANY_OMITTED_SLUGS:
                logger.debug("snippet_omitted_same_company", slug=tag.slug)
                values[tag.slug] = ""
            else:
                values[tag.slug] = await self._snippet_text(tag.slug)

        def _replace(segment):
            if isinstance(segment, SnippetTag) and segment.slug:
                return values[segment.slug]
            return None

        return render(segments, _replace)

    async def _snippet_text(self, slug: str) -> str:
        try:
            snippet = await self._snippets.find_by_slug(slug)
        except Exception:
            logger.warning("snippet_lookup_failed", slug=slug, exc_info=True)
            return ""
        if snippet is None:
            logger.warning("snippet_not_found", slug=slug)
            return ""
        return snippet.text or ""

    # ------------------------------------------------------------------
    # Pass 2: variables
    # ------------------------------------------------------------------

    async def _substitute_variables(self, text: str, context: ResolutionContext) -> str:
        segments = tokenize(text)
        names = list(dict.fromkeys(s.name for s in segments if isinstance(s, VariableTag)))
        if not names:
            return text

        values: dict[str, str] = {}
        for name in names:
            if name in context.metadata:
                values[name] = _stringify(context.metadata[name])
            else:
                values[name] = await self.resolve_variable(name, context)

        def _replace(segment):
            if isinstance(segment, VariableTag):
                return values[segment.name]
            return None

        return render(segments, _replace)

    async def resolve_variable(self, name: str, context: ResolutionContext) -> str:
        """Resolve one variable from the database, ignoring metadata overrides."""
        definition = self._catalog.get(name)
        if definition is None:
            logger.warning("unknown_variable", variable=name)
            return ""

        identity = resolve_identity(context)
        if not identity.resolvable:
            logger.warning("variable_unresolvable_no_identity", variable=name)
            return ""

        if definition.source is VariableSource.CONTACT:
            return await self._resolve_contact_variable(definition, identity)
        if definition.source is VariableSource.COMPUTED:
            return await self._resolve_computed_variable(definition, identity)

        logger.warning("unknown_variable_source", variable=name, source=definition.source)
        return ""

    async def _resolve_contact_variable(
        self,
        definition: VariableDefinition,
        identity: ResolvedIdentity,
    ) -> str:
        if definition.field is None:
            return ""

        contact = await self._resolver.find_contact(identity)
        if contact is None:
            if definition.field is ContactField.FIRST_NAME:
                fallback = first_name_from_display_name(identity.display_name)
                if fallback:
                    logger.info("first_name_from_to_header", variable=definition.key)
                    return fallback
            logger.warning(
                "contact_not_found",
                variable=definition.key,
                contact_id=identity.contact_id,
                email=identity.email,
            )
            return ""

        return _read_contact_field(contact, definition.field)

    async def _resolve_computed_variable(
        self,
        definition: VariableDefinition,
        identity: ResolvedIdentity,
    ) -> str:
        if definition.key != "timeSinceConnected":
            logger.warning("unknown_computed_variable", variable=definition.key)
            return ""

        contact = await self._resolver.find_contact(identity)
        if contact is None:
            return FALLBACK_PHRASE
        try:
            return self._time_since(contact.updated_at)
        except Exception:
            logger.warning("time_since_failed", variable=definition.key, exc_info=True)
            return ""
