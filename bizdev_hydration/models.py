"""Data models for template hydration.

Records (contacts, tenants, snippets) are read-only views over the CRM
database.  Store implementations map their rows onto these models so the
hydrator never sees ORM objects.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class VariableSource(str, Enum):
    """Where a template variable gets its value from."""

    CONTACT = "CONTACT"
    COMPUTED = "COMPUTED"


class ContactField(str, Enum):
    """Contact fields a CONTACT variable may read."""

    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    FULL_NAME = "fullName"
    GOES_BY = "goesBy"
    EMAIL = "email"
    TITLE = "title"
    COMPANY_NAME = "companyName"


class VariableDefinition(BaseModel):
    """A single entry in the variable catalog."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Placeholder name matched inside {{key}}")
    source: VariableSource = Field(description="Resolution strategy")
    field: ContactField | None = Field(
        default=None,
        description="Contact field read by CONTACT variables; None resolves to empty",
    )
    description: str = Field(default="", description="Human-readable description")


class ResolutionContext(BaseModel):
    """Identifiers and overrides used to resolve a template's placeholders."""

    contact_id: str | None = Field(default=None, description="Primary contact lookup key")
    contact_email: str | None = Field(default=None, description="Secondary contact lookup key")
    to_header: str | None = Field(
        default=None,
        description='Raw "Name <email>" or bare email, last-resort identity source',
    )
    owner_id: str | None = Field(
        default=None,
        description="Owner identifier for owner/system-scoped variables",
    )
    tenant_id: str | None = Field(
        default=None,
        description="Issuing organization, used for the same-company snippet rule",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Caller overrides; win over any resolved value",
    )


class CompanyRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company_name: str | None = None


class ContactRecord(BaseModel):
    """Contact as seen by the hydrator."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    goes_by: str | None = None
    email: str | None = None
    title: str | None = None
    company_name: str | None = None
    updated_at: datetime | None = None
    company: CompanyRecord | None = None


class TenantRecord(BaseModel):
    """The organization (company HQ) a message is sent on behalf of."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    company_name: str | None = None


class SnippetRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    text: str
    name: str | None = None


class ParsedAddress(BaseModel):
    """Result of parsing a ``"Name <email>"`` header value."""

    name: str | None = None
    email: str | None = None


class ValidationResult(BaseModel):
    valid: bool
    missing_variables: list[str] = Field(default_factory=list)


class HydrationResult(BaseModel):
    """Hydrated subject and body of an outreach message."""

    subject: str
    body: str
    variables: list[str] = Field(
        default_factory=list,
        description="Variable names found in the raw subject and body",
    )
    validation: ValidationResult


class TemplateRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str | None = None
    subject: str = ""
    body: str = ""
