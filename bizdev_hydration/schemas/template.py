"""Request/response schemas for template hydration endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from bizdev_hydration.models import ValidationResult, VariableSource


class HydrateRequest(BaseModel):
    template_id: str | None = None
    subject: str | None = None
    body: str | None = None
    contact_id: str | None = None
    contact_email: str | None = None
    to: str | None = Field(
        default=None,
        description='Recipient as "Name <email>" or a bare email; fallback identity',
    )
    owner_id: str | None = None
    tenant_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class OriginalTemplate(BaseModel):
    subject: str
    body: str
    title: str | None = None


class HydrateResponse(BaseModel):
    hydrated_subject: str
    hydrated_body: str
    original_template: OriginalTemplate
    validation: ValidationResult
    variables: list[str]
    contact_id: str | None
    metadata: dict[str, Any]


class ValidateRequest(BaseModel):
    content: str


class VariableOut(BaseModel):
    key: str
    source: VariableSource
    description: str
