"""Template hydration endpoints."""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException

from bizdev_hydration.deps import get_hydrator, get_template_store
from bizdev_hydration.hydrator import TemplateHydrator
from bizdev_hydration.logging import hydration_log_context
from bizdev_hydration.models import ResolutionContext, ValidationResult
from bizdev_hydration.schemas.template import (
    HydrateRequest,
    HydrateResponse,
    OriginalTemplate,
    ValidateRequest,
    VariableOut,
)
from bizdev_hydration.stores.sql import SqlTemplateStore

logger = structlog.get_logger()
router = APIRouter(prefix="/api/v1/templates", tags=["templates"])


@router.post("/hydrate", response_model=HydrateResponse)
async def hydrate_template(
    body: HydrateRequest,
    hydrator: Annotated[TemplateHydrator, Depends(get_hydrator)],
    templates: Annotated[SqlTemplateStore, Depends(get_template_store)],
):
    if body.template_id:
        template = await templates.find_by_id(body.template_id)
        if template is None:
            raise HTTPException(status_code=404, detail="Template not found")
        original = OriginalTemplate(
            subject=template.subject,
            body=template.body,
            title=template.title,
        )
    elif body.body is not None:
        original = OriginalTemplate(subject=body.subject or "", body=body.body)
    else:
        raise HTTPException(
            status_code=422,
            detail="template_id or body is required",
        )

    context = ResolutionContext(
        contact_id=body.contact_id,
        contact_email=body.contact_email,
        to_header=body.to,
        owner_id=body.owner_id,
        tenant_id=body.tenant_id,
        metadata=body.metadata,
    )
    with hydration_log_context(context, template_id=body.template_id):
        result = await hydrator.hydrate_message(original.subject, original.body, context)
        logger.info(
            "template_hydrated",
            valid=result.validation.valid,
            missing=result.validation.missing_variables,
        )

    return HydrateResponse(
        hydrated_subject=result.subject,
        hydrated_body=result.body,
        original_template=original,
        validation=result.validation,
        variables=result.variables,
        contact_id=body.contact_id,
        metadata=body.metadata,
    )


@router.post("/validate", response_model=ValidationResult)
async def validate_content(
    body: ValidateRequest,
    hydrator: Annotated[TemplateHydrator, Depends(get_hydrator)],
):
    return hydrator.validate(body.content)


@router.get("/variables", response_model=list[VariableOut])
async def list_variables(
    hydrator: Annotated[TemplateHydrator, Depends(get_hydrator)],
):
    return [
        VariableOut(key=d.key, source=d.source, description=d.description)
        for d in hydrator.catalog.definitions
    ]
