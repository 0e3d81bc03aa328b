"""Outreach template hydration for the business-development CRM.

Public API re-exported here for convenience::

    from bizdev_hydration import ResolutionContext, TemplateHydrator
"""

from .addresses import parse_email_header
from .catalog import VariableCatalog, default_catalog
from .hydrator import SAME_COMPANY_OMITTED_SLUGS, TemplateHydrator
from .logging import setup_logging
from .models import (
    ContactField,
    ContactRecord,
    HydrationResult,
    ParsedAddress,
    ResolutionContext,
    SnippetRecord,
    TenantRecord,
    ValidationResult,
    VariableDefinition,
    VariableSource,
)
from .placeholders import extract_variable_names, validate
from .stores.base import ContactStore, SnippetStore, TenantStore
from .timesince import format_time_since

__all__ = [
    "SAME_COMPANY_OMITTED_SLUGS",
    "ContactField",
    "ContactRecord",
    "ContactStore",
    "HydrationResult",
    "ParsedAddress",
    "ResolutionContext",
    "SnippetRecord",
    "SnippetStore",
    "TemplateHydrator",
    "TenantRecord",
    "TenantStore",
    "ValidationResult",
    "VariableCatalog",
    "VariableDefinition",
    "VariableSource",
    "default_catalog",
    "extract_variable_names",
    "format_time_since",
    "parse_email_header",
    "setup_logging",
    "validate",
]
