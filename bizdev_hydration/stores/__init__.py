"""Contact, tenant, snippet and template stores."""

from .base import ContactStore, SnippetStore, TenantStore
from .sql import SqlContactStore, SqlSnippetStore, SqlTemplateStore, SqlTenantStore

__all__ = [
    "ContactStore",
    "SnippetStore",
    "SqlContactStore",
    "SqlSnippetStore",
    "SqlTemplateStore",
    "SqlTenantStore",
    "TenantStore",
]
