"""Variable catalog: maps placeholder names to their definitions."""

from __future__ import annotations

import structlog

from .models import ContactField, VariableDefinition, VariableSource

logger = structlog.get_logger()


class VariableCatalog:
    """Registry of variable definitions, keyed by placeholder name."""

    def __init__(self) -> None:
        self._definitions: dict[str, VariableDefinition] = {}

    def register(
        self,
        key: str,
        source: VariableSource,
        field_path: str | None = None,
        description: str = "",
    ) -> VariableDefinition:
        """Register a variable.  Keys are unique; re-registering replaces.

        A CONTACT variable whose *field_path* is not a known
        :class:`ContactField` is still registered, but with no field, so it
        always resolves to an empty string.
        """
        field: ContactField | None = None
        if field_path is not None:
            try:
                field = ContactField(field_path)
            except ValueError:
                logger.warning("variable_field_rejected", key=key, field_path=field_path)
        elif source is VariableSource.CONTACT:
            logger.warning("variable_field_missing", key=key)

        definition = VariableDefinition(
            key=key,
            source=source,
            field=field,
            description=description,
        )
        if key in self._definitions:
            logger.info("variable_replaced", key=key)
        self._definitions[key] = definition
        return definition

    def get(self, key: str) -> VariableDefinition | None:
        """Look up a variable by name.  Returns None if unknown."""
        return self._definitions.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    @property
    def definitions(self) -> list[VariableDefinition]:
        return list(self._definitions.values())


def default_catalog() -> VariableCatalog:
    """The built-in catalog of contact and computed variables."""
    catalog = VariableCatalog()
    contact = VariableSource.CONTACT
    catalog.register("firstName", contact, "firstName", "Contact's first name")
    catalog.register("lastName", contact, "lastName", "Contact's last name")
    catalog.register("fullName", contact, "fullName", "Contact's full name")
    catalog.register("goesBy", contact, "goesBy", "Name contact prefers to be called")
    catalog.register("companyName", contact, "companyName", "Contact's current company name")
    catalog.register("title", contact, "title", "Contact's job title")
    catalog.register("email", contact, "email", "Contact's email address")
    catalog.register(
        "timeSinceConnected",
        VariableSource.COMPUTED,
        description="How long since you last connected",
    )
    return catalog
