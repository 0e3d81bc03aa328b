"""FastAPI dependency-injection helpers."""

from __future__ import annotations

from fastapi import Request

from bizdev_hydration.hydrator import TemplateHydrator
from bizdev_hydration.stores.sql import SqlTemplateStore


def get_hydrator(request: Request) -> TemplateHydrator:
    return request.app.state.hydrator


def get_template_store(request: Request) -> SqlTemplateStore:
    return request.app.state.templates
