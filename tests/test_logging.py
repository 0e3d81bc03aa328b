"""Tests for bizdev_hydration.logging."""

from __future__ import annotations

import logging

import pytest
import structlog

from bizdev_hydration.logging import (
    SERVICE_NAME,
    add_service_name,
    hydration_log_context,
    mask_email,
    redact_recipients,
    setup_logging,
)
from bizdev_hydration.models import ResolutionContext


class TestMaskEmail:
    def test_bare_address(self):
        assert mask_email("jane@x.com") == "j***@x.com"

    def test_inside_to_header(self):
        assert mask_email("Jane Doe <jane.doe@x.com>") == "Jane Doe <j***@x.com>"

    def test_text_without_address_unchanged(self):
        assert mask_email("contact-1") == "contact-1"


class TestProcessors:
    def test_recipient_fields_redacted(self):
        event = redact_recipients(None, "info", {
            "event": "contact_not_found",
            "email": "ann@client.com",
            "to_header": "Ann <ann@client.com>",
            "contact_id": "contact-1",
        })
        assert event["email"] == "a***@client.com"
        assert event["to_header"] == "Ann <a***@client.com>"
        assert event["contact_id"] == "contact-1"

    def test_missing_email_left_alone(self):
        event = redact_recipients(None, "warning", {"event": "x", "email": None})
        assert event["email"] is None

    def test_service_name_added(self):
        assert add_service_name(None, "info", {"event": "x"})["service"] == SERVICE_NAME


class TestHydrationLogContext:
    def test_binds_ids_for_block_only(self):
        structlog.contextvars.clear_contextvars()
        ctx = ResolutionContext(contact_id="contact-1", tenant_id="tenant-1")

        with hydration_log_context(ctx, template_id="tpl-1"):
            bound = structlog.contextvars.get_contextvars()
            assert bound == {
                "contact_id": "contact-1",
                "tenant_id": "tenant-1",
                "template_id": "tpl-1",
            }

        assert structlog.contextvars.get_contextvars() == {}


class TestSetupLogging:
    def test_json_mode_single_handler(self):
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        setup_logging(json=True, level="info")
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    @pytest.mark.parametrize("name", ["sqlalchemy.engine", "aiosqlite"])
    def test_db_loggers_quiet_outside_debug(self, name):
        setup_logging(level="INFO")
        assert logging.getLogger(name).level == logging.WARNING

    def test_db_loggers_verbose_at_debug(self):
        setup_logging(json=False, level="DEBUG")
        assert logging.getLogger("sqlalchemy.engine").level == logging.DEBUG

    def test_pipeline_accepts_hydration_events(self):
        setup_logging(json=True, level="DEBUG")
        logger = structlog.get_logger("test_logger")
        # Should not raise; the full chain including redaction is wired up
        logger.info("template_hydrated", email="ann@client.com", valid=True)
