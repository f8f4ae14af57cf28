"""Tests for engine logging setup."""

import importlib
import json

import pytest
import structlog

import family_graph.logging as engine_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


class TestLoggingSetup:
    def test_import_does_not_configure_structlog(self):
        """Importing the library leaves the host's logging alone."""
        importlib.reload(engine_logging)
        assert not structlog.is_configured()

    def test_configure_filters_by_level(self, capsys):
        engine_logging.configure_logging("WARNING")
        logger = engine_logging.get_logger("family_graph.test")

        logger.info("hidden_event")
        logger.warning("shown_event", person_id="A")

        lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.strip()]
        assert [line["event"] for line in lines] == ["shown_event"]
        assert lines[0]["level"] == "warning"
        assert lines[0]["person_id"] == "A"
        assert structlog.is_configured()
