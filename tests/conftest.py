"""
Pytest fixtures and utilities shared by the test suite
"""

import json
import logging
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from genmedia_mcp.config import Settings, reset_settings
from genmedia_mcp.mcp_utils import JSONFormatter, clear_correlation_id, set_correlation_id
from genmedia_mcp.model_registry import build_registry, reset_registry


@pytest.fixture(autouse=True)
def _isolated_globals(monkeypatch):
    """Keep GENMEDIA_* environment and cached globals from leaking between tests."""
    for name in [
        "GENMEDIA_BUCKET",
        "GENMEDIA_DEFAULT_ASPECT_RATIO",
        "GENMEDIA_DEFAULT_IMAGE_ASPECT_RATIO",
        "GENMEDIA_DEFAULT_COUNT",
        "GENMEDIA_DEFAULT_DURATION",
        "GENMEDIA_DEFAULT_VEO_MODEL",
        "GENMEDIA_DEFAULT_IMAGEN_MODEL",
        "GENMEDIA_DEFAULT_GEMINI_MODEL",
        "GENMEDIA_MODEL_CATALOG",
        "GENMEDIA_PRETTY",
    ]:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    reset_registry()
    yield
    reset_settings()
    reset_registry()


@pytest.fixture
def registry():
    """Registry built from the built-in catalog"""
    return build_registry()


@pytest.fixture
def settings():
    """Settings with a default bucket so video requests need no 'bucket' argument"""
    return Settings(bucket="test-bucket")


@pytest.fixture
def tiny_catalog():
    """Small catalog declared out of alphabetical order"""
    return {
        "veo": [
            {
                "canonical_name": "zeta-video",
                "aliases": ["Zeta"],
                "durations": [4, 8],
                "default_duration": 8,
                "max_outputs": 2,
                "aspect_ratios": ["16:9"],
            },
            {
                "canonical_name": "alpha-video",
                "aliases": ["Alpha", "A1"],
                "durations": [5],
                "default_duration": 5,
                "max_outputs": 1,
                "aspect_ratios": ["16:9", "9:16"],
                "supports_last_frame": True,
            },
        ]
    }


# =============================================================================
# Structured Logging Fixtures
# =============================================================================


class CapturingLogHandler(logging.Handler):
    """Handler that captures log records for testing."""

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)

    def get_json_logs(self):
        """Return list of parsed JSON log entries."""
        formatter = JSONFormatter()
        return [json.loads(formatter.format(record)) for record in self.records]

    def clear(self):
        self.records = []


@pytest.fixture
def capturing_logger():
    """Fixture providing a capturing log handler."""
    logger = logging.getLogger("genmedia-mcp")

    handler = CapturingLogHandler()
    handler.setLevel(logging.DEBUG)
    logger.addHandler(handler)

    original_level = logger.level
    logger.setLevel(logging.DEBUG)

    yield handler

    logger.removeHandler(handler)
    logger.setLevel(original_level)
    handler.clear()


@pytest.fixture
def correlation_context():
    """Fixture providing correlation ID context management."""

    def _set_cid(cid):
        set_correlation_id(cid)
        return cid

    yield _set_cid

    clear_correlation_id()
