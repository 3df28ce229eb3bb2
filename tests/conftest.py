"""Shared pytest fixtures for depusage tests."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog configuration a test installed (e.g. via setup_logging)."""
    yield
    structlog.reset_defaults()
