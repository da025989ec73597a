# tests/conftest.py
import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    # Tests that configure structlog bind it to captured streams.
    yield
    structlog.reset_defaults()
