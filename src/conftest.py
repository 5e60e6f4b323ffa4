import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """Start and leave every test with structlog's default configuration"""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
