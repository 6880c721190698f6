import pytest
import structlog

from storefront.infrastructure.logging import clear_context, remove_handler


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo whatever logging setup a CLI invocation left behind."""
    yield
    remove_handler()
    clear_context()
    structlog.reset_defaults()
