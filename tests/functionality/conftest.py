import pytest

from typedbus.core.events import global_registry


@pytest.fixture(autouse=True)
def _reset_global_registry():
    """Isolation → every test gets a pristine global registry."""
    yield
    global_registry.reset()
