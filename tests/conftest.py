import pytest

from dynamic_logging import config, context


@pytest.fixture(autouse=True)
def clean_context():
    """Start every test with an empty ambient context"""
    context.clear()
    yield
    context.clear()


@pytest.fixture(autouse=True)
def restore_default_config():
    """Undo set_default_config calls made by a test"""
    saved = config._default_config
    yield
    config._default_config = saved
