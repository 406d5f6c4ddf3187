import pytest

from filetodo.config import get_settings
from filetodo.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _quiet_logging():
    configure_logging("WARNING")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
