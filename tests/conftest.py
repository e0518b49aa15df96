"""
Shared fixtures for the monocipher test suite.
"""
import pytest

from monocipher.config import get_settings
from monocipher.services import sku_service, site_resolver


CONFIG_ENV_VARS = (
    "MONO_CIPHER_KEY",
    "INCLUDE_SLASH",
    "SKU_PREFIX",
    "SKU_SEPARATOR",
    "SITE_MAP_PATH",
    "LOG_LEVEL",
)


def _clear_caches():
    get_settings.cache_clear()
    sku_service.clear_cipher_cache()
    site_resolver._load_site_map.cache_clear()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Run every test against default settings and empty caches."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture
def set_env(monkeypatch):
    """Set configuration environment variables and drop cached settings."""
    def _set(**values):
        for name, value in values.items():
            monkeypatch.setenv(name, value)
        _clear_caches()
    return _set
