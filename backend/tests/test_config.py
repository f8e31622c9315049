"""Service Settings — verifies URL rewriting and the guards on paging and log format.

Tests:
    - postgresql:// URLs get the asyncpg driver; other URLs are untouched
    - log_format is lowered and limited to json/text
    - default_page_limit must sit between 1 and max_page_limit
"""

import pytest
from pydantic import ValidationError

from order_api.config import Settings, async_database_url


def test_async_database_url_rewrites_plain_postgres():
    assert async_database_url("postgresql://u:p@h:5432/orders") == (
        "postgresql+asyncpg://u:p@h:5432/orders"
    )


def test_async_database_url_leaves_other_urls():
    url = "sqlite+aiosqlite:///:memory:"
    assert async_database_url(url) == url


def test_settings_apply_url_rewrite():
    settings = Settings(database_url="postgresql://u:p@h:5432/orders")
    assert settings.database_url.startswith("postgresql+asyncpg://")


def test_log_format_is_normalized():
    assert Settings(log_format="TEXT").log_format == "text"
    with pytest.raises(ValidationError):
        Settings(log_format="xml")


@pytest.mark.parametrize("default_limit, max_limit", [(0, 500), (600, 500)])
def test_page_limits_must_be_ordered(default_limit, max_limit):
    with pytest.raises(ValidationError):
        Settings(default_page_limit=default_limit, max_page_limit=max_limit)
