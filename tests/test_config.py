"""Tests for settings validation."""
import pytest

from tours_api.config import ConfigurationError, Settings


def test_database_path_from_sqlite_url():
    config = Settings(database_url="sqlite:///./data/tours.db")
    assert config.database_path() == "./data/tours.db"


@pytest.mark.parametrize("url", ["", "   ", "mongodb://localhost:27017/tours", "sqlite:///"])
def test_database_path_rejects_bad_urls(url):
    config = Settings(database_url=url)
    with pytest.raises(ConfigurationError):
        config.database_path()
