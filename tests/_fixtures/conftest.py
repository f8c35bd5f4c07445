import pytest

from src.data_collector.yahoo_data.config import YahooDataConfig
from tests._fixtures.remote_api_responses import canned_transport


@pytest.fixture
def yahoo_config():
    """Default endpoint configuration, independent of any YAHOO_* environment overrides."""
    return YahooDataConfig()


@pytest.fixture
def fake_transport():
    """Recording transport serving the full canned TSM responses."""
    return canned_transport("full")
