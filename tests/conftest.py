import pytest

# Load shared fixtures from tests._fixtures so pytest discovers them
pytest_plugins = [
    "tests._fixtures.conftest",
]


@pytest.fixture(autouse=True)
def block_network(mocker):
    """Autouse fixture: prevent any test from opening a real aiohttp session.

    Tests that exercise the transport patch `aiohttp.ClientSession` themselves.
    """

    def _refuse(*args, **kwargs):
        raise AssertionError("Network access attempted during tests")

    mocker.patch("aiohttp.ClientSession", side_effect=_refuse)
    yield
