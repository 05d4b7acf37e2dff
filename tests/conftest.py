from collections import namedtuple

import aiohttp
import pytest

from rhmethods import RobinhoodClient, Session
from tests import CaseControlledTestServer

_ClientContext = namedtuple("ClientContext", "client server")


def pytest_configure():
    pytest.TIMEOUT = 1
    pytest.ACCOUNT_NUM = "A1B2C3D4"
    pytest.ACCOUNT_URL = "https://api.robinhood.com/accounts/A1B2C3D4/"
    pytest.ACCESS_TOKEN = "access"
    pytest.REFRESH_TOKEN = "refresh"


@pytest.fixture
def session():
    """A logged-in session that is never used over the network."""
    session = Session(
        base_url="https://api.example.com",
        access_token=pytest.ACCESS_TOKEN,
        refresh_token=pytest.REFRESH_TOKEN,
    )
    session.account_url = pytest.ACCOUNT_URL
    session.account_num = pytest.ACCOUNT_NUM
    return session


@pytest.fixture
def anonymous_session():
    """A session that has not logged in."""
    return Session(base_url="https://api.example.com")


@pytest.fixture
async def api_server():
    async with CaseControlledTestServer() as server:
        yield server


@pytest.fixture
async def logged_out_client(api_server, tmp_path):
    """A logged-out Robinhood client/server fixture."""
    session = Session(
        base_url=api_server.base_url, session_file=str(tmp_path / ".rhmethods.pickle")
    )
    async with aiohttp.ClientSession() as http_session:
        client = RobinhoodClient(
            timeout=pytest.TIMEOUT, session=session, http_session=http_session
        )
        yield _ClientContext(client, api_server)


@pytest.fixture
async def logged_in_client(logged_out_client):
    """A logged-in Robinhood client/server fixture."""
    session = logged_out_client.client.session
    session.access_token = pytest.ACCESS_TOKEN
    session.refresh_token = pytest.REFRESH_TOKEN
    session.account_url = pytest.ACCOUNT_URL
    session.account_num = pytest.ACCOUNT_NUM
    yield logged_out_client
