import aiohttp
import pytest

from rhmethods import ClientUninitializedError, RobinhoodClient, Session


@pytest.mark.asyncio
async def test_async_context_manager():
    async with RobinhoodClient(timeout=pytest.TIMEOUT) as client:
        assert client._http_session is not None
        assert isinstance(client._http_session, aiohttp.ClientSession)
        assert isinstance(client.session, Session)
    assert client._http_session is None


@pytest.mark.asyncio
async def test_async_context_manager_client_uninitialized_error():
    with pytest.raises(ClientUninitializedError):
        async with RobinhoodClient(timeout=pytest.TIMEOUT) as client:
            await client._http_session.close()
            client._http_session = None
