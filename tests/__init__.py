import asyncio

import aiohttp.test_utils
from aiohttp import web


class CaseControlledTestServer(aiohttp.test_utils.RawTestServer):
    """Test server that relies on test case to supply responses and control timing."""

    def __init__(self, **kwargs):
        super().__init__(self._handle_request, **kwargs)
        self._requests = asyncio.Queue()
        self._responses = {}

    @property
    def base_url(self):
        return f"http://{self.host}:{self.port}"

    async def close(self):
        """Cancel all pending requests."""
        for future in self._responses.values():
            future.cancel()
        await super().close()

    async def _handle_request(self, request):
        """Push the request to the test case and wait until it provides a response."""
        response = asyncio.get_running_loop().create_future()
        self._responses[id(request)] = response
        self._requests.put_nowait(request)

        try:
            # Wait until the test case provides a response
            return await response
        finally:
            del self._responses[id(request)]

    async def receive_request(self, timeout=None):
        """Wait until the test server receives a request."""
        return await asyncio.wait_for(self._requests.get(), timeout=timeout)

    def send_response(self, request, *args, **kwargs):
        """Send a web response from the test case to the client."""
        response = web.Response(*args, **kwargs)
        self._responses[id(request)].set_result(response)
