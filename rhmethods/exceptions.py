from typing import Any, Dict, Optional

from yarl import URL


class RHMethodsError(Exception):
    """Base class for all rhmethods errors."""

    pass


class ClientError(RHMethodsError):
    """Base class for all errors raised while building or executing an API method."""

    pass


class ClientUninitializedError(ClientError):
    """Indicates the :class:`~.RobinhoodClient` was used before initialization."""

    def __init__(self) -> None:
        msg = "The Robinhood client was not initialized properly.\n"
        super().__init__(msg)


class ClientUnauthenticatedError(ClientError):
    """Indicates an authenticated API method was built without a session token."""

    def __init__(self) -> None:
        msg = (
            "The Robinhood session has not been authenticated properly.\n"
            "Try logging in first."
        )
        super().__init__(msg)


class MalformedURLError(ClientError):
    """Indicates an API method could not render a valid URL.

    Args:
        url: The offending URL text.
    """

    def __init__(self, url: Any) -> None:
        super().__init__(f"Unable to build a valid URL from {url!r}.\n")
        self.url = url


class MalformedResponseError(ClientError):
    """Indicates a response body does not match the declared response shape.

    Args:
        shape: The declared response shape.
        response: The decoded (or raw) response body.
    """

    def __init__(self, shape: Any, response: Any) -> None:
        msg = (
            f"Robinhood responded with a body that does not match {shape}.\n"
            f"Full Response: {response}"
        )
        super().__init__(msg)
        self.shape = shape
        self.response = response


class ClientRequestError(ClientError):
    """Indicates there was an issue contacting the Robinhood servers.

    Args:
        method: The HTTP method.
        url: The URL endpoint.
        msg: The exception message.
    """

    def __init__(self, method: str, url: URL, msg: Optional[str] = None) -> None:
        if msg is None:
            msg = f"An error occurred reaching Robinhood.\nRequest: {method} {url}\n"
        super().__init__(msg)
        self.method = method
        self.url = url


class ClientAPIError(ClientRequestError):
    """Indicates there was an invalid response from the Robinhood servers.

    Args:
        method: The HTTP method.
        url: The URL endpoint.
        status: The HTTP error code.
        response: The Robinhood server's response.
    """

    def __init__(
        self, method: str, url: URL, status: int, response: Dict[str, Any]
    ) -> None:
        msg = (
            f"{method} request to {url} responded with a {status} error.\n"
            f"Full Response: {response}"
        )
        super().__init__(method, url, msg)
        self.status = status
        self.response = response
