from typing import Any, List, Optional, Tuple

from yarl import URL

from .exceptions import MalformedURLError
from .models import RequestMethod, ResponseShape
from .parameters import HttpHeaderParameter, UrlParameter
from .session import Session

JSON_MEDIA_TYPE = "application/json; charset=utf-8"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"


def _parse_url(text: Any) -> URL:
    try:
        url = URL(text)
    except (TypeError, ValueError) as e:
        raise MalformedURLError(text) from e

    if not url.is_absolute() or url.scheme not in ("http", "https") or not url.host:
        raise MalformedURLError(text)
    return url


class ApiMethod:
    """Everything needed to send one request to Robinhood and read its response.

    An API method is built by one of the functions in :mod:`~.endpoints`, sent
    once by :meth:`~.RobinhoodClient.execute`, and then discarded.

    Args:
        base_url: The endpoint URL, without a query string.
        method: The HTTP verb.
        response_shape: How the response body should be deserialized.
        body: The raw request body.
        media_type: The content type of ``body``.
        success_code: The HTTP status code indicating success.
        name: A label used in logs and :meth:`~.info`.

    Raises:
        MalformedURLError: ``base_url`` is not an absolute http(s) URL.
    """

    def __init__(
        self,
        base_url: str,
        method: RequestMethod = RequestMethod.GET,
        response_shape: Optional[ResponseShape] = None,
        body: Optional[str] = None,
        media_type: str = JSON_MEDIA_TYPE,
        success_code: int = 200,
        name: Optional[str] = None,
    ) -> None:
        _parse_url(base_url)
        self._base_url = base_url
        self._method = method
        self._response_shape = response_shape
        self._body = body
        self._media_type = media_type
        self._success_code = success_code
        self._name = name or type(self).__name__
        self._url_parameters: List[UrlParameter] = []
        self._header_parameters: List[HttpHeaderParameter] = []
        self._requires_auth = False
        self._form_encoded = False

    def __repr__(self) -> str:
        return f"<{self._name} {self._method.value} {self._base_url}>"

    @property
    def name(self) -> str:
        return self._name

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def method(self) -> RequestMethod:
        return self._method

    @property
    def response_shape(self) -> Optional[ResponseShape]:
        return self._response_shape

    @property
    def body(self) -> str:
        """The request body, or the empty string when none was set."""
        return "" if self._body is None else self._body

    @property
    def media_type(self) -> str:
        return self._media_type

    @property
    def success_code(self) -> int:
        return self._success_code

    @property
    def url_parameters(self) -> Tuple[UrlParameter, ...]:
        return tuple(self._url_parameters)

    @property
    def header_parameters(self) -> Tuple[HttpHeaderParameter, ...]:
        return tuple(self._header_parameters)

    @property
    def requires_auth(self) -> bool:
        return self._requires_auth

    @property
    def form_encoded(self) -> bool:
        return self._form_encoded

    def add_url_parameter(self, key: str, value: str) -> None:
        """Append a query parameter. Repeated keys are all kept, in order."""
        self._url_parameters.append(UrlParameter(key, value))

    def add_header_parameter(self, key: str, value: str) -> None:
        """Append an HTTP header. Repeated keys are all kept, in order."""
        self._header_parameters.append(HttpHeaderParameter(key, value))

    def add_auth_header(self, session: Session) -> None:
        """Append the ``Authorization`` header for the session's bearer token.

        Args:
            session: The session holding the access token.

        Raises:
            ClientUnauthenticatedError: The session is not logged in. No header
                is added.
        """
        token = session.bearer_token()
        self.add_header_parameter("Authorization", f"Bearer {token}")

    def require_auth(self) -> None:
        """Mark this method as only valid for a logged-in session."""
        self._requires_auth = True

    def use_form_body(self) -> None:
        """Send the url parameters as a form encoded body instead of a query."""
        self._form_encoded = True
        self._media_type = FORM_MEDIA_TYPE

    def url(self) -> URL:
        """Render the base URL followed by the query string.

        Returns:
            ``base_url?k1=v1&k2=v2`` with parameters in insertion order, or the
            bare ``base_url`` when there are no parameters.

        Raises:
            MalformedURLError: The rendered text is not a valid URL.
        """
        text = self._base_url
        if self._url_parameters:
            text += "?" + self.form_body()
        return _parse_url(text)

    def form_body(self) -> str:
        """Render the url parameters as ``k1=v1&k2=v2``."""
        return "&".join(str(p) for p in self._url_parameters)

    def info(self) -> str:
        """Describe the method for debugging."""
        lines = [
            f"{self._name}",
            f"Base URL: {self._base_url}",
            f"Method: {self._method.value}",
            "--HTTP Header Parameters--",
        ]
        lines += [f"{p.key} : {p.value}" for p in self._header_parameters]
        lines.append("--Url Parameters--")
        lines += [f"{p.key} : {p.value}" for p in self._url_parameters]
        return "\n".join(lines) + "\n"
