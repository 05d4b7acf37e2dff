import logging
import pickle
from typing import Any, Optional
from urllib.parse import quote
from uuid import uuid4

from . import urls
from .exceptions import ClientUnauthenticatedError, MalformedURLError

logger = logging.getLogger(__name__)


class Session:
    """The credentials and settings shared by every API method of one user.

    A session is passed explicitly to each endpoint function; it is the only
    place an :class:`~.ApiMethod` reads a bearer token from.

    When a `session_file` is given, the device token is saved to it on first use
    in order to avoid re-triggering the SFA challenge flow upon every login. The
    access and refresh tokens can be saved and reloaded to the same file using
    the :meth:`~.dump` and :meth:`~.load` methods, respectively.

    Args:
        base_url: The scheme and host of the Robinhood API servers.
        access_token: A bearer token from a previous login.
        refresh_token: The refresh token paired with ``access_token``.
        session_file: A path to a binary file for saving session variables.
    """

    def __init__(
        self,
        base_url: str = urls.BASE,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        session_file: Optional[str] = None,
    ) -> None:
        self.base_url = base_url
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.account_url: Optional[str] = None
        self.account_num: Optional[str] = None
        self._session_file = session_file

        if session_file is None:
            self.device_token = str(uuid4())
            return

        # Load the device token or generate a new one and save it
        with open(session_file, "ab+") as f:
            try:
                f.seek(0)
                data = pickle.load(f)
                self.device_token = data["device_token"]
            except EOFError:
                self.device_token = str(uuid4())
                pickle.dump({"device_token": self.device_token}, f)
                logger.debug("Saved a new device token to %s", session_file)

    @property
    def authenticated(self) -> bool:
        return self.access_token is not None

    def bearer_token(self) -> str:
        """Return the current access token.

        Raises:
            ClientUnauthenticatedError: No access token is available.
        """
        if self.access_token is None:
            raise ClientUnauthenticatedError()
        return self.access_token

    def url(self, path: str, *identifiers: Any) -> str:
        """Join the base URL, a fixed API path and any identifier segments.

        Each identifier is percent-encoded as one whole path segment and
        followed by a slash, so ``/``, ``?`` and ``#`` inside a value cannot
        change the shape of the URL.

        >>> Session("https://api.example.com/").url("/fundamentals/", "AAPL")
        'https://api.example.com/fundamentals/AAPL/'

        Raises:
            MalformedURLError: An identifier is empty, ``.`` or ``..``.
        """
        base = self.base_url.rstrip("/") if self.base_url else ""
        segments = []
        for identifier in identifiers:
            segment = quote(str(identifier), safe="")
            if segment in ("", ".", ".."):
                raise MalformedURLError(base + path + "".join(segments) + segment)
            segments.append(segment + "/")
        return base + path + "".join(segments)

    def clear(self) -> None:
        """Forget the tokens and account data of the current login."""
        self.access_token = None
        self.refresh_token = None
        self.account_url = None
        self.account_num = None

    def dump(self) -> None:
        """Write the session tokens to the session file.

        Raises:
            ClientUnauthenticatedError: The session is not logged in.
            ValueError: The session has no session file.
        """
        if self.access_token is None or self.refresh_token is None:
            raise ClientUnauthenticatedError()
        if self._session_file is None:
            raise ValueError("This session was created without a session file")

        with open(self._session_file, "rb+") as f:
            data = pickle.load(f)
            data["access_token"] = self.access_token
            data["refresh_token"] = self.refresh_token
            f.seek(0)
            pickle.dump(data, f)
            f.truncate()
        logger.debug("Dumped session tokens to %s", self._session_file)

    def load(self) -> None:
        """Read the session tokens from the session file.

        Raises:
            ValueError: The session has no session file.
        """
        if self._session_file is None:
            raise ValueError("This session was created without a session file")

        with open(self._session_file, "rb") as f:
            data = pickle.load(f)
            self.access_token = data.get("access_token")
            self.refresh_token = data.get("refresh_token")
        logger.debug("Loaded session tokens from %s", self._session_file)
