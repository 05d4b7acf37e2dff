"""Builders for every supported Robinhood API method.

Each function takes the caller's :class:`~.Session` first and returns a fully
populated :class:`~.ApiMethod`, ready for :meth:`~.RobinhoodClient.execute`.
Nothing here performs I/O.
"""
import json
import re
from typing import Any, Iterable, Optional
from urllib.parse import quote
from uuid import uuid4

from . import models, urls
from .decorators import mutually_exclusive
from .exceptions import ClientUnauthenticatedError
from .method import ApiMethod
from .models import RequestMethod, ResponseShape
from .session import Session

_CLIENT_ID = "c82SH0WZOsabOXGP2sxqcj34FxkvfnWRZBKlBjFS"

_UNWANTED = re.compile(r"[\[\]\s]")


def join_values(values: Iterable[Any]) -> str:
    """Join identifiers into the single comma separated value Robinhood expects.

    >>> join_values(["abc123", " def456 "])
    'abc123,def456'
    """
    cleaned = (_UNWANTED.sub("", str(value)) for value in values)
    return ",".join(value for value in cleaned if value)


def _authenticate(method: ApiMethod, session: Session) -> ApiMethod:
    method.require_auth()
    method.add_auth_header(session)
    return method


###################################################################################
#                                      OAUTH                                      #
###################################################################################


def login(
    session: Session,
    username: str,
    password: str,
    expires_in: int = 86400,
    challenge_type: models.ChallengeType = models.ChallengeType.SMS,
    mfa_code: str = "",
    challenge_id: str = "",
) -> ApiMethod:
    """Request a password grant for the user.

    Args:
        session: The session to log in.
        username: The account username.
        password: The account password.
        expires_in: The session duration, in seconds.
        challenge_type: The challenge type (SFA only).
        mfa_code: The MFA passcode, when MFA is enabled.
        challenge_id: The ID of an already passed challenge (SFA only).
    """
    payload = {
        "challenge_type": challenge_type.value,
        "client_id": _CLIENT_ID,
        "device_token": session.device_token,
        "expires_in": expires_in,
        "grant_type": "password",
        "mfa_code": mfa_code,
        "password": password,
        "scope": "internal",
        "username": username,
    }
    method = ApiMethod(
        session.url(urls.LOGIN),
        method=RequestMethod.POST,
        response_shape=ResponseShape.TOKEN,
        body=json.dumps(payload),
        name="login",
    )
    if challenge_id:
        method.add_header_parameter("x-robinhood-challenge-response-id", challenge_id)
    return method


def respond_to_challenge(session: Session, challenge_id: str, code: str) -> ApiMethod:
    """Answer an SFA challenge with the code sent by SMS or email."""
    return ApiMethod(
        session.url(urls.CHALLENGE, challenge_id, "respond"),
        method=RequestMethod.POST,
        response_shape=ResponseShape.CHALLENGE,
        body=json.dumps({"response": code}),
        name="respond_to_challenge",
    )


def logout(session: Session) -> ApiMethod:
    """Revoke the session's refresh token.

    The token revocation endpoint takes its parameters as a form body.

    Raises:
        ClientUnauthenticatedError: The session has no refresh token.
    """
    if session.refresh_token is None:
        raise ClientUnauthenticatedError()

    method = ApiMethod(
        session.url(urls.LOGOUT),
        method=RequestMethod.POST,
        response_shape=ResponseShape.EMPTY,
        name="logout",
    )
    method.add_url_parameter("client_id", _CLIENT_ID)
    method.add_url_parameter("token", quote(session.refresh_token, safe=""))
    method.use_form_body()
    return method


def refresh(session: Session, expires_in: int = 86400) -> ApiMethod:
    """Trade the session's refresh token for a fresh set of tokens.

    Raises:
        ClientUnauthenticatedError: The session has no refresh token.
    """
    if session.refresh_token is None:
        raise ClientUnauthenticatedError()

    payload = {
        "client_id": _CLIENT_ID,
        "expires_in": expires_in,
        "grant_type": "refresh_token",
        "refresh_token": session.refresh_token,
        "scope": "internal",
    }
    return ApiMethod(
        session.url(urls.LOGIN),
        method=RequestMethod.POST,
        response_shape=ResponseShape.TOKEN,
        body=json.dumps(payload),
        name="refresh",
    )


###################################################################################
#                                     PROFILE                                     #
###################################################################################


def get_account(session: Session) -> ApiMethod:
    """Fetch information associated with the Robinhood account."""
    method = ApiMethod(
        session.url(urls.ACCOUNTS),
        response_shape=ResponseShape.ACCOUNT,
        name="get_account",
    )
    return _authenticate(method, session)


def get_portfolio(session: Session) -> ApiMethod:
    """Fetch the equity value, margin and withdrawable amount of the account."""
    method = ApiMethod(
        session.url(urls.PORTFOLIOS),
        response_shape=ResponseShape.PORTFOLIO,
        name="get_portfolio",
    )
    return _authenticate(method, session)


def get_historical_portfolio(
    session: Session,
    interval: models.HistoricalInterval,
    span: models.HistoricalSpan,
    extended_hours: bool = False,
) -> ApiMethod:
    """Fetch the historical value of the account portfolio.

    Args:
        session: A logged-in session.
        interval: The granularity of the historical data.
        span: The period of the historical data.
        extended_hours: Include data from extended trading hours.

    Raises:
        ClientUnauthenticatedError: The session is not logged in.

    Warning:
        Certain combinations of ``interval`` and ``span`` will be rejected by
        Robinhood.
    """
    if session.account_num is None:
        raise ClientUnauthenticatedError()

    method = ApiMethod(
        session.url(urls.HISTORICAL_PORTFOLIOS, session.account_num),
        response_shape=ResponseShape.HISTORICAL_PORTFOLIO,
        name="get_historical_portfolio",
    )
    method.add_url_parameter("bounds", "extended" if extended_hours else "regular")
    method.add_url_parameter("interval", interval.value)
    method.add_url_parameter("span", span.value)
    return _authenticate(method, session)


###################################################################################
#                                     ACCOUNT                                     #
###################################################################################


def get_positions(session: Session, nonzero: bool = True) -> ApiMethod:
    """Fetch the positions held by the account.

    Args:
        session: A logged-in session.
        nonzero: Only fetch open positions.
    """
    method = ApiMethod(
        session.url(urls.POSITIONS),
        response_shape=ResponseShape.POSITION_LIST,
        name="get_positions",
    )
    method.add_url_parameter("nonzero", str(nonzero).lower())
    return _authenticate(method, session)


def get_watchlist(session: Session, watchlist: str = "Default") -> ApiMethod:
    """Fetch the instrument URLs in a given watchlist."""
    method = ApiMethod(
        session.url(urls.WATCHLISTS, watchlist),
        response_shape=ResponseShape.WATCHLIST,
        name="get_watchlist",
    )
    return _authenticate(method, session)


def add_to_watchlist(
    session: Session, instrument: str, watchlist: str = "Default"
) -> ApiMethod:
    """Add a security to the given watchlist.

    Args:
        session: A logged-in session.
        instrument: The instrument URL.
        watchlist: The name of the watchlist.
    """
    method = ApiMethod(
        session.url(urls.WATCHLISTS, watchlist),
        method=RequestMethod.POST,
        response_shape=ResponseShape.WATCHLIST_ENTRY,
        body=json.dumps({"instrument": instrument}),
        success_code=201,
        name="add_to_watchlist",
    )
    return _authenticate(method, session)


def remove_from_watchlist(
    session: Session, id_: str, watchlist: str = "Default"
) -> ApiMethod:
    """Remove a security, by instrument ID, from the given watchlist."""
    method = ApiMethod(
        session.url(urls.WATCHLISTS, watchlist, id_),
        method=RequestMethod.DELETE,
        response_shape=ResponseShape.EMPTY,
        success_code=204,
        name="remove_from_watchlist",
    )
    return _authenticate(method, session)


###################################################################################
#                                     STOCKS                                      #
###################################################################################


def get_ticker_fundamental(session: Session, ticker: str) -> ApiMethod:
    """Fetch the fundamental information of a single stock symbol.

    Args:
        session: A logged-in session.
        ticker: A stock symbol.

    Raises:
        ClientUnauthenticatedError: The session is not logged in.
    """
    method = ApiMethod(
        session.url(urls.FUNDAMENTALS, ticker),
        response_shape=ResponseShape.TICKER_FUNDAMENTAL,
        name="get_ticker_fundamental",
    )
    return _authenticate(method, session)


@mutually_exclusive("symbols", "instruments")
def get_fundamentals(
    session: Session,
    *,
    symbols: Optional[Iterable[str]] = None,
    instruments: Optional[Iterable[str]] = None,
) -> ApiMethod:
    """Fetch the fundamental information pertaining to a list of securities.

    Args:
        session: A logged-in session.
        symbols: A sequence of stock symbols.
        instruments: A sequence of instrument URLs.

    Raises:
        ClientUnauthenticatedError: The session is not logged in.
        ValueError: Both/neither of ``symbols`` and ``instruments`` are supplied.
    """
    method = ApiMethod(
        session.url(urls.FUNDAMENTALS),
        response_shape=ResponseShape.FUNDAMENTAL_LIST,
        name="get_fundamentals",
    )
    if symbols is not None:
        method.add_url_parameter("symbols", join_values(symbols))
    elif instruments is not None:
        method.add_url_parameter("instruments", join_values(instruments))
    return _authenticate(method, session)


@mutually_exclusive("symbol", "ids")
def get_instruments(
    session: Session,
    *,
    symbol: Optional[str] = None,
    ids: Optional[Iterable[str]] = None,
) -> ApiMethod:
    """Fetch the instrument information pertaining to a list of securities.

    Args:
        session: A logged-in session.
        symbol: A single stock symbol.
        ids: A sequence of instrument IDs.

    Raises:
        ClientUnauthenticatedError: The session is not logged in.
        ValueError: Both/neither of ``symbol`` and ``ids`` are supplied.
    """
    method = ApiMethod(
        session.url(urls.INSTRUMENTS),
        response_shape=ResponseShape.INSTRUMENT_LIST,
        name="get_instruments",
    )
    if symbol is not None:
        method.add_url_parameter("symbol", symbol)
    elif ids is not None:
        method.add_url_parameter("ids", join_values(ids))
    return _authenticate(method, session)


@mutually_exclusive("symbols", "instruments")
def get_quotes(
    session: Session,
    *,
    symbols: Optional[Iterable[str]] = None,
    instruments: Optional[Iterable[str]] = None,
) -> ApiMethod:
    """Fetch the bid/ask quotes pertaining to a list of securities.

    Raises:
        ClientUnauthenticatedError: The session is not logged in.
        ValueError: Both/neither of ``symbols`` and ``instruments`` are supplied.
    """
    method = ApiMethod(
        session.url(urls.QUOTES),
        response_shape=ResponseShape.QUOTE_LIST,
        name="get_quotes",
    )
    if symbols is not None:
        method.add_url_parameter("symbols", join_values(symbols))
    elif instruments is not None:
        method.add_url_parameter("instruments", join_values(instruments))
    return _authenticate(method, session)


@mutually_exclusive("symbols", "instruments")
def get_historical_quotes(
    session: Session,
    interval: models.HistoricalInterval,
    span: models.HistoricalSpan,
    extended_hours: bool = False,
    *,
    symbols: Optional[Iterable[str]] = None,
    instruments: Optional[Iterable[str]] = None,
) -> ApiMethod:
    """Fetch OHLC quotes at every interval of a span for a list of securities.

    Args:
        session: A logged-in session.
        interval: The granularity of the historical data.
        span: The period of the historical data.
        extended_hours: Include data from extended trading hours.
        symbols: A sequence of stock symbols.
        instruments: A sequence of instrument URLs.

    Raises:
        ClientUnauthenticatedError: The session is not logged in.
        ValueError: Both/neither of ``symbols`` and ``instruments`` are supplied.
    """
    method = ApiMethod(
        session.url(urls.HISTORICALS),
        response_shape=ResponseShape.HISTORICAL_QUOTE_LIST,
        name="get_historical_quotes",
    )
    method.add_url_parameter("bounds", "extended" if extended_hours else "regular")
    method.add_url_parameter("interval", interval.value)
    method.add_url_parameter("span", span.value)
    if symbols is not None:
        method.add_url_parameter("symbols", join_values(symbols))
    elif instruments is not None:
        method.add_url_parameter("instruments", join_values(instruments))
    return _authenticate(method, session)


def get_ratings(session: Session, ids: Iterable[str]) -> ApiMethod:
    """Fetch the buy/sell/hold analyst ratings for a sequence of securities.

    Ratings do not require a login; the session's token is sent when present.

    Args:
        session: Any session.
        ids: A sequence of instrument IDs.
    """
    method = ApiMethod(
        session.url(urls.RATINGS),
        response_shape=ResponseShape.RATING_LIST,
        name="get_ratings",
    )
    method.add_url_parameter("ids", join_values(ids))
    if session.authenticated:
        method.add_auth_header(session)
    return method


def get_tags(session: Session, id_: str) -> ApiMethod:
    """Fetch the Robinhood tag slugs of a security, by instrument ID."""
    method = ApiMethod(
        session.url(urls.TAGS, "instrument", id_),
        response_shape=ResponseShape.TAG_LIST,
        name="get_tags",
    )
    return _authenticate(method, session)


def get_tag_members(session: Session, tag: str) -> ApiMethod:
    """Fetch the instruments belonging to a particular tag."""
    method = ApiMethod(
        session.url(urls.TAGS, "tag", tag),
        response_shape=ResponseShape.TAG_MEMBERS,
        name="get_tag_members",
    )
    return _authenticate(method, session)


###################################################################################
#                                     ORDERS                                      #
###################################################################################


def get_orders(session: Session, order_id: Optional[str] = None) -> ApiMethod:
    """Fetch every order placed on the account, or a single order by ID.

    The order list deserializes to a list of orders; a single order
    deserializes to the order itself.
    """
    if order_id is None:
        url, shape = session.url(urls.ORDERS), ResponseShape.ORDER_LIST
    else:
        url, shape = session.url(urls.ORDERS, order_id), ResponseShape.ORDER
    method = ApiMethod(url, response_shape=shape, name="get_orders")
    return _authenticate(method, session)


def cancel_order(session: Session, order_id: str) -> ApiMethod:
    method = ApiMethod(
        session.url(urls.ORDERS, order_id, "cancel"),
        method=RequestMethod.POST,
        response_shape=ResponseShape.EMPTY,
        name="cancel_order",
    )
    return _authenticate(method, session)


def place_order(session: Session, **fields: Any) -> ApiMethod:
    """Place a custom order on the session's account.

    Args:
        session: A logged-in session whose account has been fetched.
        fields: The order fields (``symbol``, ``side``, ``type`` ...).

    Raises:
        ClientUnauthenticatedError: The session is not logged in.
    """
    if session.account_url is None:
        raise ClientUnauthenticatedError()

    payload = {"account": session.account_url, "ref_id": str(uuid4()), **fields}
    method = ApiMethod(
        session.url(urls.ORDERS),
        method=RequestMethod.POST,
        response_shape=ResponseShape.ORDER_ID,
        body=json.dumps(payload),
        success_code=201,
        name="place_order",
    )
    return _authenticate(method, session)
