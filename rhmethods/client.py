import asyncio
import json
import logging
from types import TracebackType
from typing import Any, List, Optional, Tuple, Type, Union

import aiohttp
from yarl import URL

from . import endpoints, models, shapes
from .decorators import check_http_session, check_tokens, mutually_exclusive
from .exceptions import (
    ClientAPIError,
    ClientRequestError,
    ClientUnauthenticatedError,
    ClientUninitializedError,
    MalformedResponseError,
)
from .method import ApiMethod
from .models import ResponseShape
from .session import Session

logger = logging.getLogger(__name__)


def _decode(shape: Optional[ResponseShape], body: str) -> Any:
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError as e:
        raise MalformedResponseError(shape, body) from e


class RobinhoodClient:
    """An HTTP client that executes :class:`~.ApiMethod` objects against Robinhood.

    The client owns the network connection; the credentials live in its
    :class:`~.Session`, which is also what the :mod:`~.endpoints` functions read.

    Args:
        timeout: The request timeout, in seconds.
        session: The Robinhood session to use (a fresh one by default).
        http_session: An open aiohttp client session to inject, if possible.
    """

    def __init__(
        self,
        timeout: int,
        session: Optional[Session] = None,
        http_session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self._timeout = timeout
        self.session = session if session is not None else Session()
        self._http_session = http_session

    async def __aenter__(self) -> "RobinhoodClient":
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        if self._http_session is None:
            raise ClientUninitializedError()

        await self._http_session.close()
        self._http_session = None

    @check_http_session
    async def execute(self, method: ApiMethod) -> Any:
        """Send an API method to the Robinhood API servers.

        Every check that does not need the network runs before the request is
        sent.

        Args:
            method: A fully built API method.

        Returns:
            The response, deserialized according to ``method.response_shape``.

        Raises:
            ClientAPIError: Robinhood servers responded with an error.
            ClientRequestError: The HTTP request timed out or failed.
            ClientUnauthenticatedError: The method requires a login but carries no
                ``Authorization`` header.
            ClientUninitializedError: The :class:`~.RobinhoodClient` is not initialized.
            MalformedResponseError: The response does not match the declared shape.
            MalformedURLError: The method does not render a valid URL.
            ValueError: The origin of the url is not the session's API servers.
        """
        if method.requires_auth and not any(
            p.key == "Authorization" for p in method.header_parameters
        ):
            raise ClientUnauthenticatedError()

        url = method.url()
        if url.origin() != URL(self.session.base_url).origin():
            raise ValueError(f"{url} is not served by {self.session.base_url}")

        headers: List[Tuple[str, str]] = [
            (p.key, p.value) for p in method.header_parameters
        ]
        headers.append(("Accept", "application/json"))
        data: Optional[bytes] = None
        if method.form_encoded:
            url = URL(method.base_url)
            data = method.form_body().encode("utf-8")
        elif method.body:
            data = method.body.encode("utf-8")
        if data is not None:
            headers.append(("Content-Type", method.media_type))

        logger.debug("Sending %r", method)
        verb = method.method.value
        try:
            async with self._http_session.request(
                verb,
                url,
                headers=headers,
                data=data,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as resp:
                body = await resp.text()
                if resp.status != method.success_code:
                    try:
                        response = _decode(method.response_shape, body) or {}
                    except MalformedResponseError:
                        response = {"detail": body}
                    raise ClientAPIError(resp.method, resp.url, resp.status, response)

                response = _decode(method.response_shape, body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ClientRequestError(verb, url) from e

        logger.debug("%r responded with %d", method, resp.status)
        return shapes.deserialize(method.response_shape, response)

    ###################################################################################
    #                                      OAUTH                                      #
    ###################################################################################

    async def login(
        self,
        username: str,
        password: str,
        expires_in: int = 86400,
        challenge_type: models.ChallengeType = models.ChallengeType.SMS,
        **kwargs,
    ) -> None:
        """Authenticate the user (for both SFA and MFA accounts).

        Args:
            username: The account username.
            password: The account password.
            expires_in: The session duration, in seconds.
            challenge_type: The challenge type (SFA only).

        Raises:
            ClientAPIError: Robinhood servers responded with an error.
            ClientRequestError: The HTTP request timed out or failed.
            ClientUninitializedError: The :class:`~.RobinhoodClient` is not initialized.
        """
        method = endpoints.login(
            self.session,
            username,
            password,
            expires_in=expires_in,
            challenge_type=challenge_type,
            mfa_code=kwargs.get("mfa_code", ""),
            challenge_id=kwargs.get("challenge_id", ""),
        )

        try:
            response = await self.execute(method)
            if response.get("mfa_required"):
                # Try again with mfa_code if 2fac is enabled
                mfa_code = input(f"Enter the {response['mfa_type']} code: ")
                return await self.login(
                    username, password, expires_in, challenge_type, mfa_code=mfa_code
                )
        except ClientAPIError as e:
            response = e.response
            if "challenge" not in response:
                raise e

            while True:
                code = input(f"Enter the {challenge_type.value} code: ")
                challenge = endpoints.respond_to_challenge(
                    self.session, response["challenge"]["id"], code
                )
                try:
                    result = await self.execute(challenge)
                    if "id" in result:
                        # Try again with challenge_id if challenge is passed
                        return await self.login(
                            username,
                            password,
                            expires_in,
                            challenge_type,
                            challenge_id=result["id"],
                        )
                except ClientAPIError as e:
                    if e.response["challenge"]["remaining_attempts"] == 0:
                        raise e from None

        self.session.access_token = response["access_token"]
        self.session.refresh_token = response["refresh_token"]
        logger.debug("Logged in as %s", username)
        await self._fetch_account()

    @check_tokens
    async def logout(self) -> None:
        """Invalidate the current session tokens.

        Raises:
            ClientAPIError: Robinhood server responded with an error.
            ClientRequestError: The HTTP request timed out or failed.
            ClientUnauthenticatedError: The session is not logged in.
            ClientUninitializedError: The :class:`~.RobinhoodClient` is not initialized.
        """
        await self.execute(endpoints.logout(self.session))
        self.session.clear()

    @check_tokens
    async def refresh(self, expires_in: int = 86400) -> None:
        """Fetch a fresh set session tokens.

        Args:
            expires_in: The session duration, in seconds.

        Raises:
            ClientAPIError: Robinhood server responded with an error.
            ClientRequestError: The HTTP request timed out or failed.
            ClientUnauthenticatedError: The session is not logged in.
            ClientUninitializedError: The :class:`~.RobinhoodClient` is not initialized.
        """
        response = await self.execute(endpoints.refresh(self.session, expires_in))
        self.session.access_token = response["access_token"]
        self.session.refresh_token = response["refresh_token"]

    async def load(self) -> None:
        """Restore the session tokens from the session file and fetch the account.

        Raises:
            ClientAPIError: Robinhood server responded with an error.
            ClientRequestError: The HTTP request timed out or failed.
            ClientUnauthenticatedError: The session file holds no tokens.
            ClientUninitializedError: The :class:`~.RobinhoodClient` is not initialized.
        """
        self.session.load()
        await self._fetch_account()

    async def _fetch_account(self) -> None:
        # Order methods need the account URL and number
        account = await self.execute(endpoints.get_account(self.session))
        self.session.account_url = account["url"]
        self.session.account_num = account["account_number"]

    ###################################################################################
    #                                     ORDERS                                      #
    ###################################################################################

    async def place_order(self, **kwargs) -> str:
        """Place a custom order.

        Returns:
            The order ID.

        Raises:
            ClientAPIError: Robinhood server responded with an error.
            ClientRequestError: The HTTP request timed out or failed.
            ClientUnauthenticatedError: The session is not logged in.
            ClientUninitializedError: The :class:`~.RobinhoodClient` is not initialized.
        """
        return await self.execute(endpoints.place_order(self.session, **kwargs))

    async def place_limit_buy_order(
        self,
        symbol: str,
        price: Union[int, float],
        quantity: int,
        time_in_force: models.OrderTimeInForce = models.OrderTimeInForce.GFD,
        extended_hours: bool = False,
    ) -> str:
        """Place a limit buy order.

        Args:
            symbol: A stock symbol.
            price: The limit price, in dollars.
            quantity: The quantity of shares to buy.
            time_in_force: Indicates how long the order should remain active before it
                           executes or expires.
            extended_hours: The order can be executed in extended trading hours.

        Returns:
            The order ID.
        """
        return await self._place_limit_order(
            "buy", symbol, price, quantity, time_in_force, extended_hours
        )

    async def place_limit_sell_order(
        self,
        symbol: str,
        price: Union[int, float],
        quantity: int,
        time_in_force: models.OrderTimeInForce = models.OrderTimeInForce.GFD,
        extended_hours: bool = False,
    ) -> str:
        """Place a limit sell order.

        Args:
            symbol: A stock symbol.
            price: The limit price, in dollars.
            quantity: The quantity of shares to sell.
            time_in_force: Indicates how long the order should remain active before it
                           executes or expires.
            extended_hours: The order can be executed in extended trading hours.

        Returns:
            The order ID.
        """
        return await self._place_limit_order(
            "sell", symbol, price, quantity, time_in_force, extended_hours
        )

    @mutually_exclusive("amount", "quantity")
    async def place_market_buy_order(
        self,
        symbol: str,
        *,
        amount: Optional[Union[int, float]] = None,
        quantity: Optional[Union[int, float]] = None,
        time_in_force: models.OrderTimeInForce = models.OrderTimeInForce.GFD,
        extended_hours: bool = False,
    ) -> str:
        """Place a market buy order by quantity of shares or dollar amount.

        The order is priced at the current ask.

        Raises:
            ValueError: Both/neither of ``amount`` and ``quantity`` are supplied.
        """
        return await self._place_market_order(
            "buy", "ask_price", symbol, amount, quantity, time_in_force, extended_hours
        )

    @mutually_exclusive("amount", "quantity")
    async def place_market_sell_order(
        self,
        symbol: str,
        *,
        amount: Optional[Union[int, float]] = None,
        quantity: Optional[Union[int, float]] = None,
        time_in_force: models.OrderTimeInForce = models.OrderTimeInForce.GFD,
        extended_hours: bool = False,
    ) -> str:
        """Place a market sell order by quantity of shares or dollar amount.

        The order is priced at the current bid.

        Raises:
            ValueError: Both/neither of ``amount`` and ``quantity`` are supplied.
        """
        return await self._place_market_order(
            "sell", "bid_price", symbol, amount, quantity, time_in_force, extended_hours
        )

    async def _place_limit_order(
        self,
        side: str,
        symbol: str,
        price: Union[int, float],
        quantity: int,
        time_in_force: models.OrderTimeInForce,
        extended_hours: bool,
    ) -> str:
        instruments = await self.execute(
            endpoints.get_instruments(self.session, symbol=symbol)
        )
        return await self.place_order(
            extended_hours=extended_hours,
            instrument=instruments[0]["url"],
            price=price,
            quantity=quantity,
            side=side,
            symbol=symbol,
            time_in_force=time_in_force.value,
            trigger="immediate",
            type="limit",
        )

    async def _place_market_order(
        self,
        side: str,
        price_key: str,
        symbol: str,
        amount: Optional[Union[int, float]],
        quantity: Optional[Union[int, float]],
        time_in_force: models.OrderTimeInForce,
        extended_hours: bool,
    ) -> str:
        method = endpoints.get_quotes(self.session, symbols=[symbol])
        quotes = await self.execute(method)
        price = float(quotes[0][price_key])

        payload = {
            "extended_hours": extended_hours,
            "instrument": quotes[0]["instrument"],
            "price": price,
            "side": side,
            "symbol": symbol,
            "time_in_force": time_in_force.value,
            "trigger": "immediate",
            "type": "market",
        }
        if amount is not None:
            payload["dollar_based_amount"] = {
                "amount": round(amount, 2),
                "currency_code": "USD",
            }
            payload["quantity"] = round(amount / price, 6)
        elif quantity is not None:
            payload["quantity"] = round(quantity, 6)

        return await self.place_order(**payload)
