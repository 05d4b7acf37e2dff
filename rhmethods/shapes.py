from typing import Any, Callable, Dict, List, Optional

from .exceptions import MalformedResponseError
from .models import ResponseShape


def _whole(response: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(response, dict):
        raise TypeError(f"expected a JSON object, got {type(response).__name__}")
    return response


def _empty(response: Any) -> None:
    return None


def _first_result(response: Dict[str, Any]) -> Dict[str, Any]:
    return response["results"][0]


def _results(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    results = response["results"]
    if not isinstance(results, list):
        raise TypeError("expected 'results' to be a JSON array")
    return results


def _watchlist(response: Dict[str, Any]) -> List[str]:
    return [result["instrument"] for result in _results(response)]


def _tags(response: Dict[str, Any]) -> List[str]:
    return [tag["slug"] for tag in response["tags"]]


def _tag_members(response: Dict[str, Any]) -> List[str]:
    return response["instruments"]


def _order_id(response: Dict[str, Any]) -> str:
    return response["id"]


_DESERIALIZERS: Dict[ResponseShape, Callable[[Any], Any]] = {
    ResponseShape.TOKEN: _whole,
    ResponseShape.CHALLENGE: _whole,
    ResponseShape.EMPTY: _empty,
    ResponseShape.ACCOUNT: _first_result,
    ResponseShape.PORTFOLIO: _first_result,
    ResponseShape.HISTORICAL_PORTFOLIO: _whole,
    ResponseShape.POSITION_LIST: _results,
    ResponseShape.WATCHLIST: _watchlist,
    ResponseShape.WATCHLIST_ENTRY: _whole,
    ResponseShape.TICKER_FUNDAMENTAL: _whole,
    ResponseShape.FUNDAMENTAL_LIST: _results,
    ResponseShape.INSTRUMENT_LIST: _results,
    ResponseShape.QUOTE_LIST: _results,
    ResponseShape.HISTORICAL_QUOTE_LIST: _results,
    ResponseShape.RATING_LIST: _results,
    ResponseShape.TAG_LIST: _tags,
    ResponseShape.TAG_MEMBERS: _tag_members,
    ResponseShape.ORDER_LIST: _results,
    ResponseShape.ORDER: _whole,
    ResponseShape.ORDER_ID: _order_id,
}


def deserialize(shape: Optional[ResponseShape], response: Any) -> Any:
    """Convert a decoded JSON response into the value declared by `shape`.

    ============================  =================================================
    Shape                         Value
    ============================  =================================================
    ``EMPTY``                     ``None``
    ``ACCOUNT``, ``PORTFOLIO``    the first entry of ``results``
    ``*_LIST``                    the ``results`` array
    ``WATCHLIST``                 the instrument URL of every entry
    ``TAG_LIST``                  the slug of every tag
    ``TAG_MEMBERS``               the ``instruments`` array
    ``ORDER_ID``                  the ``id`` of the order
    anything else                 the JSON object itself
    ============================  =================================================

    Args:
        shape: The declared response shape, or ``None`` for the raw response.
        response: The decoded JSON response.

    Returns:
        The deserialized value.

    Raises:
        MalformedResponseError: The response does not match `shape`.
    """
    if shape is None:
        return response

    try:
        return _DESERIALIZERS[shape](response)
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponseError(shape, response) from e
