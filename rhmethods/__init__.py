__version__ = "1.0.0"
__all__ = [
    "ApiMethod",
    "RobinhoodClient",
    "Session",
    "endpoints",
    # exceptions
    "RHMethodsError",
    "ClientAPIError",
    "ClientError",
    "ClientRequestError",
    "ClientUnauthenticatedError",
    "ClientUninitializedError",
    "MalformedResponseError",
    "MalformedURLError",
    # models
    "ChallengeType",
    "HistoricalInterval",
    "HistoricalSpan",
    "OrderTimeInForce",
    "RequestMethod",
    "ResponseShape",
    # parameters
    "HttpHeaderParameter",
    "UrlParameter",
]

from . import endpoints
from .client import RobinhoodClient
from .exceptions import (
    ClientAPIError,
    ClientError,
    ClientRequestError,
    ClientUnauthenticatedError,
    ClientUninitializedError,
    MalformedResponseError,
    MalformedURLError,
    RHMethodsError,
)
from .method import ApiMethod
from .models import (
    ChallengeType,
    HistoricalInterval,
    HistoricalSpan,
    OrderTimeInForce,
    RequestMethod,
    ResponseShape,
)
from .parameters import HttpHeaderParameter, UrlParameter
from .session import Session
