import enum


class RequestMethod(enum.Enum):
    """An :class:`~.enum.Enum` for the HTTP verb of an API method.

    Attributes:
        GET
        POST
        PUT
        DELETE
        HEAD
        OPTIONS
        TRACE
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


class ResponseShape(enum.Enum):
    """An :class:`~.enum.Enum` describing how to interpret a response body.

    See :func:`~.shapes.deserialize` for the value produced by each shape.
    """

    TOKEN = "token"
    CHALLENGE = "challenge"
    EMPTY = "empty"
    ACCOUNT = "account"
    PORTFOLIO = "portfolio"
    HISTORICAL_PORTFOLIO = "historical portfolio"
    POSITION_LIST = "position list"
    WATCHLIST = "watchlist"
    WATCHLIST_ENTRY = "watchlist entry"
    TICKER_FUNDAMENTAL = "ticker fundamental"
    FUNDAMENTAL_LIST = "fundamental list"
    INSTRUMENT_LIST = "instrument list"
    QUOTE_LIST = "quote list"
    HISTORICAL_QUOTE_LIST = "historical quote list"
    RATING_LIST = "rating list"
    TAG_LIST = "tag list"
    TAG_MEMBERS = "tag members"
    ORDER_LIST = "order list"
    ORDER = "order"
    ORDER_ID = "order id"

    def __str__(self) -> str:
        return self.value


class ChallengeType(enum.Enum):
    """An :class:`~.enum.Enum` for the challenge delivery method.

    Attributes:
        EMAIL
        SMS
    """

    EMAIL = "email"
    SMS = "sms"


class HistoricalInterval(enum.Enum):
    """An :class:`~.enum.Enum` for the interval step size for historical queries.

    Attributes:
        FIVE_MIN
        TEN_MIN
        HOUR
        DAY
        WEEK
    """

    FIVE_MIN = "5minute"
    TEN_MIN = "10minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"


class HistoricalSpan(enum.Enum):
    """An :class:`~.enum.Enum` for the window size for historical queries.

    Attributes:
        DAY
        WEEK
        MONTH
        THREE_MONTH
        YEAR
        FIVE_YEAR
    """

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    THREE_MONTH = "3month"
    YEAR = "year"
    FIVE_YEAR = "5year"


class OrderTimeInForce(enum.Enum):
    """An :class:`~.enum.Enum` for describing the order lifetime.

    Attributes:
        GFD: "good for day"
        GTC: "good 'til canceled"
    """

    GFD = "gfd"
    GTC = "gtc"
