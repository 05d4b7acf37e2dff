"""Robinhood API paths, relative to :attr:`~.Session.base_url`."""

BASE = "https://api.robinhood.com"

# OAuth
OAUTH = "/oauth2/"
LOGIN = OAUTH + "token/"
LOGOUT = OAUTH + "revoke_token/"
CHALLENGE = "/challenge/"

# Profile
ACCOUNTS = "/accounts/"
PORTFOLIOS = "/portfolios/"
HISTORICAL_PORTFOLIOS = PORTFOLIOS + "historicals/"

# Account
POSITIONS = "/positions/"
WATCHLISTS = "/watchlists/"

# Stocks
FUNDAMENTALS = "/fundamentals/"
INSTRUMENTS = "/instruments/"
QUOTES = "/quotes/"
HISTORICALS = QUOTES + "historicals/"
MIDLANDS = "/midlands/"
RATINGS = MIDLANDS + "ratings/"
TAGS = MIDLANDS + "tags/"

# Orders
ORDERS = "/orders/"
