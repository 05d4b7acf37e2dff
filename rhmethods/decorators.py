import inspect
from functools import wraps
from typing import Callable

from .exceptions import ClientUnauthenticatedError, ClientUninitializedError


def check_http_session(func: Callable):
    @wraps(func)
    async def inner(self, *args, **kwargs):
        if self._http_session is None:
            raise ClientUninitializedError()
        return await func(self, *args, **kwargs)

    return inner


def check_tokens(func: Callable):
    @wraps(func)
    async def inner(self, *args, **kwargs):
        if self.session.access_token is None or self.session.refresh_token is None:
            raise ClientUnauthenticatedError()
        return await func(self, *args, **kwargs)

    return inner


def mutually_exclusive(keyword: str, *keywords: str):
    keywords = (keyword, *keywords)

    def wrapper(func: Callable):
        signature = inspect.signature(func)

        @wraps(func)
        def inner(*args, **kwargs):
            arguments = signature.bind(*args, **kwargs).arguments
            if sum(arguments.get(k) is not None for k in keywords) != 1:
                raise ValueError(f"You must specify exactly one of {keywords}")
            return func(*args, **kwargs)

        return inner

    return wrapper
