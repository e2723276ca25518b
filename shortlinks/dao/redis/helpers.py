import functools
import redis
from typing import Any
from collections.abc import Callable

from shortlinks.dao.exceptions import DataStoreError


__all__ = []

UNAVAILABLE_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def describe_connection(client: redis.Redis) -> str:
    """Return `host:port/db` of a Redis client, as used in error messages"""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_connection_error[F: Callable[..., Any]](method: F) -> F:
    """Re-raise Redis unavailability as DataStoreError

    A timeout leaves the mapping store just as unusable as a refused
    connection, so both end up as DataStoreError. Any other Redis error
    (WRONGTYPE, NOSCRIPT, ...) is a bug and propagates unchanged.

    Example:
        >>> @handle_redis_connection_error
        ... def count(self):
        ...     return self.redis.get('links:counter')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except UNAVAILABLE_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {describe_connection(self.redis)}.") from e

    return wrapper
