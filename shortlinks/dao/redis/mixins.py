"""Redis client setup shared by Redis-backed DAOs

Classes:
    - RedisClientMixin: owns the Redis client and the key schema, and
      refuses to construct a DAO whose server doesn't answer PING.

Example:
    >>> class URLMappingRedisDAO(RedisClientMixin, URLMappingBaseDAO):
    ...     pass
    ...
    >>> dao = URLMappingRedisDAO(redis_host='cache.internal', redis_ssl=True, prefix='shortlinks:prod')
    >>> dao.keys.link_url_key('aZ3kQ1X')
    'shortlinks:prod:links:aZ3kQ1X:url'
"""

from typing import Optional

import redis

from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.redis.helpers import UNAVAILABLE_ERRORS, describe_connection
from shortlinks.dao.exceptions import DataStoreError


DEFAULT_SOCKET_TIMEOUT = 5.0


class RedisClientMixin:
    """Attach a connected Redis client (`self.redis`) and key schema (`self.keys`)

    Connection parameters arrive with a `redis_` prefix so that an AppConfig
    `redis` section can be splatted straight into a DAO constructor. A URL
    (`redis_url`) takes precedence over host/port/db, and an existing client
    (`redis_client`) over both. Clients built here always decode responses,
    since DAO lookups return `str`.

    Raises:
        DataStoreError:
            If the server doesn't answer the initial PING.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_ssl: Optional[bool] = False,
        redis_socket_timeout: Optional[float] = DEFAULT_SOCKET_TIMEOUT,
        redis_url: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        if redis_client is None:
            timeouts = {
                'socket_timeout': float(redis_socket_timeout),
                'socket_connect_timeout': float(redis_socket_timeout),
            }
            if redis_url:
                redis_client = redis.Redis.from_url(redis_url, decode_responses=True, **timeouts)
            else:
                redis_client = redis.Redis(
                    host=redis_host,
                    port=int(redis_port),
                    db=int(redis_db),
                    decode_responses=True,
                    username=redis_username,
                    password=redis_password,
                    ssl=bool(redis_ssl),
                    **timeouts,
                )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self) -> None:
        """PING Redis, raising DataStoreError if it doesn't answer"""
        try:
            self.redis.ping()
        except UNAVAILABLE_ERRORS as e:
            raise DataStoreError(
                f"Can't connect to Redis at {describe_connection(self.redis)}. Check the 'redis' section of the AppConfig document."
            ) from e
