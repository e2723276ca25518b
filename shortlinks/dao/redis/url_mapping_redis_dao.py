"""Data Access Object (DAO) implementation for URL mappings in Redis

This module provides a Redis-based implementation of URLMappingBaseDAO.

Responsibilities:
    - Insert URL mappings atomically, indexed by both short code and long URL;
    - Look up mappings in either direction;
    - Increment the global counter used by counter-based short codes;
    - Convert Redis connectivity failures into DataStoreError.

Deployment:
    The insert script touches a `urls:...` key and a `links:...` key, which hash
    to different cluster slots. Use a standalone (or primary/replica) Redis;
    Redis Cluster rejects the script with CROSSSLOT.

Classes:
    URLMappingRedisDAO:
        DAO for storing and retrieving URL mappings in a Redis datastore.

Example:
    >>> from shortlinks.models import URLMappingModel
    >>> from shortlinks.dao.redis import URLMappingRedisDAO

    >>> dao = URLMappingRedisDAO(prefix="shortlinks:dev")
    >>> dao.insert(URLMappingModel(target="https://example.com/page", shortcode="abc123X"))
    <URLMappingRedisDAO>
    >>> dao.find_by_short_code("abc123X")
    'https://example.com/page'
    >>> dao.find_by_long_url("https://example.com/page")
    'abc123X'
"""

from beartype import beartype

from shortlinks.models import URLMappingModel
from shortlinks.dao.base import URLMappingBaseDAO
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_connection_error
from shortlinks.dao.exceptions import LongURLConflictError, ShortCodeConflictError


# KEYS[1]: urls:<long url>:code
# KEYS[2]: links:<shortcode>:url
# ARGV[1]: shortcode
# ARGV[2]: long url
# Returns 0 on success, 1 if the long URL is taken, 2 if the shortcode is taken.
INSERT_MAPPING_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 1
end
if redis.call('EXISTS', KEYS[2]) == 1 then
    return 2
end
redis.call('SET', KEYS[1], ARGV[1])
redis.call('SET', KEYS[2], ARGV[2])
return 0
"""

INSERTED = 0
LONG_URL_TAKEN = 1
SHORTCODE_TAKEN = 2


class URLMappingRedisDAO(RedisClientMixin, URLMappingBaseDAO):
    """Redis-based Data Access Object (DAO) for managing URL mappings

    This class implements the URLMappingBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        find_by_long_url(long_url: str, **kwargs) -> str | None:
            Return the short code of a long URL, None on miss.

        find_by_short_code(shortcode: str, **kwargs) -> str | None:
            Return the long URL of a short code, None on miss.

        insert(mapping: URLMappingModel, **kwargs) -> URLMappingRedisDAO:
            Insert both index keys of a mapping in one server-side script.
            Raises LongURLConflictError / ShortCodeConflictError on uniqueness violations.
            Raises DataStoreError on connectivity issues with Redis.

        count(increment: bool = False, **kwargs) -> int:
            Retrieve (and optionally increment) the global URL counter.
            Raises DataStoreError on connectivity issues with Redis.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._insert_mapping = self.redis.register_script(INSERT_MAPPING_SCRIPT)

    @handle_redis_connection_error
    @beartype
    def find_by_long_url(self, long_url: str, **kwargs) -> str | None:
        """Look up the short code of a long URL

        Args:
            long_url (str):
                The original long URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            str | None:
                The short code if a mapping exists, None otherwise.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.find_by_long_url('https://example.com')
            'abc123X'
        """
        return self.redis.get(self.keys.url_code_key(long_url))

    @handle_redis_connection_error
    @beartype
    def find_by_short_code(self, shortcode: str, **kwargs) -> str | None:
        """Look up the long URL of a short code

        Args:
            shortcode (str):
                The shortcode identifier of the mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            str | None:
                The long URL if a mapping exists, None otherwise.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.find_by_short_code('abc123X')
            'https://example.com'
        """
        return self.redis.get(self.keys.link_url_key(shortcode))

    @handle_redis_connection_error
    @beartype
    def insert(self, mapping: URLMappingModel, **kwargs) -> 'URLMappingRedisDAO':
        """Insert a URL mapping into Redis

        Both uniqueness checks and both writes run inside a single Lua script.
        Redis executes scripts atomically, so two racing inserts for the same
        long URL (or the same shortcode) resolve to exactly one winner and no
        client ever observes a mapping indexed in one direction only.

        Args:
            mapping (URLMappingModel):
                The long URL <-> shortcode mapping to insert.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            URLMappingRedisDAO: self (for method chaining)

        Raises:
            LongURLConflictError:
                If the long URL is already mapped to a shortcode.
            ShortCodeConflictError:
                If the shortcode is already mapped to a long URL.
            DataStoreError:
                If a Redis connection issue occurs.

        Example:
            >>> dao.insert(URLMappingModel(target='https://example.com', shortcode='abc123X'))
            <URLMappingRedisDAO>
        """
        url_code_key = self.keys.url_code_key(mapping.target)
        link_url_key = self.keys.link_url_key(mapping.shortcode)

        result = self._insert_mapping(keys=[url_code_key, link_url_key], args=[mapping.shortcode, mapping.target])

        if result == LONG_URL_TAKEN:
            raise LongURLConflictError(f"Long URL '{mapping.target}' is already mapped.")
        if result == SHORTCODE_TAKEN:
            raise ShortCodeConflictError(f"Short URL with code '{mapping.shortcode}' already exists.")
        return self

    @handle_redis_connection_error
    def count(self, increment: bool = False, **kwargs) -> int:
        """Retrieve global short URL counter

        Args:
            increment (bool):
                If True, increments the counter. Otherwise, retrieves its value.
            **kwargs:
                Optional keyword arguments.

        Returns:
            int:
                The updated or current global counter value (0 if never incremented).

        Example:
            >>> dao.count(increment=False)
            123
            >>> dao.count(increment=True)
            124
        """
        if increment:
            return int(self.redis.incr(self.keys.counter_key()))
        return int(self.redis.get(self.keys.counter_key()) or 0)
