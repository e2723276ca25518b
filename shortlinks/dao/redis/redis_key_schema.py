import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing URL mappings.

    Each mapping is indexed in both directions:
        links:<shortcode>:url -> long URL
        urls:<long url>:code  -> short code

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "shortlinks:prod" or "shortlinks:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_url_key(self, short_code: str) -> str:
        return f'links:{short_code}:url'

    @prefix_key
    def url_code_key(self, long_url: str) -> str:
        return f'urls:{long_url}:code'

    @prefix_key
    def counter_key(self) -> str:
        return 'links:counter'
