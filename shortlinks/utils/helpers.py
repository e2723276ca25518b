"""Helpers shared by the API Gateway Lambda handlers

Functions:
    base_url(event) -> str
        Public origin that short URLs are served from
    get_short_url(shortcode, event) -> str
        Absolute short URL of a shortcode
    path_parameter(event, name) -> str | None
        Read a path parameter from a Lambda proxy event
    require_environment(*names) -> Callable
        Decorator: fail fast when environment variables are missing
"""

import os
import functools
from typing import Any
from collections.abc import Callable

from shortlinks.constants import ENV
from shortlinks.exceptions import MissingEnvironmentVariableError


LOCAL_BASE_URL = 'http://localhost:3000'


def base_url(event: dict[str, Any]) -> str:
    """Public origin of short URLs for this invocation

    Resolution order:
    - `SHORT_URL_BASE` environment variable, if set
    - custom API Gateway domain: https://<domain>
    - default execute-api domain: https://<domain>/<stage>
    - no request context (sam local, tests): http://localhost:3000

    Example:
        >>> base_url({'requestContext': {'domainName': 'abc123.execute-api.us-east-1.amazonaws.com', 'stage': 'Prod'}})
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'
        >>> base_url({'requestContext': {'domainName': 'sho.rt', 'stage': 'Prod'}})
        'https://sho.rt'
    """
    override = os.environ.get(ENV.App.SHORT_URL_BASE)
    if override:
        return override.rstrip('/')

    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName')
    if not domain:
        return LOCAL_BASE_URL
    if 'execute-api' in domain:
        return f'https://{domain}/{request_context.get("stage", "")}'
    return f'https://{domain}'


def get_short_url(shortcode: str, event: dict[str, Any]) -> str:
    return f'{base_url(event).rstrip("/")}/{shortcode}'


def path_parameter(event: dict[str, Any], name: str) -> str | None:
    # API Gateway sends "pathParameters": null when the route has none
    return (event.get('pathParameters') or {}).get(name)


def require_environment(*names: str) -> Callable:
    """Decorator: raise MissingEnvironmentVariableError unless every variable in `names` is set and non-empty

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def fetch():
        ...     pass
        >>> fetch()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = ', '.join(f"'{name}'" for name in names if not os.environ.get(name))
            if missing:
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
