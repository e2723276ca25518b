"""Build a ShorteningService from a Lambda configuration

Functions:
    service_from_config(app_config: dict) -> ShorteningService

Example:
    >>> app_config = load_config('shorten_url')
    >>> service = service_from_config(app_config)
    >>> service.shorten('https://example.com')
    'aZ3kQ1X'
"""

import logging

from shortlinks.constants import Shortcode
from shortlinks.exceptions import BadConfigurationError
from shortlinks.types import LambdaConfiguration
from shortlinks.dao.redis import URLMappingRedisDAO
from shortlinks.services.shortening_service import ShorteningService
from shortlinks.utils.config import app_prefix
from shortlinks.utils.shortener import random_shortcode_generator, counter_shortcode_generator


logger = logging.getLogger(__name__)

STRATEGIES = frozenset({'random', 'counter'})


def service_from_config(app_config: LambdaConfiguration) -> ShorteningService:
    """Create the mapping store and ShorteningService described by `app_config`

    Args:
        app_config (LambdaConfiguration):
            Output of load_config(): {'redis': {...}, 'shortener': {...}}.

    Returns:
        ShorteningService: ready to serve requests.

    Raises:
        BadConfigurationError:
            If the backend or shortcode strategy is unknown.
        DataStoreError:
            If the backend is unreachable.
    """
    if 'redis' not in app_config:
        backends = sorted(key for key in app_config if key != 'shortener')
        raise BadConfigurationError(f'Unsupported backend(s): {backends}. Only redis is supported.')

    settings = app_config.get('shortener') or {}
    strategy = settings.get('strategy', Shortcode.STRATEGY)
    if strategy not in STRATEGIES:
        raise BadConfigurationError(f"Unknown shortcode strategy '{strategy}' (expected one of {sorted(STRATEGIES)}).")

    length = int(settings.get('length', Shortcode.LENGTH))
    max_retries = int(settings.get('max_retries', Shortcode.MAX_RETRIES))
    if length < 1 or max_retries < 1:
        raise BadConfigurationError(f'Shortcode length and max_retries must be positive (given: length={length}, max_retries={max_retries}).')

    logger.debug('Assuming Redis as the backend database for URL mappings')
    redis_settings = dict(app_config['redis'])
    if redis_settings.pop('decode_responses', True) is not True:
        raise BadConfigurationError('Redis responses must be decoded (decode_responses: true); lookups return strings.')
    redis_config = {f'redis_{k}': v for k, v in redis_settings.items()}
    dao = URLMappingRedisDAO(**redis_config, prefix=app_prefix())

    if strategy == 'counter':
        generate = counter_shortcode_generator(
            lambda: dao.count(increment=True),
            salt=settings.get('salt', Shortcode.SALT),
            length=length,
        )
    else:
        generate = random_shortcode_generator(length)

    return ShorteningService(
        dao,
        generate=generate,
        max_retries=max_retries,
        allowed_schemes=settings.get('allowed_schemes'),
        max_url_length=settings.get('max_url_length'),
    )
