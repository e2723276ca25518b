import logging

from shortlinks.types import LambdaContext, LambdaEvent, LambdaResponse
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import ConfigurationError, InvalidInputError, NotFoundError
from shortlinks.services import service_from_config
from shortlinks.utils import load_config, get_short_url, path_parameter
from shortlinks.lambdas.responses import (
    guarantee_500_response,
    response_200,
    response_400,
    response_404,
    response_500,
    response_503,
)
from shortlinks.lambdas.expand_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    DATA_STORE_UNAVAILABLE,
    EXPAND_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to inspect short URLs

    Same lookup as redirect_url, but the mapping is returned as JSON instead
    of redirecting the client.

    HTTP responses:
        200: Mapping found
            shortcode: requested shortcode
            short_url: short url
            target_url: original url
        400: missing or empty shortcode in path parameters
        404: shortcode has no mapping
        500: server experienced an internal error
        503: the mapping store can't be reached

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh71WPT'}}
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])['target_url']
        'https://example.com/my-page'
    """
    try:
        app_config = load_config('expand_url')
        service = service_from_config(app_config)
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for expand URL function. Responding with 500.')
        return response_500()
    except DataStoreError:
        logger.exception('Mapping store unavailable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(message='data store unavailable', error_code=DATA_STORE_UNAVAILABLE)

    shortcode = path_parameter(event, 'shortcode')

    try:
        target_url = service.expand(shortcode)
    except InvalidInputError:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    except NotFoundError:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    except DataStoreError:
        logger.exception('Mapping store unavailable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(message='data store unavailable', error_code=DATA_STORE_UNAVAILABLE)

    logger.info('Expanded short URL. Responding with 200.', extra={'shortcode': shortcode, 'event': EXPAND_SUCCESS})
    return response_200(
        {
            'shortcode': shortcode,
            'short_url': get_short_url(shortcode, event),
            'target_url': target_url,
        }
    )
