import logging

from shortlinks.types import LambdaContext, LambdaEvent, LambdaResponse
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import ConfigurationError, InvalidInputError, NotFoundError
from shortlinks.services import service_from_config
from shortlinks.utils import load_config, get_short_url, path_parameter
from shortlinks.lambdas.responses import (
    guarantee_500_response,
    response_302,
    response_400,
    response_404,
    response_500,
    response_503,
)
from shortlinks.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    DATA_STORE_UNAVAILABLE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode to its target URL
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing or empty shortcode in path parameters
        404: Not found
            message: shortcode has no mapping
        500: Internal server error
            message: server experienced an internal error
        503: Service unavailable
            message: the mapping store can't be reached

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh71WPT'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
        service = service_from_config(app_config)
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.')
        return response_500()
    except DataStoreError:
        logger.exception('Mapping store unavailable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(message='data store unavailable', error_code=DATA_STORE_UNAVAILABLE)

    # 1- Extract shortcode from request's path
    shortcode = path_parameter(event, 'shortcode')

    # 2- Resolve the shortcode
    try:
        target_url = service.redirect(shortcode)
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

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=target_url)
