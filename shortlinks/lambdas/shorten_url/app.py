import json
import logging

from shortlinks.types import LambdaContext, LambdaEvent, LambdaResponse
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import ConfigurationError, ExhaustedRetriesError, InvalidInputError
from shortlinks.services import service_from_config
from shortlinks.utils import load_config, get_short_url
from shortlinks.lambdas.responses import (
    guarantee_500_response,
    response_200,
    response_400,
    response_500,
    response_503,
)
from shortlinks.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_TARGET_URL,
    INVALID_TARGET_URL,
    SHORTCODE_SPACE_EXHAUSTED,
    DATA_STORE_UNAVAILABLE,
    SHORT_URL_CREATED,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL from request body
    - Step 2: Shorten the URL (reusing an existing mapping when there is one)
    - Step 3: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            message: success message
            target_url: original url (provided in request)
            short_url: short url
            shortcode: shortcode mapped to target_url
        400: Bad client request
            message: invalid JSON, missing or malformed target_url
        500: Internal server error
            message: server experienced an internal error (incl. exhausted shortcode space)
        503: Service unavailable
            message: the mapping store can't be reached

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"target_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortcode']
        'aZ3kQ1X'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
        service = service_from_config(app_config)
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for shorten URL function. Responding with 500.')
        return response_500()
    except DataStoreError:
        logger.exception('Mapping store unavailable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(message='data store unavailable', error_code=DATA_STORE_UNAVAILABLE)

    # 1- Extract original URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    target_url = request_body.get('target_url') if isinstance(request_body, dict) else None
    if not target_url:
        logger.info('Missing "target_url" in body. Responding with 400.', extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'target_url' in JSON body", error_code=MISSING_TARGET_URL)

    # 2- Shorten the URL
    try:
        shortcode = service.shorten(target_url)
    except InvalidInputError as e:
        logger.info('Invalid target URL. Responding with 400.', extra={'event': INVALID_TARGET_URL, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_TARGET_URL)
    except ExhaustedRetriesError:
        logger.error(
            'Shortcode generation exhausted its retries. Responding with 500.',
            extra={'event': SHORTCODE_SPACE_EXHAUSTED},
        )
        return response_500(error_code=SHORTCODE_SPACE_EXHAUSTED)
    except DataStoreError:
        logger.exception('Mapping store unavailable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(message='data store unavailable', error_code=DATA_STORE_UNAVAILABLE)

    # 3- Return successful response to user
    short_url = get_short_url(shortcode, event)
    logger.info('Shortened URL. Responding with 200.', extra={'shortcode': shortcode, 'event': SHORT_URL_CREATED})
    return response_200(
        {
            'message': f'Successfully shortened {target_url} to {short_url}',
            'target_url': target_url,
            'short_url': short_url,
            'shortcode': shortcode,
        }
    )
