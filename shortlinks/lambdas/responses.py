"""API Gateway (Lambda proxy) response builders shared by all handlers

Error bodies follow one shape:
    {"message": "<Reason Phrase> (<detail>)", "errorCode": "<EVENT CODE>"}
"""

import json
import logging
import functools
from collections.abc import Callable

from shortlinks.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from shortlinks.types import LambdaResponse


logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def _error(status_code: int, base: str, message: str | None, error_code: str | None, headers: dict | None = None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **(headers or {})},
        'body': json.dumps(body),
    }


def response_200(body: dict) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
        'body': json.dumps(body),
    }


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(400, 'Bad Request', message, error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(404, 'Not Found', message, error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(500, 'Internal Server Error', message, error_code)


def response_503(message: str | None = None, error_code: str | None = None, retry_after: int = 1) -> LambdaResponse:
    return _error(503, 'Service Unavailable', message, error_code, headers={'Retry-After': str(retry_after)})


def guarantee_500_response(handler: Callable[..., LambdaResponse]) -> Callable[..., LambdaResponse]:
    """Decorator: turn any unhandled exception into a logged 500 response

    API Gateway answers a crashed Lambda with a bare 502; this keeps the
    response shape consistent for clients.
    """

    @functools.wraps(handler)
    def wrapper(event, context):
        try:
            return handler(event, context)
        except Exception:
            logger.exception(
                'Unhandled exception in Lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
