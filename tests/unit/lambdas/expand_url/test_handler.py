"""Unit tests for the expand URL Lambda handler

Test coverage includes:

1. Successful expansion
   - Returns 200 with shortcode, short_url and target_url.

2. Errors
   - Missing shortcode yields 400, unknown shortcode 404,
     unreachable store 503, unexpected exceptions 500.
"""

import json

import pytest

from shortlinks.dao.exceptions import DataStoreError
from shortlinks.lambdas.expand_url import app


@pytest.fixture
def wired(wire_handler):
    return wire_handler(app)


# -------------------------------
# 1. Successful expansion
# -------------------------------


def test_expand(wired, api_event, service):
    shortcode = service.shorten('https://example.com/a')

    response = app.lambda_handler({**api_event, 'pathParameters': {'shortcode': shortcode}}, None)

    assert response['statusCode'] == 200
    assert json.loads(response['body']) == {
        'shortcode': 'code000',
        'short_url': 'https://sho.rt/code000',
        'target_url': 'https://example.com/a',
    }
    load_config, _ = wired
    load_config.assert_called_once_with('expand_url')


def test_expand_does_not_modify_store(wired, api_event, service, memory_dao):
    service.shorten('https://example.com/a')
    inserts = memory_dao.inserts

    for _ in range(3):
        app.lambda_handler({**api_event, 'pathParameters': {'shortcode': 'code000'}}, None)

    assert memory_dao.inserts == inserts
    assert memory_dao.by_code == {'code000': 'https://example.com/a'}


# -------------------------------
# 2. Errors
# -------------------------------


def test_missing_shortcode(wired, api_event):
    response = app.lambda_handler(api_event, None)

    assert response['statusCode'] == 400
    assert json.loads(response['body'])['errorCode'] == 'MISSING_SHORTCODE'


def test_unknown_shortcode(wired, api_event):
    response = app.lambda_handler({**api_event, 'pathParameters': {'shortcode': 'nothere'}}, None)

    assert response['statusCode'] == 404
    assert json.loads(response['body'])['errorCode'] == 'SHORT_URL_NOT_FOUND'


def test_store_unreachable_while_connecting(wired, api_event):
    _, service_from_config = wired
    service_from_config.side_effect = DataStoreError("Can't connect to Redis at localhost:6379/0.")

    response = app.lambda_handler({**api_event, 'pathParameters': {'shortcode': 'code000'}}, None)

    assert response['statusCode'] == 503


def test_unexpected_exception(wired, api_event, memory_dao, monkeypatch):
    def find_by_short_code(shortcode, **kwargs):
        raise KeyError(shortcode)

    monkeypatch.setattr(memory_dao, 'find_by_short_code', find_by_short_code)

    response = app.lambda_handler({**api_event, 'pathParameters': {'shortcode': 'code000'}}, None)

    assert response['statusCode'] == 500
    assert json.loads(response['body'])['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
