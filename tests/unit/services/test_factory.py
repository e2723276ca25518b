"""Unit tests for service_from_config()

Test coverage includes:

1. Backend wiring
   - Redis settings are forwarded to URLMappingRedisDAO with the app prefix.
   - Unknown backends and undecoded Redis responses raise BadConfigurationError.

2. Shortcode strategies
   - 'random' (default) yields codes of the configured length.
   - 'counter' draws from the store's counter and permutes it with the salt.
   - Unknown strategies and non-positive sizes raise BadConfigurationError.

3. Policies
   - Retry budget, allowed schemes and max URL length reach the service.
"""

from unittest.mock import MagicMock

import pytest

from shortlinks.exceptions import BadConfigurationError
from shortlinks.services import factory
from shortlinks.services.factory import service_from_config
from shortlinks.utils.shortener import generate_shortcode


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao_class(monkeypatch):
    """Replace URLMappingRedisDAO so no Redis connection is attempted."""
    dao_class = MagicMock(name='URLMappingRedisDAO')
    monkeypatch.setattr(factory, 'URLMappingRedisDAO', dao_class)
    return dao_class


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv('APP_NAME', 'shortlinks')
    monkeypatch.setenv('APP_ENV', 'test')


@pytest.fixture
def app_config():
    return {'redis': {'host': 'localhost', 'port': 6379, 'db': 0}, 'shortener': {}}


# -------------------------------
# 1. Backend wiring
# -------------------------------


def test_redis_settings_forwarded(dao_class, app_config):
    service = service_from_config(app_config)

    dao_class.assert_called_once_with(redis_host='localhost', redis_port=6379, redis_db=0, prefix='shortlinks:test')
    assert service.dao is dao_class.return_value


def test_missing_shortener_section_uses_defaults(dao_class):
    service = service_from_config({'redis': {}})

    assert service.max_retries == 5
    assert service.allowed_schemes is None
    assert service.max_url_length is None
    assert len(service.generate()) == 7


def test_decoded_responses_accepted(dao_class, app_config):
    app_config['redis']['decode_responses'] = True
    service_from_config(app_config)

    dao_class.assert_called_once_with(redis_host='localhost', redis_port=6379, redis_db=0, prefix='shortlinks:test')


def test_undecoded_responses_rejected(dao_class, app_config):
    app_config['redis']['decode_responses'] = False

    with pytest.raises(BadConfigurationError, match='decode_responses'):
        service_from_config(app_config)
    dao_class.assert_not_called()


@pytest.mark.parametrize('app_config', [{}, {'dynamodb': {}}, {'dynamodb': {}, 'shortener': {}}])
def test_unsupported_backend(dao_class, app_config):
    with pytest.raises(BadConfigurationError, match='Only redis is supported'):
        service_from_config(app_config)
    dao_class.assert_not_called()


# -------------------------------
# 2. Shortcode strategies
# -------------------------------


def test_random_strategy(dao_class, app_config):
    app_config['shortener'] = {'strategy': 'random', 'length': 10}
    service = service_from_config(app_config)

    codes = {service.generate() for _ in range(50)}
    assert len(codes) == 50
    assert all(len(code) == 10 for code in codes)
    dao_class.return_value.count.assert_not_called()


def test_counter_strategy(dao_class, app_config):
    app_config['shortener'] = {'strategy': 'counter', 'length': 7, 'salt': 'unit_test_salt'}
    dao_class.return_value.count.side_effect = [123, 124]
    service = service_from_config(app_config)

    assert service.generate() == 'XrJQsJI'
    assert service.generate() == generate_shortcode(124, salt='unit_test_salt')
    dao_class.return_value.count.assert_called_with(increment=True)


@pytest.mark.parametrize(
    'settings, match',
    [
        ({'strategy': 'sequential'}, "Unknown shortcode strategy 'sequential'"),
        ({'length': 0}, 'must be positive'),
        ({'max_retries': 0}, 'must be positive'),
        ({'max_retries': -3}, 'must be positive'),
    ],
)
def test_bad_shortener_settings(dao_class, app_config, settings, match):
    app_config['shortener'] = settings
    with pytest.raises(BadConfigurationError, match=match):
        service_from_config(app_config)


# -------------------------------
# 3. Policies
# -------------------------------


def test_policies_forwarded(dao_class, app_config):
    app_config['shortener'] = {'max_retries': 9, 'allowed_schemes': ['HTTP', 'https'], 'max_url_length': 2048}
    service = service_from_config(app_config)

    assert service.max_retries == 9
    assert service.allowed_schemes == frozenset({'http', 'https'})
    assert service.max_url_length == 2048
