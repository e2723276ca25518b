"""Shared fixtures for Lambda handler tests.

Fixtures:
    - `service`: ShorteningService backed by the in-memory mapping store.
    - `wire_handler`: factory patching a handler module's load_config() and
                      service_from_config() to return `service`.
    - `api_event`: minimal API Gateway event with a custom domain.
"""

from unittest.mock import MagicMock

import pytest

from shortlinks.services import ShorteningService


@pytest.fixture
def service(memory_dao):
    codes = iter(f'code{i:03d}' for i in range(1000))
    return ShorteningService(memory_dao, generate=lambda: next(codes))


@pytest.fixture
def wire_handler(monkeypatch, service):
    def wire(app_module):
        load_config = MagicMock(return_value={'redis': {}, 'shortener': {}})
        service_from_config = MagicMock(return_value=service)
        monkeypatch.setattr(app_module, 'load_config', load_config)
        monkeypatch.setattr(app_module, 'service_from_config', service_from_config)
        return load_config, service_from_config

    return wire


@pytest.fixture
def api_event(monkeypatch):
    monkeypatch.delenv('SHORT_URL_BASE', raising=False)
    return {'requestContext': {'domainName': 'sho.rt', 'stage': 'Prod'}}
