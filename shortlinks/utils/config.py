"""Application configuration: environment and AWS AppConfig

Each environment (`APP_ENV`) has its own AppConfig *Environment* inside the
AppConfig *Application* named by `APP_NAME`. The deployed JSON document
describes the mapping store for every Lambda, plus the shortcode policy shared
by all of them:

    {
        "build": 7,
        "active_backend": "redis",
        "shortener": {"strategy": "random", "length": 7, "max_retries": 5},
        "configs": {
            "shorten_url":  {"redis": {...}},
            "redirect_url": {"redis": {...}},
            "expand_url":   {"redis": {...}}
        }
    }

A Lambda asks for its own slice with `load_config('<lambda name>')` and gets
back `{"redis": {...}, "shortener": {...}}`. Under `sam local`, the document
is read from a local AppConfig agent when `APPCONFIG_AGENT_URL` is set.
"""

import os
import json
import urllib.parse
import urllib.request
import logging

import boto3

from shortlinks.types import AppConfig, LambdaConfiguration
from shortlinks.constants import ENV
from shortlinks.exceptions import BadConfigurationError
from shortlinks.utils.helpers import require_environment
from shortlinks.utils.runtime import running_locally


logger = logging.getLogger(__name__)

LOCAL_AGENT_HOSTS = frozenset({'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'})
LOCAL_AGENT_PORT = 2772


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Namespace for data store keys: '<app name>:<app env>', or None without APP_NAME

    Example:
        >>> os.environ['APP_NAME'] = 'shortlinks'
        >>> os.environ['APP_ENV'] = 'prod'
        >>> app_prefix()
        'shortlinks:prod'
    """
    name = app_name()
    return None if name is None else f'{name}:{app_env()}'


def lambda_config(document: AppConfig, lambda_name: str) -> LambdaConfiguration:
    """Slice a full AppConfig document down to what one Lambda needs

    Raises:
        BadConfigurationError:
            If the document has no section for `lambda_name` under the active backend.
    """
    try:
        backend = document['active_backend']
        backend_config = document['configs'][lambda_name][backend]
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no '{lambda_name}' configuration for the active backend.") from e

    return {backend: backend_config, 'shortener': document.get('shortener') or {}}


def _local_agent_url() -> str | None:
    """Return APPCONFIG_AGENT_URL if running locally and it points at a local agent"""
    url = os.getenv(ENV.AppConfig.AGENT_URL)
    if not url or not running_locally():
        return None

    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'} or components.hostname not in LOCAL_AGENT_HOSTS:
        raise BadConfigurationError(f"APPCONFIG_AGENT_URL '{url}' is not a local AppConfig agent.")
    if components.port not in {LOCAL_AGENT_PORT, None}:
        raise BadConfigurationError(f"APPCONFIG_AGENT_URL '{url}' must use port {LOCAL_AGENT_PORT}.")
    return url.rstrip('/')


def _fetch_from_agent(agent_url: str) -> AppConfig:  # pragma: no cover
    profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
    url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

    logger.debug('Fetching AppConfig document from local agent.', extra={'agentUrl': url})
    with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
        return json.load(r)


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def _fetch_from_appconfig() -> AppConfig:
    logger.debug('Fetching AppConfig document from AWS AppConfig.')
    appconfig = boto3.client('appconfigdata')

    # A session token is only good for one GetLatestConfiguration call
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    return json.loads(response['Configuration'].read().decode('utf-8'))


def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load the configuration slice of `lambda_name`

    Environment variables required (outside of a local agent setup):
        APPCONFIG_APP_ID, APPCONFIG_ENV_ID, APPCONFIG_PROFILE_ID

    Returns:
        LambdaConfiguration: {<active backend>: {...}, 'shortener': {...}}

    Raises:
        MissingEnvironmentVariableError:
            If any AppConfig identifier is missing.
        BadConfigurationError:
            If the document lacks the requested section, or the local agent URL is unsafe.
        botocore.exceptions.ClientError:
            If AppConfig rejects the request.

    Example:
        >>> config = load_config('shorten_url')
        >>> config['redis']['host']
        'redis-15501.host.docker.internal'
        >>> config['shortener']['strategy']
        'random'
    """
    agent_url = _local_agent_url()
    document = _fetch_from_agent(agent_url) if agent_url else _fetch_from_appconfig()

    data = lambda_config(document, lambda_name)
    logger.debug('Loaded AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build'), 'localAgent': bool(agent_url)})
    return data
