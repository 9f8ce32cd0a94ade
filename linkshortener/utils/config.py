"""Utility functions for application configuration management.

Lambda functions read their configuration from **AWS AppConfig**. Each
environment (`APP_ENV`) has a dedicated AppConfig *Environment* within the
AppConfig *Application* identified by `APP_NAME`. The configuration JSON
document follows this structure:

    {
        "active_backend": "redis",
        "links": {
            "default_validity_minutes": 30,
            "shortcode_length": 7,
            "max_batch_size": 5
        },
        "configs": {
            "shorten_url": {
                "redis": { "host": "...", "port": 6379, "db": 0 }
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own section (e.g. `"shorten_url"`) for the active
backend, plus the shared `"links"` section.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), default `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return key prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(lambda_name: str) -> dict
        Load configuration for a given Lambda from AWS AppConfig (or from a
        local AppConfig agent when running under SAM).

    link_settings(config: dict) -> LinkSettings
        Build LinkSettings from the `links` section of a loaded configuration.

Example:
    >>> from linkshortener.utils.config import load_config, link_settings
    >>> config = load_config('shorten_url')
    >>> config['active_backend']
    'redis'
    >>> link_settings(config).default_validity_minutes
    30
"""

import os
import json
import logging
import functools
import urllib.parse
import urllib.request
from dataclasses import dataclass, fields
from collections.abc import Callable
from typing import Any

import boto3

from linkshortener.constants import ENV, LinkDefaults
from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils.helpers import require_environment
from linkshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkSettings:
    """Tunable link creation and bookkeeping parameters."""

    default_validity_minutes: int = LinkDefaults.VALIDITY_MINUTES
    shortcode_length: int = LinkDefaults.SHORTCODE_LENGTH
    max_batch_size: int = LinkDefaults.MAX_BATCH_SIZE
    max_generation_attempts: int = LinkDefaults.MAX_GENERATION_ATTEMPTS
    max_transaction_retries: int = LinkDefaults.MAX_TRANSACTION_RETRIES
    log_capacity: int = LinkDefaults.LOG_CAPACITY


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def link_settings(config: dict[str, Any] | None) -> LinkSettings:
    """Build LinkSettings from the `links` section of a loaded configuration

    Unknown keys are ignored, missing keys keep their defaults.

    Raises:
        BadConfigurationError: If a setting is not a positive integer.
    """
    section = (config or {}).get('links') or {}
    values = {}
    for setting in fields(LinkSettings):
        if setting.name not in section:
            continue
        value = section[setting.name]
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise BadConfigurationError(f"Link setting '{setting.name}' must be a positive integer (given value: {value!r}).")
        values[setting.name] = value
    return LinkSettings(**values)


def _extract_lambda_config(document: dict[str, Any], lambda_name: str) -> dict[str, Any]:
    try:
        backend = document['active_backend']
        backend_config = document['configs'][lambda_name][backend]
    except KeyError as e:
        raise BadConfigurationError(f"AppConfig document has no '{lambda_name}' configuration for the active backend.") from e

    return {
        'active_backend': backend,
        backend: backend_config,
        'links': document.get('links') or {},
    }


def _sam_load_local_appconfig(func: Callable[[str], dict]) -> Callable[[str], dict]:  # pragma: no cover
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a local URL, fetch the configuration JSON from the local agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     – Base URL of the local AppConfig Agent (e.g., http://host.docker.internal:2772).
        APPCONFIG_PROFILE_NAME  – Optional profile name (default: "backend-config").
    """

    def __validate_agent_url(url: str | None) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal'}:
            raise BadConfigurationError(f'Bad host {url}')
        return url

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> dict:
        agent_url = __validate_agent_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name, *args, **kwargs)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name})
        return _extract_lambda_config(document, lambda_name)

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> dict:
    """Load configuration for a given Lambda from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: {'active_backend': <backend>, <backend>: {...}, 'links': {...}}

    Raises:
        MissingEnvironmentVariableError:
            If AppConfig identifiers are not set.
        BadConfigurationError:
            If the document lacks this lambda's section for the active backend.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})
    return _extract_lambda_config(document, lambda_name)
