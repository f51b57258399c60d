"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to
access configuration data stored in **AWS AppConfig**. Each environment
(`APP_ENV`) has a dedicated AppConfig *Environment* within the shared
AppConfig *Application*. Configuration data is stored as a JSON document
under a configuration profile and deployed to the corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "create_link": {
                "redis": {"host": "...", "port": 6379, "db": 0, "socket_timeout": 2.0}
            },
            "redirect_link": {
                "redis": { ... }
            },
            ...
        }
    }

Each Lambda loads its own section (e.g., `"redirect_link"`) from this
AppConfig document. When running locally, the document is built from
environment variables instead (see `_load_local_config`).

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(function_name: str) -> dict
        Load configuration for a given Lambda and return it as
        `{<active backend>: {... backend options ...}}`.

Example:
    Typical usage inside a Lambda handler:

        >>> from linktracker.utils.config import load_config
        >>> config = load_config('redirect_link')
        >>> print(config['redis']['host'])
        redis-15501.host.docker.internal
"""

import os
import json
import functools
import logging
from collections.abc import Callable

import boto3

from linktracker.exceptions import BadConfigurationError
from linktracker.utils.helpers import require_environment
from linktracker.utils.runtime import running_locally
from linktracker.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    APPCONFIG_APP_ID_ENV,
    APPCONFIG_ENV_ID_ENV,
    APPCONFIG_PROFILE_ID_ENV,
    LINK_BACKEND_ENV,
    REDIS_HOST_ENV,
    REDIS_PORT_ENV,
    REDIS_DB_ENV,
    REDIS_USERNAME_ENV,
    REDIS_PASSWORD_ENV,
)


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(APP_NAME_ENV)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linktracker'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linktracker:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _load_local_config(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: build the configuration from environment variables when running locally

    Environment variables used:
        LINK_BACKEND    – 'redis' (default) or 'memory'.
        REDIS_HOST      – default 'localhost'.
        REDIS_PORT      – default 6379.
        REDIS_DB        – default 0.
        REDIS_USERNAME  – optional.
        REDIS_PASSWORD  – optional.
    """

    @functools.wraps(func)
    def wrapper(function_name: str, *args, **kwargs) -> dict:
        if not running_locally():
            return func(function_name, *args, **kwargs)

        backend = os.getenv(LINK_BACKEND_ENV, 'redis').lower()
        if backend != 'redis':
            logger.debug('Using local configuration.', extra={'functionName': function_name, 'backend': backend})
            return {backend: {}}

        options = {
            'host': os.getenv(REDIS_HOST_ENV, 'localhost'),
            'port': int(os.getenv(REDIS_PORT_ENV, '6379')),
            'db': int(os.getenv(REDIS_DB_ENV, '0')),
        }
        if os.getenv(REDIS_USERNAME_ENV):
            options['username'] = os.environ[REDIS_USERNAME_ENV]
        if os.getenv(REDIS_PASSWORD_ENV):
            options['password'] = os.environ[REDIS_PASSWORD_ENV]

        logger.debug('Using local configuration.', extra={'functionName': function_name, 'backend': backend})
        return {backend: options}

    return wrapper


def _fetch_appconfig_document() -> dict:
    """Start an AppConfig data session and return the latest deployed JSON document"""
    appconfig = boto3.client('appconfigdata')
    session = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[APPCONFIG_APP_ID_ENV],
        EnvironmentIdentifier=os.environ[APPCONFIG_ENV_ID_ENV],
        ConfigurationProfileIdentifier=os.environ[APPCONFIG_PROFILE_ID_ENV],
    )
    response = appconfig.get_latest_configuration(ConfigurationToken=session['InitialConfigurationToken'])
    return json.loads(response['Configuration'].read().decode('utf-8'))


@_load_local_config
@require_environment(APPCONFIG_APP_ID_ENV, APPCONFIG_ENV_ID_ENV, APPCONFIG_PROFILE_ID_ENV)
def load_config(function_name: str) -> dict:
    """Load configuration for a given Lambda from AWS AppConfig

    Environment variables required (outside local runs):
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Returns:
        dict: `{<active backend>: {... options of that backend for function_name ...}}`

    Raises:
        MissingEnvironmentVariableError:
            If a required environment variable is missing.
        BadConfigurationError:
            If the document has no active backend, or no section for this lambda and backend.
        botocore.exceptions.ClientError:
            If AppConfig rejects the request.
    """
    document = _fetch_appconfig_document()

    backend = document.get('active_backend')
    options = document.get('configs', {}).get(function_name, {}).get(backend)
    if backend is None or options is None:
        raise BadConfigurationError(f"AppConfig has no '{backend}' section for lambda '{function_name}'.")

    logger.debug('Loaded AppConfig.', extra={'functionName': function_name, 'backend': backend, 'build': document.get('build')})
    return {backend: options}
