"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    masked_link() -> str
        Get string representation of the short URL for a given code
    as_utc() -> datetime
        Interpret naive datetimes as UTC and convert aware ones to UTC
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unhandled lambda handler exceptions into 500 responses

Example:
    Typical usage inside a Lambda handler:

        >>> from linktracker.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import json
import logging
import functools
from datetime import datetime, UTC
from typing import Any
from collections.abc import Callable

from linktracker.exceptions import MissingEnvironmentVariableError
from linktracker.utils.runtime import running_locally
from linktracker.utils.constants import DEFAULT_BASE_URL, LINK_BASE_URL_ENV, UNKNOWN_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from API Gateway event

    `LINK_BASE_URL` takes precedence when set. Otherwise, if a custom domain is
    configured the stage name is omitted, and if the default AWS execute-api
    domain is used the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://lnk.example.com"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    configured = os.environ.get(LINK_BASE_URL_ENV)
    if configured:
        return configured

    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        return f'https://{domain}'
    elif domain:
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return DEFAULT_BASE_URL


def masked_link(base: str, code: str) -> str:
    """Get string representation of the short URL

    Example:
        >>> masked_link('http://localhost:3000/', 'aBsJu')
        'http://localhost:3000/aBsJu'
    """
    return f'{base.rstrip("/")}/{code}'


def as_utc(moment: datetime) -> datetime:
    """Interpret a naive datetime as UTC; convert an aware one to UTC

    Example:
        >>> as_utc(datetime(2026, 1, 1))
        datetime.datetime(2026, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with 500 on any exception escaping a lambda handler

    When running locally the exception is re-raised instead, so it surfaces
    in SAM / test output with its traceback.
    """

    @functools.wraps(handler)
    def wrapper(event: dict[str, Any], context: Any) -> dict[str, Any]:
        try:
            return handler(event, context)
        except Exception as e:
            if running_locally():
                raise
            error_code = getattr(e, 'error_code', UNKNOWN_INTERNAL_SERVER_ERROR)
            logger.exception('Unhandled exception in lambda handler. Responding with 500.', extra={'event': error_code})
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': error_code,
                    }
                ),
            }

    return wrapper
