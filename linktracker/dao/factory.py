from typing import Any

from linktracker.dao.base import LinkBaseDAO
from linktracker.dao.memory import LinkMemoryDAO
from linktracker.dao.redis import LinkRedisDAO
from linktracker.exceptions import BadConfigurationError


def create_link_dao(app_config: dict[str, dict[str, Any]], prefix: str | None = None) -> LinkBaseDAO:
    """Build the link DAO for the active backend of a lambda's configuration

    Args:
        app_config (dict):
            Output of `load_config()`, i.e. `{<backend>: {... backend options ...}}`.
        prefix (str | None):
            Key namespace for backends which support one (Redis).

    Raises:
        BadConfigurationError:
            If the configuration names no backend, several backends, or an unknown one.

    Example:
        >>> dao = create_link_dao({'redis': {'host': 'localhost', 'port': 6379, 'db': 0}}, prefix='linktracker:dev')
        >>> type(dao).__name__
        'LinkRedisDAO'
    """
    if len(app_config) != 1:
        raise BadConfigurationError(f'Expected exactly one active backend (given: {sorted(app_config)}).')

    ((backend, options),) = app_config.items()
    if backend == 'redis':
        return LinkRedisDAO(**options, prefix=prefix)
    if backend == 'memory':
        return LinkMemoryDAO()
    raise BadConfigurationError(f"Unknown link backend '{backend}'.")
