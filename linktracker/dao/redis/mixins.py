"""Client setup shared by the Redis DAOs

A DAO either receives a ready Redis client (tests, shared connection pools) or
builds one from connection options as found in a lambda's configuration:

    {"host": "...", "port": 6379, "db": 0, "username": "...", "password": "...", "socket_timeout": 2.0}

Responses are always decoded to str, the codecs in helpers.py rely on it.

Example:
    >>> dao = LinkRedisDAO(host='localhost', port=6379, prefix='linktracker:dev')
    >>> dao.healthcheck()
    True
"""

from typing import Any, Optional

import redis

from linktracker.dao.redis.redis_key_schema import RedisKeySchema
from linktracker.dao.redis.helpers import redis_address
from linktracker.dao.exceptions import DataStoreError


CONNECTION_OPTIONS = frozenset({'host', 'port', 'db', 'username', 'password', 'socket_timeout'})


class RedisClientMixin:
    """Attach `self.redis` and `self.keys` to a DAO and verify the connection

    Args:
        redis_client (redis.Redis | None):
            Client to use as is. When None, one is built from connection_options.
        prefix (str | None):
            Namespace of every key, e.g. 'linktracker:prod'.
        **connection_options:
            Any of host, port, db, username, password, socket_timeout.

    Raises:
        ValueError:
            If an unknown connection option is given.
        DataStoreError:
            If Redis doesn't answer the initial PING.
    """

    def __init__(self, redis_client: Optional[redis.Redis] = None, prefix: Optional[str] = None, **connection_options: Any):
        if redis_client is None:
            redis_client = redis.Redis(**self._client_options(connection_options))

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)
        self.healthcheck()

    @staticmethod
    def _client_options(connection_options: dict[str, Any]) -> dict[str, Any]:
        unknown = connection_options.keys() - CONNECTION_OPTIONS
        if unknown:
            raise ValueError(f'Unknown Redis connection options: {sorted(unknown)}.')

        options = {'host': 'localhost', 'port': 6379, 'db': 0, **connection_options}
        options['port'] = int(options['port'])
        options['db'] = int(options['db'])
        return {**options, 'decode_responses': True}

    def healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis; return False (or raise DataStoreError) when it's unreachable"""
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if not raise_error:
                return False
            raise DataStoreError(f"Can't connect to Redis at {redis_address(self.redis)}. Check the provided configuration parameters.") from e
        return True
