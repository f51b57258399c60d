"""Unit tests for Redis-based mixins.

Test coverage includes:
    1. Initialization and configuration
       - Ensures a Redis client is built from connection options when none is given.
       - Ensures a given client is used as is.
       - Confirms unknown options and unreachable servers are rejected.
    2. Healthcheck behavior
       - Healthcheck pings Redis.
       - Missed pong from Redis raises error, or returns False on request.
"""

from unittest.mock import MagicMock, patch

import pytest
import redis

from linktracker.dao.exceptions import DataStoreError
from linktracker.dao.redis.mixins import RedisClientMixin


@pytest.fixture
def redis_client():
    _redis_client = MagicMock(
        spec=redis.Redis, connection_pool=MagicMock(spec=redis.ConnectionPool, connection_kwargs={'host': 'redis', 'port': 6379, 'db': 0})
    )
    _redis_client.ping.return_value = True
    return _redis_client


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


def test_initialize_without_redis_client():
    """Ensure the mixin creates a Redis client when none is provided."""
    redis_config = {
        'host': 'redis',
        'port': '6379',
        'username': 'default',
        'password': 'password',
        'socket_timeout': 2.0,
    }

    with patch('linktracker.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        mixin = RedisClientMixin(**redis_config, prefix='testapp:test')

        redis_mock.assert_called_once_with(
            host='redis',
            port=6379,
            db=0,
            username='default',
            password='password',
            socket_timeout=2.0,
            decode_responses=True,
        )
        assert mixin.redis is redis_mock.return_value
        assert mixin.keys.prefix == 'testapp:test'


def test_initialize_with_defaults():
    with patch('linktracker.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        RedisClientMixin()

        redis_mock.assert_called_once_with(host='localhost', port=6379, db=0, decode_responses=True)


def test_initialize_with_redis_client(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')
    assert mixin.redis is redis_client


def test_initialize_with_unknown_option():
    with patch('linktracker.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        with pytest.raises(ValueError, match='ssl_certfile'):
            RedisClientMixin(host='redis', ssl_certfile='/tmp/cert.pem')

        redis_mock.assert_not_called()


def test_initialize_with_invalid_redis_config():
    exception_message = "Can't connect to Redis at 203.0.113.1:18000/5. Check the provided configuration parameters."

    with patch('linktracker.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        redis_mock_instance = redis_mock.return_value
        redis_mock_instance.ping.side_effect = redis.exceptions.ConnectionError('Connection error')
        redis_mock_instance.connection_pool = MagicMock()
        redis_mock_instance.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}

        with pytest.raises(DataStoreError, match=exception_message):
            RedisClientMixin(host='203.0.113.1', port=18000, db=5, prefix='testapp:test')


# -------------------------------
# 2. Healthcheck behavior
# -------------------------------


def test_healthcheck_passes(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')
    redis_client.ping.assert_called_once()  # initialization performs a healthcheck

    assert mixin.healthcheck()
    assert redis_client.ping.call_count == 2


def test_healthcheck_fails(redis_client):
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError):
        RedisClientMixin(redis_client=redis_client, prefix='testapp:test')


def test_healthcheck_without_raising(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client)
    redis_client.ping.side_effect = redis.exceptions.TimeoutError('Timeout')

    assert mixin.healthcheck(raise_error=False) is False
