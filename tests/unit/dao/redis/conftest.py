from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def app_prefix() -> str:
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis pipeline-compatible client.

    transaction() runs the given function against the mock itself and then
    executes it, like redis-py does once the watched keys are set.
    """
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': '203.0.113.1', 'port': 18000, 'db': 5},
    )
    client.exists.return_value = True
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    client.execute.return_value = []

    def _transaction(func, *watches, value_from_callable=False, **kwargs):
        func_value = func(client)
        exec_value = client.execute()
        return func_value if value_from_callable else exec_value

    client.transaction = MagicMock(side_effect=_transaction)
    return client
