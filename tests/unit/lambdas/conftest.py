from typing import Any

import pytest
from pytest import MonkeyPatch

from linktracker.dao.memory import LinkMemoryDAO
from linktracker.registry import LinkRegistry


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
    monkeypatch.delenv('LINK_BASE_URL', raising=False)


@pytest.fixture
def context() -> Any:
    return {'function_name': 'test'}


@pytest.fixture
def link_dao() -> LinkMemoryDAO:
    return LinkMemoryDAO()


@pytest.fixture
def registry(link_dao: LinkMemoryDAO) -> LinkRegistry:
    return LinkRegistry(link_dao, base_url='https://lnk.example.com')


@pytest.fixture
def apigw_event():
    """Build an API Gateway proxy event, overriding top-level keys."""

    def _event(**overrides: Any) -> dict[str, Any]:
        event = {
            'httpMethod': 'GET',
            'path': '/',
            'pathParameters': None,
            'queryStringParameters': None,
            'body': None,
            'requestContext': {'domainName': 'lnk.example.com', 'stage': 'test'},
        }
        event.update(overrides)
        return event

    return _event
