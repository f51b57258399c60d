import functools
from datetime import datetime
from typing import TypeVar, Any
from collections.abc import Callable, Mapping

import redis

from linktracker.models import LinkModel
from linktracker.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

OPTIONAL_FIELDS = frozenset({'password', 'expiration_date'})


def redis_address(client: redis.Redis) -> str:
    """Return 'host:port/db' of the server a client is configured for"""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error(method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.ConnectionError
            or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def get_link(self, code):
        ...     return self.redis.hgetall(code)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_address(self.redis)}.") from e

    return wrapper


def encode_value(name: str, value: Any) -> str | int:
    """Encode a single LinkModel field value as a Redis hash value"""
    if name == 'is_valid':
        return int(bool(value))
    if name == 'expiration_date':
        return value.isoformat()
    return value


def encode_link(link: LinkModel) -> dict[str, str | int]:
    """Encode a LinkModel as a Redis hash mapping

    Unset optional fields (password, expiration_date) are left out of the mapping
    so they are absent from the stored hash rather than stored as empty values.

    Example:
        >>> encode_link(LinkModel(code='aBsJu', original_url='https://example.com', masked_link='http://localhost:3000/aBsJu'))
        {'code': 'aBsJu', 'original_url': 'https://example.com', 'masked_link': 'http://localhost:3000/aBsJu', 'redirect_count': 0, 'is_valid': 1}
    """
    mapping = {
        'code': link.code,
        'original_url': link.original_url,
        'masked_link': link.masked_link,
        'redirect_count': link.redirect_count,
        'is_valid': encode_value('is_valid', link.is_valid),
    }
    for name in ('password', 'expiration_date'):
        value = getattr(link, name)
        if value is not None:
            mapping[name] = encode_value(name, value)
    return mapping


def encode_patch(fields: Mapping[str, Any]) -> tuple[dict[str, str | int], list[str]]:
    """Split a field patch into a Redis hash mapping to set and a list of fields to delete

    Raises:
        ValueError: if a required field is set to None.
    """
    mapping, removed = {}, []
    for name, value in fields.items():
        if value is None:
            if name not in OPTIONAL_FIELDS:
                raise ValueError(f"Link field '{name}' can't be unset.")
            removed.append(name)
        else:
            mapping[name] = encode_value(name, value)
    return mapping, sorted(removed)


def decode_link(mapping: Mapping[str, str]) -> LinkModel:
    """Decode a Redis hash mapping (as returned by HGETALL) into a LinkModel"""
    expiration_date = mapping.get('expiration_date')
    return LinkModel(
        code=mapping['code'],
        original_url=mapping['original_url'],
        masked_link=mapping['masked_link'],
        password=mapping.get('password'),
        expiration_date=datetime.fromisoformat(expiration_date) if expiration_date else None,
        redirect_count=int(mapping.get('redirect_count', 0)),
        is_valid=mapping.get('is_valid') == '1',
    )
