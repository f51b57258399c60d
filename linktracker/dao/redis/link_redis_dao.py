"""Data Access Object (DAO) implementation for managing link records in Redis

This module provides a Redis-based implementation of LinkBaseDAO.

Responsibilities:
    - Insert, look up and patch link records stored as Redis hashes;
    - Maintain the original URL index used for idempotent link creation;
    - Atomically increment per-link redirect counters;
    - Provide defensive error handling and raise appropriate DAO exceptions.

Storage layout:
    <prefix>:links:<code>                   HASH  code, original_url, masked_link,
                                                  [password], [expiration_date],
                                                  redirect_count, is_valid
    <prefix>:links:url:<xxh64(original url)> SET   codes registered for that URL

Classes:
    LinkRedisDAO:
        DAO for storing and retrieving LinkModel records in a Redis datastore.

Example:
    >>> from linktracker.models import LinkModel
    >>> from linktracker.dao.redis import LinkRedisDAO

    >>> dao = LinkRedisDAO(prefix="linktracker:dev")

    >>> link = LinkModel(
    ...     code='aBsJu',
    ...     original_url='https://example.com/page',
    ...     masked_link='http://localhost:3000/aBsJu',
    ... )
    >>> dao.insert(link)
    LinkModel(code='aBsJu', ...)

    >>> dao.find_one(original_url='https://example.com/page', is_valid=True).code
    'aBsJu'

    >>> dao.increment_redirect_count('aBsJu')
    1
"""

from typing import Any

from beartype import beartype

from linktracker.models import LinkModel
from linktracker.dao.base import LinkBaseDAO
from linktracker.dao.redis.mixins import RedisClientMixin
from linktracker.dao.redis.helpers import (
    handle_redis_connection_error,
    encode_link,
    encode_patch,
    decode_link,
)
from linktracker.dao.exceptions import RecordAlreadyExistsError, RecordNotFoundError


class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing link records

    This class implements the LinkBaseDAO interface using Redis as a data store.

    Every write is executed as an optimistic transaction (WATCH on the link key +
    MULTI/EXEC), so the existence check and the write it guards can't be interleaved
    with a concurrent write to the same link. redis-py retries the transaction
    when the watched key changes in between.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, link: LinkModel, **kwargs) -> LinkModel:
        """Insert a link record and register it in the original URL index

        Args:
            link (LinkModel):
                The new link record.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            LinkModel: the inserted record.

        Raises:
            RecordAlreadyExistsError:
                If a link with the same code already exists.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        link_key = self.keys.link_key(link.code)
        url_key = self.keys.original_url_key(link.original_url)

        def _insert(pipe) -> None:
            if pipe.exists(link_key):
                raise RecordAlreadyExistsError(f"Link with code '{link.code}' already exists.")
            pipe.multi()
            pipe.hset(link_key, mapping=encode_link(link))
            pipe.sadd(url_key, link.code)

        self.redis.transaction(_insert, link_key)
        return link

    @handle_redis_connection_error
    @beartype
    def find_one(self, **criteria: Any) -> LinkModel | None:
        """Find the first link record matching every criterion

        Candidates are fetched by code, or through the original URL index when
        no code is given, and then filtered on all remaining criteria.

        Raises:
            ValueError:
                If neither 'code' nor 'original_url' is part of the criteria.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.find_one(code='aBsJu')
            LinkModel(code='aBsJu', original_url='https://example.com/page', ...)
            >>> dao.find_one(code='aBsJu', is_valid=False) is None
            True
        """
        self._check_fields(criteria)

        if 'code' in criteria:
            codes = [criteria['code']]
        elif 'original_url' in criteria:
            codes = sorted(self.redis.smembers(self.keys.original_url_key(criteria['original_url'])))
        else:
            raise ValueError("Links can only be looked up by 'code' or 'original_url'.")

        if not codes:
            return None

        with self.redis.pipeline(transaction=False) as pipe:
            for code in codes:
                pipe.hgetall(self.keys.link_key(code))
            records = pipe.execute()

        for record in records:
            if not record:
                continue
            link = decode_link(record)
            if all(getattr(link, name) == value for name, value in criteria.items()):
                return link
        return None

    @handle_redis_connection_error
    @beartype
    def update(self, code: str, **fields: Any) -> bool:
        """Patch the given fields of the link record stored under code

        Fields set to None are removed from the stored hash (optional fields only).

        Returns:
            bool: True if the record was patched, False if it doesn't exist.

        Raises:
            ValueError:
                If a field is unknown, is the code, or is a required field set to None.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.update('aBsJu', is_valid=False)
            True
            >>> dao.update('nope1', is_valid=False)
            False
        """
        self._check_fields(fields, allow_code=False)
        if not fields:
            raise ValueError('At least one field must be given to update a link.')

        link_key = self.keys.link_key(code)
        mapping, removed = encode_patch(fields)

        def _update(pipe) -> bool:
            if not pipe.exists(link_key):
                return False
            pipe.multi()
            if mapping:
                pipe.hset(link_key, mapping=mapping)
            if removed:
                pipe.hdel(link_key, *removed)
            if 'original_url' in mapping:
                pipe.sadd(self.keys.original_url_key(mapping['original_url']), code)
            return True

        return self.redis.transaction(_update, link_key, value_from_callable=True)

    @handle_redis_connection_error
    @beartype
    def increment_redirect_count(self, code: str, **kwargs) -> int:
        """Atomically increment the redirect counter of a link (HINCRBY)

        Returns:
            int: the redirect count after the increment.

        Raises:
            RecordNotFoundError:
                If no link with the given code exists.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.increment_redirect_count('aBsJu')
            3
        """
        link_key = self.keys.link_key(code)

        # NOTE: HINCRBY on a missing key would create a partial hash holding only
        #       the counter, hence the existence check within the same transaction.
        def _increment(pipe) -> None:
            if not pipe.exists(link_key):
                raise RecordNotFoundError(f"Link with code '{code}' not found.")
            pipe.multi()
            pipe.hincrby(link_key, 'redirect_count', 1)

        (redirect_count,) = self.redis.transaction(_increment, link_key)
        return int(redirect_count)
