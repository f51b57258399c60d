"""Abstract base class for link data access objects (DAOs).

This class establishes a consistent contract for all link DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-memory, SQL).

Responsibilities:
    - Provide an interface for inserting, looking up and updating LinkModel records.
    - Expose an atomic redirect counter increment keyed by code.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linktracker.models import LinkModel
        >>> from linktracker.dao.redis import LinkRedisDAO

        >>> dao = LinkRedisDAO(...)

        >>> link = LinkModel(
        ...     code='aBsJu',
        ...     original_url='https://example.com/blog/article-123',
        ...     masked_link='http://localhost:3000/aBsJu',
        ... )
        >>> dao.insert(link)

        >>> dao.find_one(code='aBsJu').original_url
        'https://example.com/blog/article-123'

        >>> dao.update('aBsJu', is_valid=False)
        True
"""

from abc import ABC, abstractmethod
from dataclasses import fields
from typing import Any

from linktracker.models import LinkModel


LINK_FIELDS = frozenset(field.name for field in fields(LinkModel))


class LinkBaseDAO(ABC):
    """Interface for link data access objects (DAOs).

    Methods:
        insert(link: LinkModel, **kwargs) -> LinkModel:
            Insert a new link record.
            Raises RecordAlreadyExistsError if the code already exists.

        find_one(**criteria) -> LinkModel | None:
            Return the first record matching every criterion exactly.

        update(code: str, **fields) -> bool:
            Overwrite only the given fields of the record stored under code.

        increment_redirect_count(code: str, **kwargs) -> int:
            Atomically add 1 to the record's redirect counter.
            Raises RecordNotFoundError if the code doesn't exist.

        All methods raise DataStoreError on connection, read or write failure.

    Subclassing:
        Datastore-specific implementations (e.g., LinkRedisDAO or LinkMemoryDAO)
        must extend this class and implement all abstract methods. Each method is
        expected to be atomic on its own; callers don't add any locking on top.

    NOTE:
        - Records are never deleted. Expiration and invalidation are soft.
    """

    @abstractmethod
    def insert(self, link: LinkModel, **kwargs) -> LinkModel:
        """Insert a new link record into the data store.

        Args:
            link (LinkModel):
                The record to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkModel: the inserted record.

        Raises:
            RecordAlreadyExistsError:
                If a record with the same code already exists (valid or not).

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_one(self, **criteria: Any) -> LinkModel | None:
        """Find a single link record by exact match on every given field.

        Args:
            **criteria:
                LinkModel field names and the values they must equal,
                e.g. `code='aBsJu'` or `original_url='https://...', is_valid=True`.

        Returns:
            LinkModel | None: The first matching record, None if nothing matches.

        Raises:
            ValueError:
                If a criterion doesn't name a LinkModel field, or the data store
                can't look records up by the given fields.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def update(self, code: str, **fields: Any) -> bool:
        """Patch the given fields of the record stored under `code`.

        Returns:
            bool: True if a record was patched, False if none exists (nothing is written).

        Raises:
            ValueError:
                If a field doesn't name a mutable LinkModel field.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def increment_redirect_count(self, code: str, **kwargs) -> int:
        """Atomically increment the redirect counter of a record by 1.

        Returns:
            int: the counter value after the increment.

        Raises:
            RecordNotFoundError:
                If no record with the given code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @staticmethod
    def _check_fields(names, *, allow_code: bool = True) -> None:
        unknown = set(names) - LINK_FIELDS
        if unknown:
            raise ValueError(f'Unknown link fields: {", ".join(sorted(unknown))}.')
        if not allow_code and 'code' in names:
            raise ValueError('Link code is immutable.')
