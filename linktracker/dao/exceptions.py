"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    RecordNotFoundError:
        Raised when a link record is not found in the data store.

    RecordAlreadyExistsError:
        Raised when attempting to insert a link record whose code is already taken.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from linktracker.dao.exceptions import RecordAlreadyExistsError
    >>> raise RecordAlreadyExistsError("Link with code 'aBsJu' already exists.")
    Traceback (most recent call last):
        ...
    linktracker.dao.exceptions.RecordAlreadyExistsError: Link with code 'aBsJu' already exists.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class RecordNotFoundError(DAOError):
    """Exception raised when a link record is not found in the data store."""

    pass


class RecordAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a link record that already exists in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
