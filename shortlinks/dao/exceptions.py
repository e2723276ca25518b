"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    MappingConflictError:
        Raised when an insert violates one of the mapping uniqueness constraints.

    LongURLConflictError:
        Raised when the long URL already has a mapping (lost an insert race).

    ShortCodeConflictError:
        Raised when the short code is already mapped to another long URL.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from shortlinks.dao.exceptions import ShortCodeConflictError
    >>> raise ShortCodeConflictError("Short code 'aZ3kQ1X' is already taken.")
    Traceback (most recent call last):
        ...
    shortlinks.dao.exceptions.ShortCodeConflictError: Short code 'aZ3kQ1X' is already taken.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class MappingConflictError(DAOError):
    """Exception raised when an insert violates a uniqueness constraint of the data store."""

    pass


class LongURLConflictError(MappingConflictError):
    """Exception raised when the long URL of an inserted mapping is already mapped."""

    pass


class ShortCodeConflictError(MappingConflictError):
    """Exception raised when the short code of an inserted mapping is already taken."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
