"""Abstract base class for URL mapping data access objects (DAOs).

This class establishes a consistent contract for all URL mapping DAO
implementations, regardless of the underlying storage mechanism (e.g., Redis,
DynamoDB, PostgreSQL).

Responsibilities:
    - Provide a bidirectional index between long URLs and short codes.
    - Enforce uniqueness of both columns inside the data store itself.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortlinks.models import URLMappingModel
        >>> from shortlinks.dao.redis import URLMappingRedisDAO

        >>> dao = URLMappingRedisDAO(...)

        >>> dao.insert(URLMappingModel(target="https://example.com/a", shortcode="aZ3kQ1X"))
        <URLMappingRedisDAO>

        >>> dao.find_by_short_code("aZ3kQ1X")
        'https://example.com/a'

        >>> dao.find_by_long_url("https://example.com/a")
        'aZ3kQ1X'

        >>> dao.find_by_short_code("zzzzzzz") is None
        True
"""

from abc import ABC, abstractmethod

from shortlinks.models import URLMappingModel


class URLMappingBaseDAO(ABC):
    """Interface for URL mapping data access objects (DAOs).

    Methods:
        find_by_long_url(long_url: str, **kwargs) -> str | None:
            Return the short code mapped to a long URL, or None on miss.
            Raises DataStoreError on connection or read failure.

        find_by_short_code(shortcode: str, **kwargs) -> str | None:
            Return the long URL mapped to a short code, or None on miss.
            Raises DataStoreError on connection or read failure.

        insert(mapping: URLMappingModel, **kwargs) -> URLMappingBaseDAO:
            Atomically insert a new mapping.
            Raises LongURLConflictError if the long URL is already mapped.
            Raises ShortCodeConflictError if the short code is already taken.
            Raises DataStoreError on connection or write failure.

    Subclassing:
        Datastore-specific implementations must extend this class and
        implement all abstract methods. Uniqueness must be enforced by the
        data store, so two racing inserts resolve to exactly one winner.

    NOTE:
        - Mappings never expire and are never updated. The DAO does not
          provide an interface to delete entries.
    """

    @abstractmethod
    def find_by_long_url(self, long_url: str, **kwargs) -> str | None:
        """Look up the short code of an existing mapping by its long URL.

        Args:
            long_url (str):
                The original long URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str | None: The mapped short code if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_short_code(self, shortcode: str, **kwargs) -> str | None:
        """Look up the long URL of an existing mapping by its short code.

        Args:
            shortcode (str):
                The short code to resolve.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str | None: The mapped long URL if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def insert(self, mapping: URLMappingModel, **kwargs) -> 'URLMappingBaseDAO':
        """Atomically insert a new mapping into the data store.

        Args:
            mapping (URLMappingModel):
                The mapping to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            URLMappingBaseDAO: self (for method chaining)

        Raises:
            LongURLConflictError:
                If the long URL already has a mapping. Reported in preference
                to ShortCodeConflictError when both constraints are violated.

            ShortCodeConflictError:
                If the short code is already mapped to another long URL.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
