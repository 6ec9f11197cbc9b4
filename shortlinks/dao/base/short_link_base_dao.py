"""Abstract base class for short link data access objects (DAOs).

This class establishes a consistent contract for all short link DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, an in-memory dict in tests).

Responsibilities:
    - Provide an interface for inserting and retrieving ShortLinkModel objects.
    - Standardize error handling across data store implementations.
    - Release the underlying store handle on close().

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import timedelta
        >>> from shortlinks.models import ShortLinkModel
        >>> from shortlinks.dao.redis import ShortLinkRedisDAO

        >>> dao = ShortLinkRedisDAO(redis_url='redis://localhost:6379/0')

        >>> link = ShortLinkModel(target='http://example.com', link_id='3f9a0c1e')
        >>> dao.insert(link, ttl=timedelta(hours=1))

        >>> dao.get('3f9a0c1e').target
        'http://example.com'
"""

from abc import ABC, abstractmethod
from datetime import timedelta

from shortlinks.models import ShortLinkModel


class ShortLinkBaseDAO(ABC):
    """Interface for short link data access objects (DAOs).

    Methods:
        insert(short_link: ShortLinkModel, ttl: timedelta | None, **kwargs) -> ShortLinkBaseDAO:
            Write a link id -> URL mapping in a single atomic transaction.
            An existing entry under the same link id is overwritten.
            Raises DataStoreError on connection or write failure.

        get(link_id: str, **kwargs) -> ShortLinkModel:
            Retrieve a mapping by link id.
            Raises ShortLinkNotFoundError if the entry does not exist or has expired.
            Raises DataStoreError on connection or read failure.

        close() -> None:
            Release the store handle.

    NOTE:
        - Mappings expire through the store's own TTL mechanism. The DAO does not
          provide an interface to manually delete entries.
    """

    @abstractmethod
    def insert(self, short_link: ShortLinkModel, ttl: timedelta | None = None, **kwargs) -> 'ShortLinkBaseDAO':
        """Insert (or overwrite) a short link in the data store.

        Args:
            short_link (ShortLinkModel):
                The mapping to store.

            ttl (timedelta | None):
                Lifetime of the entry. None means the entry never expires.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, link_id: str, **kwargs) -> ShortLinkModel:
        """Retrieve a short link from the data store by its link id.

        Args:
            link_id (str):
                The identifier returned when the link was created.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkModel: The stored mapping.

        Raises:
            ShortLinkNotFoundError:
                If no live entry exists for the link id.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the data store handle."""
        pass
