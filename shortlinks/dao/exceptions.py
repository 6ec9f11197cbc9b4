"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortLinkNotFoundError:
        Raised when a link id is missing from the store or its entry expired.

    DataStoreError:
        Raised when the data store fails (e.g., connection issues, timeouts, closed client, etc.).

Example:
    >>> from shortlinks.dao.exceptions import ShortLinkNotFoundError
    >>> raise ShortLinkNotFoundError("Short link with id '3f9a0c1e' not found.")
    Traceback (most recent call last):
        ...
    shortlinks.dao.exceptions.ShortLinkNotFoundError: Short link with id '3f9a0c1e' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortLinkNotFoundError(DAOError):
    """Exception raised when a link id is not found (or has expired) in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, closed client, etc.
    """

    pass
