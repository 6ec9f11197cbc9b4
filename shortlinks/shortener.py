"""Shortener core: one store handle plus the post/get operations on it.

Lifecycle:
    Shortener(config) -> open() -> post()/get() ... -> close()

`open()` connects to the link store exactly once. Using the handle before
`open()` or after `close()` raises ShortenerNotOpenError. Store failures are
raised to the caller as DataStoreError; nothing is retried.

Example:
    >>> from datetime import timedelta
    >>> from shortlinks import Shortener, ShortenerConfig
    >>> config = ShortenerConfig(store_url='redis://localhost:6379/0', default_ttl=timedelta(days=7))
    >>> with Shortener.from_config(config) as shortener:
    ...     link_id = shortener.post('example.com/docs')
    ...     shortener.get(link_id)
    'http://example.com/docs'
"""

import threading
from datetime import timedelta
from typing import Self

from shortlinks.models import ShortLinkModel
from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.redis import ShortLinkRedisDAO
from shortlinks.exceptions import ShortenerNotOpenError
from shortlinks.utils.config import ShortenerConfig
from shortlinks.utils.constants import DEFAULT_LINK_ID_LENGTH
from shortlinks.utils.shortener import generate_link_id, normalize_url


class Shortener:
    """URL shortener bound to a single link store.

    Attributes:
        config (ShortenerConfig):
            Immutable configuration (store location, default TTL and length, logger).
        logger (ShortenerLogger):
            Log sink taken from the configuration.

    Methods:
        open() -> Shortener:
            Connect to the link store. Runs once; later calls are no-ops.
        post(url, ttl=None, length=None) -> str:
            Store a URL and return its new link id.
        get(link_id) -> str:
            Resolve a link id to the stored URL.
        close() -> None:
            Release the link store.
    """

    def __init__(self, config: ShortenerConfig | None = None, dao: ShortLinkBaseDAO | None = None):
        """Build an unopened shortener

        Args:
            config (ShortenerConfig | None):
                Configuration. Defaults to ShortenerConfig().
            dao (ShortLinkBaseDAO | None):
                Pre-built link store. If None, open() connects a ShortLinkRedisDAO
                to config.store_url.
        """
        self.config = config if config is not None else ShortenerConfig()
        self.logger = self.config.logger
        self._dao = dao
        self._opened = False
        self._closed = False
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: ShortenerConfig | None = None) -> Self:
        """Build and open a shortener in one call

        Raises:
            DataStoreError: If the link store is unreachable.
        """
        return cls(config).open()

    @property
    def is_open(self) -> bool:
        return self._opened and not self._closed

    def open(self) -> Self:
        """Open the link store

        Concurrent callers share a single connection: the first caller opens
        the store, the others wait for it and return.

        Returns:
            Shortener: self (for method chaining)

        Raises:
            ShortenerNotOpenError: If the shortener was already closed.
            DataStoreError: If the link store is unreachable.
        """
        with self._lock:
            if self._closed:
                raise ShortenerNotOpenError('Shortener is closed and cannot be reopened.')
            if self._opened:
                return self

            if self._dao is None:
                self._dao = ShortLinkRedisDAO(redis_url=self.config.store_url, prefix=self.config.key_prefix)
            self._opened = True

        self.logger.debug('Opened link store at %s', self.config.store_url)
        return self

    def post(self, url: str, ttl: timedelta | None = None, length: int | None = None) -> str:
        """Shorten a URL

        Args:
            url (str):
                URL to shorten. A missing scheme defaults to http.
            ttl (timedelta | None):
                Lifetime of the link. None or zero falls back to config.default_ttl
                (which may itself mean "never expire").
            length (int | None):
                Number of hex characters in the link id. None or non-positive
                falls back to config.default_length.

        Returns:
            str: the new link id.

        Raises:
            ShortenerNotOpenError: If the shortener is not open.
            URLParseError: If url is not a valid URL.
            ValueError: If ttl is negative.
            DataStoreError: If the write fails.
        """
        dao = self._store()
        target = normalize_url(url)

        if ttl is not None and ttl < timedelta(0):
            raise ValueError(f'TTL must not be negative (given value: {ttl}).')
        if not ttl:
            ttl = self.config.default_ttl
        if not length or length <= 0:
            length = self.config.default_length or DEFAULT_LINK_ID_LENGTH

        link_id = generate_link_id(target, length=length)
        dao.insert(ShortLinkModel(target=target, link_id=link_id), ttl=ttl or None)

        self.logger.info('New entry: %s - %s (ttl: %s)', link_id, target, ttl or 'none')
        return link_id

    def get(self, link_id: str) -> str:
        """Resolve a link id to its URL

        Raises:
            ShortenerNotOpenError: If the shortener is not open.
            ShortLinkNotFoundError: If the id is unknown or expired.
            DataStoreError: If the read fails.
        """
        short_link = self._store().get(link_id)
        self.logger.info('Get entry: %s - %s', link_id, short_link.target)
        return short_link.target

    def close(self) -> None:
        """Release the link store

        Raises:
            ShortenerNotOpenError: If the shortener was never opened or is already closed.
        """
        with self._lock:
            if not self.is_open:
                raise ShortenerNotOpenError('Shortener is not open.')
            self._closed = True
            dao = self._dao

        dao.close()
        self.logger.debug('Closed link store at %s', self.config.store_url)

    def __enter__(self) -> Self:
        return self if self.is_open else self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _store(self) -> ShortLinkBaseDAO:
        if not self.is_open:
            raise ShortenerNotOpenError('Shortener is not open. Call open() first.')
        return self._dao
