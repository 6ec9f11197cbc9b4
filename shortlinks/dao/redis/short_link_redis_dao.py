"""Data Access Object (DAO) implementation for managing short links in Redis

This module provides a Redis-based implementation of ShortLinkBaseDAO.

Responsibilities:
    - Insert and retrieve short links from Redis;
    - Attach store-managed expiry (PX) to entries with a TTL;
    - Translate Redis failures into DAO exceptions.

Classes:
    ShortLinkRedisDAO:
        DAO for storing and retrieving ShortLinkModel in a Redis datastore.

Example:
    >>> from datetime import timedelta
    >>> from shortlinks.models import ShortLinkModel
    >>> from shortlinks.dao.redis import ShortLinkRedisDAO

    >>> dao = ShortLinkRedisDAO(prefix='shortlinks:dev')

    >>> link = ShortLinkModel(target='http://example.com/page', link_id='3f9a0c1e')
    >>> dao.insert(link, ttl=timedelta(minutes=5))
    <ShortLinkRedisDAO>

    >>> retrieved = dao.get('3f9a0c1e')
    >>> retrieved.target
    'http://example.com/page'
    >>> retrieved.expires_at
    <datetime>
"""

import math
from datetime import datetime, timedelta, UTC

from beartype import beartype

from shortlinks.models import ShortLinkModel
from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_errors
from shortlinks.dao.exceptions import ShortLinkNotFoundError


def ttl_milliseconds(ttl: timedelta) -> int:
    """Convert a positive TTL to whole milliseconds, rounding up to at least 1 ms."""
    return max(1, math.ceil(ttl / timedelta(milliseconds=1)))


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short link mappings

    This class implements the ShortLinkBaseDAO interface using Redis as a data store.
    A link is a plain string key (the link id, optionally prefixed) holding the target URL.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(short_link: ShortLinkModel, ttl: timedelta | None = None, **kwargs) -> ShortLinkRedisDAO:
            Write (or overwrite) a link id -> URL mapping, with an optional expiry.
            Raises DataStoreError on Redis failures.

        get(link_id: str, **kwargs) -> ShortLinkModel:
            Retrieve a mapping and its expiry by link id.
            Raises ShortLinkNotFoundError when the link id doesn't exist (or expired).
            Raises DataStoreError on Redis failures.
    """

    @handle_redis_errors
    @beartype
    def insert(self, short_link: ShortLinkModel, ttl: timedelta | None = None, **kwargs) -> 'ShortLinkRedisDAO':
        """Insert a short link mapping into Redis

        The write runs inside a MULTI/EXEC transaction. An existing entry under
        the same link id is overwritten (and loses its previous expiry).

        Args:
            short_link (ShortLinkModel):
                ShortLinkModel instance representing the mapping.
            ttl (timedelta | None):
                Lifetime of the entry. None or a zero duration means no expiry.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkRedisDAO: self (for method chaining)

        Raises:
            ValueError:
                If ttl is negative.
            DataStoreError:
                If a Redis error occurs during the transaction.

        Example:
            >>> dao.insert(ShortLinkModel(target='http://example.com', link_id='3f9a0c1e'))
            <ShortLinkRedisDAO>
        """
        if ttl is not None and ttl < timedelta(0):
            raise ValueError(f'TTL must not be negative (given value: {ttl}).')

        link_key = self.keys.link_key(short_link.link_id)
        with self.redis.pipeline(transaction=True) as pipe:
            if ttl:
                pipe.set(link_key, short_link.target, px=ttl_milliseconds(ttl))
            else:
                pipe.set(link_key, short_link.target)
            pipe.execute()
        return self

    @handle_redis_errors
    @beartype
    def get(self, link_id: str, **kwargs) -> ShortLinkModel:
        """Retrieve a stored short link by link id

        Fetches the target URL and its remaining TTL in one transaction so the
        expiry matches the value read.

        Args:
            link_id (str):
                The identifier of the short link.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkModel:
                The retrieved mapping. expires_at is None for entries without a TTL.

        Raises:
            ShortLinkNotFoundError:
                If the link id does not exist in Redis (or already expired).
            DataStoreError:
                If a Redis error occurs.

        Example:
            >>> dao.get('3f9a0c1e')
            ShortLinkModel(target='http://example.com', link_id='3f9a0c1e', expires_at=None)
        """
        link_key = self.keys.link_key(link_id)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(link_key)
            pipe.pttl(link_key)
            target, pttl = pipe.execute()

        if target is None:
            raise ShortLinkNotFoundError(f"Short link with id '{link_id}' not found.")
        if isinstance(target, bytes):
            target = target.decode('utf-8')

        # PTTL is -1 for keys without an expiry
        expires_at = datetime.now(UTC) + timedelta(milliseconds=pttl) if pttl >= 0 else None
        return ShortLinkModel(target=target, link_id=link_id, expires_at=expires_at)
