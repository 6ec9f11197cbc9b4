"""Redis mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize Redis client
    - Healthcheck Redis client
    - Close Redis client

Classes:
    - RedisClientMixin: Base mixin to inject Redis key management, client setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
        ...     pass
        ...
        >>> dao = ShortLinkRedisDAO(redis_url='redis://localhost:6379/0', prefix='shortlinks:dev')
        >>> dao._healthcheck()
        True
"""

from typing import Optional

import redis

from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.redis.helpers import redis_location
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.utils.constants import DEFAULT_STORE_URL


class RedisClientMixin:
    """Mixin Redis client setup and health check for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Active Redis client instance used by subclasses.

        keys (RedisKeySchema):
            Helper class for generating namespaced Redis key names.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Ping Redis to verify connectivity.
            Optionally raise a DataStoreError if unreachable.

        close() -> None:
            Close the Redis client and its connection pool.
    """

    def __init__(
        self,
        redis_url: Optional[str] = DEFAULT_STORE_URL,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize a Redis-based DAO for short link management

        The option is given to either use an existing Redis client instance or
        create one from a Redis connection URL.

        Args:
            redis_url (Optional[str]):
                Connection URL, e.g. 'redis://localhost:6379/0' or 'unix:///tmp/redis.sock?db=0'.
                Defaults to 'redis://localhost:6379/0'.

            redis_client (Optional[redis.Redis]):
                Pre-initialized Redis client. If None, a new client is created.

            prefix (Optional[str]):
                Namespace prefix for all Redis keys, e.g. 'app:env'.

        Raises:
            DataStoreError:
                If the URL is malformed or the Redis healthcheck fails (connectivity issues).
        """
        if redis_client is None:
            try:
                redis_client = redis.Redis.from_url(redis_url, decode_responses=True)
            except ValueError as e:
                raise DataStoreError(f'Invalid Redis URL {redis_url!r}: {e}') from e

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if Redis is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If Redis connection cannot be established and raise_error=True.

        Example:
            >>> self._healthcheck()
            True
        """
        try:
            self.redis.ping()
        except redis.exceptions.RedisError as e:
            if raise_error:
                raise DataStoreError(
                    f"Can't connect to Redis at {redis_location(self.redis)}. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True

    def close(self) -> None:
        """Close the Redis client, releasing its pooled connections."""
        self.redis.close()
