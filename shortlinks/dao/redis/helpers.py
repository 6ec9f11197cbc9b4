import functools
from typing import Any, TypeVar
from collections.abc import Callable

import redis

from shortlinks.dao.exceptions import DataStoreError


__all__ = []


def redis_location(client: redis.Redis) -> str:
    """Describe where a Redis client points to, e.g. 'localhost:6379/0'"""
    info = client.connection_pool.connection_kwargs
    if info.get('path'):
        return f"{info.get('path')}/{info.get('db')}"
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_errors(method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any Redis failure.

    Example:
        >>> @handle_redis_errors
        ... def get(self, link_id):
        ...     return self.redis.get(link_id)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis failed during {method.__name__}(): {e}') from e

    return wrapper
