"""Unit tests for the ShortLinkRedisDAO

Test coverage includes:

1. Initialization and configuration
   - Ensures the DAO pings the provided Redis client.
   - Confirms an unreachable Redis raises DataStoreError.

2. Insertion behavior
   - Validates inserts run in a MULTI/EXEC pipeline.
   - Ensures TTLs are sent as PX milliseconds (rounded up).
   - Confirms no expiry is set for missing or zero TTLs.
   - Ensures negative TTLs and invalid types are rejected.
   - Confirms Redis errors raise DataStoreError.

3. Retrieval behavior
   - Ensures stored links are returned as ShortLinkModel with an expiry.
   - Confirms links without a TTL have no expiry.
   - Confirms missing keys raise ShortLinkNotFoundError.
   - Confirms Redis errors raise DataStoreError.

4. Closing
   - Ensures close() closes the Redis client.
"""

from datetime import datetime, timedelta, UTC
from unittest.mock import call

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

from shortlinks.models import ShortLinkModel
from shortlinks.dao.exceptions import DataStoreError, ShortLinkNotFoundError
from shortlinks.dao.redis import ShortLinkRedisDAO
from shortlinks.dao.redis.short_link_redis_dao import ttl_milliseconds


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao(redis_client, app_prefix):
    """Create a ShortLinkRedisDAO instance backed by a mocked Redis client."""
    return ShortLinkRedisDAO(redis_client=redis_client, prefix=app_prefix)


@pytest.fixture
def short_link():
    return ShortLinkModel(target='http://example.com/docs', link_id='3f9a0c1e')


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


def test_initialize_pings_redis(dao, redis_client):
    """Ensure the DAO healthchecks the client on creation."""
    redis_client.ping.assert_called_once_with()
    assert dao.redis is redis_client
    assert dao.keys.prefix == 'testapp:test'


def test_initialize_with_unreachable_redis(redis_client):
    """Ensure an unreachable Redis raises DataStoreError."""
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection refused')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        ShortLinkRedisDAO(redis_client=redis_client)


# -------------------------------
# 2. Insertion behavior
# -------------------------------


def test_insert_without_ttl(dao, redis_client, short_link):
    """Ensure links without a TTL are stored without an expiry."""
    result = dao.insert(short_link)

    assert result is dao
    redis_client.pipeline.assert_called_once_with(transaction=True)
    redis_client.set.assert_called_once_with('testapp:test:3f9a0c1e', 'http://example.com/docs')
    redis_client.execute.assert_called_once_with()


def test_insert_with_zero_ttl(dao, redis_client, short_link):
    """Ensure a zero TTL means no expiry."""
    dao.insert(short_link, ttl=timedelta(0))
    redis_client.set.assert_called_once_with('testapp:test:3f9a0c1e', 'http://example.com/docs')


def test_insert_with_ttl(dao, redis_client, short_link):
    """Ensure TTLs are sent to Redis as PX milliseconds."""
    dao.insert(short_link, ttl=timedelta(minutes=5))
    redis_client.set.assert_called_once_with('testapp:test:3f9a0c1e', 'http://example.com/docs', px=300_000)


def test_insert_without_prefix(redis_client, short_link):
    """Ensure keys are bare link ids when no prefix is configured."""
    dao = ShortLinkRedisDAO(redis_client=redis_client)
    dao.insert(short_link)
    redis_client.set.assert_called_once_with('3f9a0c1e', 'http://example.com/docs')


def test_insert_overwrites_existing_link(dao, redis_client, short_link):
    """Ensure a colliding link id is written again without checks."""
    dao.insert(short_link)
    dao.insert(ShortLinkModel(target='http://example.org', link_id='3f9a0c1e'))

    assert redis_client.set.call_args_list == [
        call('testapp:test:3f9a0c1e', 'http://example.com/docs'),
        call('testapp:test:3f9a0c1e', 'http://example.org'),
    ]
    redis_client.exists.assert_not_called()


def test_insert_with_negative_ttl(dao, redis_client, short_link):
    """Ensure negative TTLs are rejected before reaching Redis."""
    with pytest.raises(ValueError, match='TTL must not be negative'):
        dao.insert(short_link, ttl=timedelta(seconds=-1))
    redis_client.set.assert_not_called()


@pytest.mark.parametrize(
    'args',
    [
        ('http://example.com/notamodel',),
        (ShortLinkModel(target='http://example.com', link_id='3f9a0c1e'), 60),
    ],
)
def test_insert_with_invalid_type(dao, args):
    """Ensure invalid argument types raise Beartype errors."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert(*args)


def test_insert_with_redis_connection_error(dao, redis_client, short_link):
    """Ensure Redis connection errors during insert raise DataStoreError."""
    redis_client.execute.side_effect = redis.exceptions.ConnectionError('Connection error')
    redis_client.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}

    with pytest.raises(DataStoreError, match="Can't connect to Redis at 203.0.113.1:18000/5."):
        dao.insert(short_link)


def test_insert_with_redis_error(dao, redis_client, short_link):
    """Ensure other Redis errors during insert raise DataStoreError."""
    redis_client.execute.side_effect = redis.exceptions.ResponseError('READONLY replica')

    with pytest.raises(DataStoreError, match=r'Redis failed during insert\(\): READONLY replica'):
        dao.insert(short_link)


@pytest.mark.parametrize(
    'ttl, expected',
    [
        (timedelta(seconds=1), 1000),
        (timedelta(milliseconds=50), 50),
        (timedelta(microseconds=1500), 2),
        (timedelta(microseconds=1), 1),
    ],
)
def test_ttl_milliseconds(ttl, expected):
    assert ttl_milliseconds(ttl) == expected


# -------------------------------
# 3. Retrieval behavior
# -------------------------------


@freeze_time('2026-01-15 12:00:00')
def test_get_short_link(dao, redis_client):
    """Ensure stored links are returned with their absolute expiry."""
    redis_client.execute.return_value = ['http://example.com/docs', 60_000]

    short_link = dao.get('3f9a0c1e')

    assert short_link == ShortLinkModel(
        target='http://example.com/docs',
        link_id='3f9a0c1e',
        expires_at=datetime(2026, 1, 15, 12, 1, 0, tzinfo=UTC),
    )
    redis_client.pipeline.assert_called_once_with(transaction=True)
    redis_client.get.assert_called_once_with('testapp:test:3f9a0c1e')
    redis_client.pttl.assert_called_once_with('testapp:test:3f9a0c1e')


def test_get_short_link_without_expiry(dao, redis_client):
    """Ensure links without a TTL report no expiry."""
    redis_client.execute.return_value = ['http://example.com/docs', -1]
    assert dao.get('3f9a0c1e').expires_at is None


def test_get_short_link_with_bytes_response(dao, redis_client):
    """Ensure clients without decode_responses still yield str targets."""
    redis_client.execute.return_value = [b'http://example.com/docs', -1]
    assert dao.get('3f9a0c1e').target == 'http://example.com/docs'


def test_get_missing_short_link(dao, redis_client):
    """Ensure missing (or expired) keys raise ShortLinkNotFoundError."""
    redis_client.execute.return_value = [None, -2]

    with pytest.raises(ShortLinkNotFoundError, match="Short link with id '3f9a0c1e' not found."):
        dao.get('3f9a0c1e')


def test_get_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get(12345)


def test_get_with_redis_connection_error(dao, redis_client):
    """Ensure Redis connection errors during get raise DataStoreError."""
    redis_client.execute.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        dao.get('3f9a0c1e')


# -------------------------------
# 4. Closing
# -------------------------------


def test_close(dao, redis_client):
    dao.close()
    redis_client.close.assert_called_once_with()
