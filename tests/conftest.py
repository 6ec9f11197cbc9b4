import time
from datetime import datetime, timedelta, UTC

import pytest

from shortlinks.models import ShortLinkModel
from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.exceptions import ShortLinkNotFoundError, DataStoreError


class InMemoryShortLinkDAO(ShortLinkBaseDAO):
    """Dict-backed link store with monotonic-clock expiry."""

    def __init__(self):
        self.entries: dict[str, tuple[str, float | None]] = {}
        self.closed = False

    def insert(self, short_link: ShortLinkModel, ttl: timedelta | None = None, **kwargs) -> 'InMemoryShortLinkDAO':
        if self.closed:
            raise DataStoreError('Store is closed.')
        deadline = time.monotonic() + ttl.total_seconds() if ttl else None
        self.entries[short_link.link_id] = (short_link.target, deadline)
        return self

    def get(self, link_id: str, **kwargs) -> ShortLinkModel:
        if self.closed:
            raise DataStoreError('Store is closed.')
        target, deadline = self.entries.get(link_id, (None, None))
        if target is None or (deadline is not None and time.monotonic() >= deadline):
            raise ShortLinkNotFoundError(f"Short link with id '{link_id}' not found.")
        expires_at = None if deadline is None else datetime.now(UTC) + timedelta(seconds=deadline - time.monotonic())
        return ShortLinkModel(target=target, link_id=link_id, expires_at=expires_at)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def memory_dao() -> InMemoryShortLinkDAO:
    return InMemoryShortLinkDAO()
