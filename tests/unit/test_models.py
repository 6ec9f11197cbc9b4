from dataclasses import FrozenInstanceError
from datetime import datetime, UTC

import pytest

from shortlinks.models import ShortLinkModel


def test_short_link_defaults_to_no_expiry():
    short_link = ShortLinkModel(target='http://example.com', link_id='3f9a0c1e')
    assert short_link.expires_at is None


def test_short_link_is_immutable():
    short_link = ShortLinkModel(target='http://example.com', link_id='3f9a0c1e', expires_at=datetime(2026, 1, 1, tzinfo=UTC))
    with pytest.raises(FrozenInstanceError):
        short_link.target = 'http://example.org'
