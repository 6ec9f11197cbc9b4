from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a short link mapping.

    Attributes:
        target (str):
            The normalized URL that the link id redirects to.
        link_id (str):
            Lowercase hex identifier of the link (prefix of a SHA-256 digest).
        expires_at (Optional[datetime]):
            Moment after which the store drops the entry.
            None if the link never expires.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> link = ShortLinkModel(
        ...     target="http://example.com/article/123",
        ...     link_id="3f9a0c1e",
        ...     expires_at=datetime.now(UTC) + timedelta(days=7),
        ... )
        >>> link.target
        'http://example.com/article/123'
        >>> link.link_id
        '3f9a0c1e'
    """
    target: str
    link_id: str
    expires_at: Optional[datetime] = None
