"""Link id generation and URL normalization utilities

Functions:
    generate_link_id(url, length=8, now=None):
        Derive a lowercase hex identifier from a URL and a timestamp.

    normalize_url(raw):
        Validate a URL string and default its scheme to http.

Example:
    >>> from shortlinks.utils import generate_link_id, normalize_url
    >>> url = normalize_url('example.com/docs')
    >>> url
    'http://example.com/docs'
    >>> len(generate_link_id(url, length=8))
    8
"""

import re
import hashlib
from datetime import datetime, UTC
from urllib.parse import quote, urlsplit, urlunsplit

from shortlinks.exceptions import URLParseError
from shortlinks.utils.constants import DEFAULT_LINK_ID_LENGTH, DEFAULT_URL_SCHEME, DIGEST_LENGTH


CONTROL_CHARACTERS = re.compile(r'[\x00-\x1f\x7f]')

# RFC 3986 pchar + '/', plus '%' so existing escapes survive
PATH_SAFE_CHARACTERS = "/%:@!$&'()*+,;=-._~"

# Characters RFC 3986 allows neither in a reg-name nor in an IP literal
INVALID_HOST_CHARACTERS = re.compile(r'[\s"<>\\^`{|}]')


def generate_link_id(url: str, length: int = DEFAULT_LINK_ID_LENGTH, now: datetime | None = None) -> str:
    """Generate a link id from a URL and the current time.

    The URL and the timestamp are joined with '-' and hashed with SHA-256.
    The id is the first `length` characters of the 64-character hex digest,
    or the whole digest when `length` >= 64.

    Embedding the timestamp makes repeated submissions of the same URL yield
    different ids. Nothing checks the id against existing links, so two
    submissions may (rarely) share a truncated prefix.

    Args:
        url (str):
            Normalized URL.

        length (int, optional):
            Number of hex characters to keep. Defaults to 8.

        now (datetime | None, optional):
            Timestamp mixed into the hash. Defaults to the current UTC time
            (microsecond resolution).

    Returns:
        str: lowercase hex string of min(length, 64) characters.

    Raises:
        ValueError: If length is not a positive integer.

    Example:
        >>> generate_link_id('http://example.com', length=12)  # differs on every call
        '9be0a4f6c2d1'
    """
    if length <= 0:
        raise ValueError(f'Link id length must be a positive integer (given value: {length}).')

    if now is None:
        now = datetime.now(UTC)

    digest = hashlib.sha256(f'{url}-{now}'.encode('utf-8')).hexdigest()
    return digest if length >= DIGEST_LENGTH else digest[:length]


def normalize_url(raw: str) -> str:
    """Parse a URL string and default its scheme to http.

    Rules:
        - empty strings and strings with ASCII control characters are rejected;
        - a reference without a scheme must not carry ':' in its first path
          segment (e.g. 'a b and://x' is ambiguous and rejected);
        - host names with whitespace, quotes, angle brackets, backslashes or any
          of '^`{|}' are rejected;
        - a missing scheme becomes 'http' ('example.com' -> 'http://example.com',
          '//host/x' -> 'http://host/x');
        - unsafe path characters (spaces, quotes, ...) are percent-escaped.

    Args:
        raw (str): URL as submitted by the client.

    Returns:
        str: normalized URL with an explicit scheme.

    Raises:
        URLParseError: If the string is not a syntactically valid URL.

    Example:
        >>> normalize_url('example.com')
        'http://example.com'
        >>> normalize_url('https://example.com/a b')
        'https://example.com/a%20b'
    """
    if not raw:
        raise URLParseError('URL must be a non-empty string.')
    if CONTROL_CHARACTERS.search(raw):
        raise URLParseError(f'Invalid URL {raw!r}: contains control characters.')

    parts = _split(raw)
    if not parts.scheme:
        if not parts.netloc and ':' in parts.path.split('/', 1)[0]:
            raise URLParseError(f'Invalid URL {raw!r}: first path segment cannot contain a colon.')
        # '//host/path' already carries a network location
        separator = ':' if raw.startswith('//') else '://'
        parts = _split(f'{DEFAULT_URL_SCHEME}{separator}{raw}')

    if INVALID_HOST_CHARACTERS.search(parts.hostname or ''):
        raise URLParseError(f'Invalid URL {raw!r}: invalid character in host name.')

    return urlunsplit(parts._replace(path=quote(parts.path, safe=PATH_SAFE_CHARACTERS)))


def _split(raw: str):
    try:
        parts = urlsplit(raw)
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise URLParseError(f'Invalid URL {raw!r}: {e}') from e
    return parts
