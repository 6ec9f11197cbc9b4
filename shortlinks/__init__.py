"""URL shortener backed by a Redis link store.

>>> from shortlinks import Shortener, ShortenerConfig
>>> with Shortener.from_config(ShortenerConfig()) as shortener:
...     link_id = shortener.post('example.com')
...     shortener.get(link_id)
'http://example.com'
"""

from shortlinks.shortener import Shortener
from shortlinks.utils.config import ShortenerConfig, load_config


__all__ = [
    'Shortener',
    'ShortenerConfig',
    'load_config',
]
