from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.redis import ShortLinkRedisDAO


__all__ = [
    'ShortLinkBaseDAO',
    'ShortLinkRedisDAO',
]
