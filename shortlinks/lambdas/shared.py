"""Process-wide Shortener shared by the Lambda handlers.

A warm Lambda container serves many invocations; the Shortener (and its
Redis connection pool) is created on first use and reused afterwards. It is
closed when the interpreter exits.
"""

import atexit
import logging
import functools

from shortlinks.shortener import Shortener
from shortlinks.utils.config import load_config


logger = logging.getLogger(__name__)


@functools.cache
def get_shortener() -> Shortener:
    """Return the process-wide, opened Shortener

    Raises:
        BadConfigurationError: If the environment holds an invalid configuration.
        DataStoreError: If the link store is unreachable. Nothing is cached in that case.
    """
    shortener = Shortener.from_config(load_config(sink=logging.getLogger('shortlinks')))
    atexit.register(_close, shortener)
    logger.debug('Initialized shared shortener.', extra={'storeUrl': shortener.config.store_url})
    return shortener


def _close(shortener: Shortener) -> None:
    if shortener.is_open:
        shortener.close()
