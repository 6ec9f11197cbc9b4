"""Utility functions for application configuration management.

The Shortener core receives a single immutable `ShortenerConfig`. Lambda
handlers build it from environment variables with `load_config()`:

    STORE_URL             Redis connection URL (default 'redis://localhost:6379/0')
    DEFAULT_TTL_SECONDS   lifetime of new links in seconds (default: never expire)
    DEFAULT_LINK_LENGTH   number of hex characters per link id (default 8)
    APP_NAME / APP_ENV    key namespace '<app name>:<app env>' (no namespace if APP_NAME is unset)

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(sink=None) -> ShortenerConfig
        Build the Shortener configuration from environment variables.

Example:
    >>> from shortlinks.utils.config import load_config
    >>> os.environ['DEFAULT_TTL_SECONDS'] = '3600'
    >>> config = load_config()
    >>> config.default_ttl
    datetime.timedelta(seconds=3600)
"""

import os
import math
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TypeVar

from shortlinks.exceptions import BadConfigurationError
from shortlinks.utils.logging import NullLogger, ShortenerLogger
from shortlinks.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    STORE_URL_ENV,
    DEFAULT_TTL_SECONDS_ENV,
    DEFAULT_LINK_LENGTH_ENV,
    DEFAULT_STORE_URL,
    DEFAULT_LINK_ID_LENGTH,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShortenerConfig:
    """Configuration of a Shortener instance.

    Attributes:
        store_url (str):
            Location of the link store (Redis connection URL).
        default_ttl (timedelta | None):
            Lifetime applied to links created without a per-call TTL.
            None (or a zero duration) means links never expire.
        default_length (int):
            Number of hex characters in generated link ids.
        logger (ShortenerLogger):
            Sink for the core's log lines. Discards everything by default.
        key_prefix (str | None):
            Optional namespace for store keys, e.g. 'shortlinks:prod'.

    Raises:
        BadConfigurationError:
            If default_length is not a positive integer, default_ttl is negative
            or store_url is empty.
    """

    store_url: str = DEFAULT_STORE_URL
    default_ttl: timedelta | None = None
    default_length: int = DEFAULT_LINK_ID_LENGTH
    logger: ShortenerLogger = field(default_factory=NullLogger, repr=False)
    key_prefix: str | None = None

    def __post_init__(self):
        if not self.store_url:
            raise BadConfigurationError('Store URL must be a non-empty string.')
        if isinstance(self.default_length, bool) or not isinstance(self.default_length, int) or self.default_length <= 0:
            raise BadConfigurationError(f'Default link length must be a positive integer (given value: {self.default_length!r}).')
        if self.default_ttl is not None and self.default_ttl < timedelta(0):
            raise BadConfigurationError(f'Default TTL must not be negative (given value: {self.default_ttl}).')
        if not isinstance(self.logger, ShortenerLogger):
            raise BadConfigurationError(f'Logger must provide error/warning/info/debug methods (given type: {type(self.logger)}).')


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shortlinks'
        >>> app_name()
        'shortlinks'
    """
    return os.environ.get(APP_NAME_ENV)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shortlinks'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shortlinks:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


T = TypeVar('T', int, float)


def _number_from_environment(name: str, cast: type[T]) -> T | None:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    try:
        number = cast(value)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be a number (given value: {value!r}).") from e
    if not math.isfinite(number):
        raise BadConfigurationError(f"Environment variable '{name}' must be a finite number (given value: {value!r}).")
    return number


def load_config(sink: ShortenerLogger | None = None) -> ShortenerConfig:
    """Build the Shortener configuration from environment variables

    Args:
        sink (ShortenerLogger | None):
            Logging sink handed to the Shortener core. Defaults to NullLogger.

    Returns:
        ShortenerConfig: validated configuration.

    Raises:
        BadConfigurationError:
            If a numeric variable is malformed or a value is out of range.

    Example:
        >>> config = load_config(sink=logging.getLogger('shortlinks'))
        >>> config.store_url
        'redis://localhost:6379/0'
    """
    ttl_seconds = _number_from_environment(DEFAULT_TTL_SECONDS_ENV, float)
    length = _number_from_environment(DEFAULT_LINK_LENGTH_ENV, int)

    try:
        default_ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None
    except OverflowError as e:
        raise BadConfigurationError(f"Environment variable '{DEFAULT_TTL_SECONDS_ENV}' is out of range (given value: {ttl_seconds}).") from e

    config = ShortenerConfig(
        store_url=os.environ.get(STORE_URL_ENV) or DEFAULT_STORE_URL,
        default_ttl=default_ttl,
        default_length=DEFAULT_LINK_ID_LENGTH if length is None else length,
        logger=sink if sink is not None else NullLogger(),
        key_prefix=app_prefix(),
    )
    logger.debug('Loaded shortener configuration.', extra={'storeUrl': config.store_url, 'keyPrefix': config.key_prefix})
    return config
