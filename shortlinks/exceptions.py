class ShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortener_error'


class URLParseError(ShortenerError, ValueError):
    """Raised when a string cannot be parsed as a URL."""

    error_code = 'app:url_parse_error'


class ShortenerNotOpenError(ShortenerError):
    """Raised when the shortener is used before open() or after close()."""

    error_code = 'app:shortener_not_open_error'


class ConfigurationError(ShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
