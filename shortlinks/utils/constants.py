# Short link identifiers
DEFAULT_LINK_ID_LENGTH = 8
DIGEST_LENGTH = 64  # hex characters in a SHA-256 digest

# URL normalization
DEFAULT_URL_SCHEME = 'http'

# Link store
DEFAULT_STORE_URL = 'redis://localhost:6379/0'

# Redirect path prefix, e.g. <host>/r/<link id>
REDIRECT_PATH = 'r'

# Application environment
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
LOG_LEVEL_ENV = 'LOG_LEVEL'

# Shortener configuration
STORE_URL_ENV = 'STORE_URL'
DEFAULT_TTL_SECONDS_ENV = 'DEFAULT_TTL_SECONDS'
DEFAULT_LINK_LENGTH_ENV = 'DEFAULT_LINK_LENGTH'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
