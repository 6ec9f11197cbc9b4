# Event codes
MISSING_LINK_ID = 'MISSING_LINK_ID'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
DATA_STORE_ERROR = 'DATA_STORE_ERROR'
INVALID_STORED_URL = 'INVALID_STORED_URL'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
