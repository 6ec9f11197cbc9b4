# Event codes
MISSING_URL = 'MISSING_URL'
INVALID_FORM_BODY = 'INVALID_FORM_BODY'
INVALID_URL = 'INVALID_URL'
DATA_STORE_ERROR = 'DATA_STORE_ERROR'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
