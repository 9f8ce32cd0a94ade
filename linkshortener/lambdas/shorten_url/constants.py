# Event / error codes
INVALID_JSON = 'INVALID_JSON'
MISSING_LINKS = 'MISSING_LINKS'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
