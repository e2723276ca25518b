# Log events / error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
EXPAND_SUCCESS = 'EXPAND_SUCCESS'
