# Log events / error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
INVALID_TARGET_URL = 'INVALID_TARGET_URL'
SHORTCODE_SPACE_EXHAUSTED = 'SHORTCODE_SPACE_EXHAUSTED'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
SHORT_URL_CREATED = 'SHORT_URL_CREATED'
