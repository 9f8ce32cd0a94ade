# Event / error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_LINK_NOT_FOUND = 'SHORT_LINK_NOT_FOUND'
SHORT_LINK_EXPIRED = 'SHORT_LINK_EXPIRED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
