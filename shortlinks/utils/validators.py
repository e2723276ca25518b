"""Input validation for long URLs and short codes.

Every validator raises InvalidInputError with a human readable reason and
returns the validated value otherwise.

Example:
    >>> validate_long_url('https://example.com/a')
    'https://example.com/a'
    >>> validate_long_url('example.com/a')
    InvalidInputError: Invalid URL 'example.com/a': missing scheme
    >>> validate_long_url('ftp://example.com/a', allowed_schemes={'http', 'https'})
    InvalidInputError: Invalid URL 'ftp://example.com/a': scheme 'ftp' is not allowed
"""

import urllib.parse
from collections.abc import Collection

from shortlinks.exceptions import InvalidInputError


def validate_long_url(url: object, allowed_schemes: Collection[str] | None = None, max_length: int | None = None) -> str:
    """Ensure `url` is a non-empty, syntactically valid absolute URL.

    A valid URL carries at least a scheme and a host. Stricter policy is
    opt-in via `allowed_schemes` and `max_length`.

    Args:
        url (object):
            Candidate long URL.
        allowed_schemes (Collection[str] | None):
            Lowercase schemes to accept. None accepts any scheme.
        max_length (int | None):
            Maximum accepted URL length. None disables the check.

    Returns:
        str: the URL, unchanged.

    Raises:
        InvalidInputError: if the URL violates any rule.
    """
    if not isinstance(url, str) or not url:
        raise InvalidInputError('URL must be a non-empty string.')
    if any(character.isspace() for character in url):
        raise InvalidInputError(f"Invalid URL '{url}': contains whitespace")
    if max_length is not None and len(url) > max_length:
        raise InvalidInputError(f'Invalid URL: longer than {max_length} characters')

    try:
        components = urllib.parse.urlsplit(url)
        hostname = components.hostname
    except ValueError as e:
        raise InvalidInputError(f"Invalid URL '{url}': {e}") from e

    if not components.scheme:
        raise InvalidInputError(f"Invalid URL '{url}': missing scheme")
    if not hostname:
        raise InvalidInputError(f"Invalid URL '{url}': missing host")
    if allowed_schemes is not None and components.scheme.lower() not in allowed_schemes:
        raise InvalidInputError(f"Invalid URL '{url}': scheme '{components.scheme}' is not allowed")

    return url


def validate_shortcode(shortcode: object) -> str:
    """Ensure `shortcode` is a non-empty string.

    Unknown but well-formed codes are not rejected here; they surface as
    NotFoundError from the lookup instead.
    """
    if not isinstance(shortcode, str) or not shortcode:
        raise InvalidInputError('Short code must be a non-empty string.')
    return shortcode
