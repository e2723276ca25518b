"""Shortening service: long URL <-> short code orchestration

The service is stateless. All shared state lives in the mapping store, whose
uniqueness constraints settle concurrent shorten calls; the service only
proposes candidate codes and interprets conflicts.

Classes:
    ShorteningService:
        shorten(long_url) -> shortcode
        redirect(shortcode) -> long_url
        expand(shortcode) -> long_url

Example:
    >>> from shortlinks.dao.redis import URLMappingRedisDAO
    >>> service = ShorteningService(URLMappingRedisDAO(prefix='shortlinks:dev'))
    >>> service.shorten('https://example.com/a')
    'aZ3kQ1X'
    >>> service.shorten('https://example.com/a')
    'aZ3kQ1X'
    >>> service.redirect('aZ3kQ1X')
    'https://example.com/a'
    >>> service.redirect('zzzzzzz')
    Traceback (most recent call last):
        ...
    shortlinks.exceptions.NotFoundError: Short URL with code 'zzzzzzz' not found.
"""

import logging
from collections.abc import Callable, Collection

from shortlinks.constants import Shortcode
from shortlinks.models import URLMappingModel
from shortlinks.dao.base import URLMappingBaseDAO
from shortlinks.dao.exceptions import LongURLConflictError, ShortCodeConflictError
from shortlinks.exceptions import ExhaustedRetriesError, NotFoundError
from shortlinks.utils.shortener import random_shortcode_generator
from shortlinks.utils.validators import validate_long_url, validate_shortcode


logger = logging.getLogger(__name__)


class ShorteningService:
    """Turn long URLs into short codes and resolve them back.

    Attributes:
        dao (URLMappingBaseDAO):
            Mapping store enforcing uniqueness of both columns.
        generate (Callable[[], str]):
            Zero-argument candidate shortcode generator.
        max_retries (int):
            Insert attempts before giving up with ExhaustedRetriesError.
        allowed_schemes (Collection[str] | None):
            Accepted URL schemes, None for any scheme with a host.
        max_url_length (int | None):
            Maximum accepted long URL length, None for unbounded.
    """

    def __init__(
        self,
        dao: URLMappingBaseDAO,
        generate: Callable[[], str] | None = None,
        max_retries: int = Shortcode.MAX_RETRIES,
        allowed_schemes: Collection[str] | None = None,
        max_url_length: int | None = None,
    ):
        if max_retries < 1:
            raise ValueError(f'max_retries must be a positive integer (given value: {max_retries}).')

        self.dao = dao
        self.generate = generate or random_shortcode_generator()
        self.max_retries = max_retries
        self.allowed_schemes = None if allowed_schemes is None else frozenset(s.lower() for s in allowed_schemes)
        self.max_url_length = max_url_length

    def shorten(self, long_url: str) -> str:
        """Return the shortcode of `long_url`, creating the mapping if needed

        Procedure:
        - Step 1: Validate the long URL
        - Step 2: Reuse an existing mapping if there is one
        - Step 3: Propose a candidate shortcode and insert the mapping
        - Step 4: On a shortcode collision, retry with a fresh candidate
        - Step 5: On a long URL conflict (lost a race), return the winner's code

        Args:
            long_url (str):
                The original long URL.

        Returns:
            str: the shortcode mapped to `long_url`.

        Raises:
            InvalidInputError:
                If `long_url` is empty or not a URL.
            ExhaustedRetriesError:
                If every candidate within the retry budget collided.
            DataStoreError:
                If the mapping store is unreachable.
        """
        validate_long_url(long_url, allowed_schemes=self.allowed_schemes, max_length=self.max_url_length)

        existing = self.dao.find_by_long_url(long_url)
        if existing is not None:
            logger.debug('Reusing existing mapping.', extra={'shortcode': existing})
            return existing

        for attempt in range(1, self.max_retries + 1):
            candidate = self.generate()
            try:
                self.dao.insert(URLMappingModel(target=long_url, shortcode=candidate))
            except ShortCodeConflictError:
                logger.warning(
                    'Shortcode collision, regenerating.',
                    extra={'shortcode': candidate, 'attempt': attempt, 'maxRetries': self.max_retries},
                )
                continue
            except LongURLConflictError:
                return self._resolve_lost_race(long_url)
            else:
                logger.debug('Created mapping.', extra={'shortcode': candidate, 'attempt': attempt})
                return candidate

        raise ExhaustedRetriesError(f'Unable to generate a unique shortcode after {self.max_retries} attempts.')

    def redirect(self, shortcode: str) -> str:
        """Resolve `shortcode` to its long URL for redirection

        Raises:
            InvalidInputError: If `shortcode` is empty.
            NotFoundError: If `shortcode` has no mapping.
            DataStoreError: If the mapping store is unreachable.
        """
        return self._lookup(shortcode)

    def expand(self, shortcode: str) -> str:
        """Resolve `shortcode` to its long URL for inspection

        Same contract as redirect(); the difference is presentation only.
        """
        return self._lookup(shortcode)

    def _lookup(self, shortcode: str) -> str:
        validate_shortcode(shortcode)

        long_url = self.dao.find_by_short_code(shortcode)
        if long_url is None:
            raise NotFoundError(f"Short URL with code '{shortcode}' not found.")
        return long_url

    def _resolve_lost_race(self, long_url: str) -> str:
        winner = self.dao.find_by_long_url(long_url)
        if winner is None:
            # Mappings are never deleted, so a conflicting long URL must still be mapped.
            raise RuntimeError(f"Mapping store reported '{long_url}' as mapped but has no shortcode for it.")

        logger.debug('Lost insert race, returning existing mapping.', extra={'shortcode': winner})
        return winner
