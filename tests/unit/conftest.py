"""Shared fixtures for unit tests.

Fixtures:
    - `memory_dao`: in-memory URLMappingBaseDAO enforcing both uniqueness
                    constraints under a lock, standing in for Redis in
                    service-level tests.
"""

import threading

import pytest

from shortlinks.models import URLMappingModel
from shortlinks.dao.base import URLMappingBaseDAO
from shortlinks.dao.exceptions import LongURLConflictError, ShortCodeConflictError


class InMemoryURLMappingDAO(URLMappingBaseDAO):
    """Thread-safe dictionary-backed mapping store."""

    def __init__(self):
        self.by_code = {}
        self.by_url = {}
        self.inserts = 0
        self._lock = threading.Lock()

    def find_by_long_url(self, long_url, **kwargs):
        with self._lock:
            return self.by_url.get(long_url)

    def find_by_short_code(self, shortcode, **kwargs):
        with self._lock:
            return self.by_code.get(shortcode)

    def insert(self, mapping: URLMappingModel, **kwargs):
        with self._lock:
            self.inserts += 1
            if mapping.target in self.by_url:
                raise LongURLConflictError(f"Long URL '{mapping.target}' is already mapped.")
            if mapping.shortcode in self.by_code:
                raise ShortCodeConflictError(f"Short URL with code '{mapping.shortcode}' already exists.")
            self.by_url[mapping.target] = mapping.shortcode
            self.by_code[mapping.shortcode] = mapping.target
        return self


@pytest.fixture
def memory_dao():
    return InMemoryURLMappingDAO()
