"""Unit tests for URLMappingModel

Test coverage includes:

1. Construction
   - Ensures both fields are stored as given.

2. Immutability
   - Ensures mappings can't be reassigned after construction.

3. Equality
   - Ensures mappings compare by value.
"""

import dataclasses

import pytest

from shortlinks.models import URLMappingModel


def test_mapping_stores_fields():
    mapping = URLMappingModel(target='https://example.com/a', shortcode='aZ3kQ1X')
    assert mapping.target == 'https://example.com/a'
    assert mapping.shortcode == 'aZ3kQ1X'


def test_mapping_is_immutable():
    mapping = URLMappingModel(target='https://example.com/a', shortcode='aZ3kQ1X')
    with pytest.raises(dataclasses.FrozenInstanceError):
        mapping.shortcode = 'other00'


def test_mapping_requires_both_fields():
    with pytest.raises(TypeError):
        URLMappingModel(target='https://example.com/a')


def test_mappings_compare_by_value():
    assert URLMappingModel('https://example.com/a', 'abc') == URLMappingModel('https://example.com/a', 'abc')
    assert URLMappingModel('https://example.com/a', 'abc') != URLMappingModel('https://example.com/b', 'abc')
