import pytest

from string_analyzer.services.analyzer import build_resource
from string_analyzer.services.filters import (
    FILTER_NAMES,
    clean_filters,
    filter_resources,
    matches,
)
from conftest import SEED_VALUES


@pytest.fixture
def resources():
    return [build_resource(v) for v in SEED_VALUES]


def values(resources):
    return {r.value for r in resources}


def test_empty_filter_set_matches_everything(resources):
    assert filter_resources(resources, {}) == resources


def test_palindrome_and_single_word(resources):
    result = filter_resources(resources, {"is_palindrome": True, "word_count": 1})
    assert values(result) == {"racecar", "madam"}


def test_not_palindrome(resources):
    result = filter_resources(resources, {"is_palindrome": False})
    assert values(result) == {"hello world", "test"}


def test_length_bounds_are_inclusive(resources):
    assert values(filter_resources(resources, {"min_length": 11})) == {"hello world", "A man, a plan, a canal: Panama"}
    assert values(filter_resources(resources, {"max_length": 5})) == {"test", "madam"}
    assert values(filter_resources(resources, {"min_length": 5, "max_length": 7})) == {"racecar", "madam"}


def test_impossible_range_yields_nothing(resources):
    assert filter_resources(resources, {"min_length": 10, "max_length": 5}) == []


def test_contains_character_is_case_sensitive(resources):
    assert values(filter_resources(resources, {"contains_character": "o"})) == {"hello world"}
    assert filter_resources(resources, {"contains_character": "O"}) == []
    assert values(filter_resources(resources, {"contains_character": "A"})) == {"A man, a plan, a canal: Panama"}


def test_contains_character_uses_frequency_map():
    props = build_resource("hello world").properties
    assert matches(props, {"contains_character": " "})
    # a substring scan would match "lo"; a frequency-map lookup does not
    assert not matches(props, {"contains_character": "lo"})


def test_unknown_filters_are_ignored():
    props = build_resource("racecar").properties
    assert matches(props, {"sort": "desc", "is_palindrome": True})


def test_none_values_impose_no_constraint():
    props = build_resource("racecar").properties
    assert matches(props, {"is_palindrome": None, "word_count": None})


def test_clean_filters_drops_unknown_and_empty():
    cleaned = clean_filters({"word_count": 1, "foo": "bar", "min_length": None, "is_palindrome": False})
    assert cleaned == {"is_palindrome": False, "word_count": 1}
    assert list(cleaned) == [name for name in FILTER_NAMES if name in cleaned]
