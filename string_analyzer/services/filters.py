"""
Filter predicates shared by every store backend.

A filter set is a plain mapping from filter name to value, e.g.
``{"is_palindrome": True, "word_count": 1}``. A resource matches when it
satisfies every recognised filter in the mapping; names outside
``FILTER_NAMES`` are ignored.
"""
from typing import Any, Callable, Dict, Iterable, List

from string_analyzer.schemas.string import StringProperties, StringResource

FilterSet = Dict[str, Any]


def _palindrome(props: StringProperties, expected: bool) -> bool:
    return props.is_palindrome == expected

def _min_length(props: StringProperties, minimum: int) -> bool:
    return props.length >= minimum

def _max_length(props: StringProperties, maximum: int) -> bool:
    return props.length <= maximum

def _word_count(props: StringProperties, count: int) -> bool:
    return props.word_count == count

def _contains_character(props: StringProperties, char: str) -> bool:
    # exact code point lookup, so "O" does not match "o"
    return char in props.character_frequency_map


PREDICATES: Dict[str, Callable[[StringProperties, Any], bool]] = {
    "is_palindrome": _palindrome,
    "min_length": _min_length,
    "max_length": _max_length,
    "word_count": _word_count,
    "contains_character": _contains_character,
}

FILTER_NAMES = tuple(PREDICATES)


def clean_filters(filters: FilterSet) -> FilterSet:
    """Keep only recognised filters that carry a value, in canonical order"""
    return {
        name: filters[name]
        for name in FILTER_NAMES
        if filters.get(name) is not None
    }


def matches(properties: StringProperties, filters: FilterSet) -> bool:
    """Return True if the properties satisfy every filter in the set"""
    for name, value in filters.items():
        predicate = PREDICATES.get(name)
        if predicate is None or value is None:
            continue
        if not predicate(properties, value):
            return False
    return True


def filter_resources(resources: Iterable[StringResource], filters: FilterSet) -> List[StringResource]:
    """Return the resources matching the filters, preserving their order"""
    return [r for r in resources if matches(r.properties, filters)]
