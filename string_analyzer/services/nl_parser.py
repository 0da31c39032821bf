import re
from typing import Callable, Dict, List, Optional, Tuple

from string_analyzer.services.filters import FilterSet

_INTEGER = re.compile(r"[+-]?[0-9]+")
_COUNT = re.compile(r"[0-9]+")


def _to_int(token: str, pattern=_INTEGER) -> Optional[int]:
    if pattern.fullmatch(token):
        return int(token)
    return None


def palindrome_rule(text: str, tokens: List[str]) -> FilterSet:
    """'palindrome', 'palindromes', 'palindromic' -> is_palindrome"""
    if "palindrom" in text:
        return {"is_palindrome": True}
    return {}


def word_count_rule(text: str, tokens: List[str]) -> FilterSet:
    """'<N> word(s)' or 'single word' -> word_count. The earliest phrase wins."""
    for i, token in enumerate(tokens):
        if token not in ("word", "words") or i == 0:
            continue
        previous = tokens[i - 1]
        count = _to_int(previous, _COUNT)
        if count is not None:
            return {"word_count": count}
        if previous == "single":
            return {"word_count": 1}
    return {}


def length_rule(text: str, tokens: List[str]) -> FilterSet:
    """
    'longer than N' -> min_length = N + 1
    'shorter than N' -> max_length = N - 1

    Every occurrence is applied in order, so a repeated comparison
    overwrites the earlier one.
    """
    filters: FilterSet = {}
    for i in range(1, len(tokens) - 1):
        if tokens[i] != "than":
            continue
        n = _to_int(tokens[i + 1])
        if n is None:
            continue
        if tokens[i - 1] == "longer":
            filters["min_length"] = n + 1
        elif tokens[i - 1] == "shorter":
            filters["max_length"] = n - 1
    return filters


def contains_character_rule(text: str, tokens: List[str]) -> FilterSet:
    """
    'containing the letter z' / 'contains z' -> contains_character

    After the keyword, 'letter <c>' names the character; failing that the
    query's last word is used when it is a single character.
    """
    for keyword in ("containing", "contains"):
        index = text.find(keyword)
        if index != -1:
            break
    else:
        return {}

    remainder = text[index + len(keyword):]
    letter_index = remainder.find("letter ")
    if letter_index != -1:
        after = remainder[letter_index + len("letter "):].strip()
        if after:
            return {"contains_character": after[0]}

    if tokens and len(tokens[-1]) == 1:
        return {"contains_character": tokens[-1]}
    return {}


# Applied in this order; a later rule overwrites a key set by an earlier one.
RULES: Tuple[Callable[[str, List[str]], FilterSet], ...] = (
    palindrome_rule,
    word_count_rule,
    length_rule,
    contains_character_rule,
)


def parse_natural_language_query(query: str) -> FilterSet:
    """
    Parse natural language query into filter parameters
    Examples:
    - "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
    - "strings longer than 10 characters" -> {min_length: 11}
    - "strings containing the letter z" -> {contains_character: "z"}

    Unrecognised phrasing simply produces fewer filters; an empty result
    means "no constraint".
    """
    text = query.lower()
    tokens = text.split()

    filters: Dict = {}
    for rule in RULES:
        filters.update(rule(text, tokens))
    return filters
