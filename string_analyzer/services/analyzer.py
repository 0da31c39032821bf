import hashlib
from collections import Counter
from datetime import datetime, timezone
from typing import Dict

from string_analyzer.schemas.string import StringProperties, StringResource

def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of the UTF-8 encoding of a string"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()

def is_palindrome(text: str) -> bool:
    """Check if string is palindrome, ignoring case and anything that is not a letter or digit"""
    cleaned = [ch for ch in text.lower() if ch.isalpha() or ch.isdecimal()]
    return cleaned == cleaned[::-1]

def count_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(set(text))

def count_words(text: str) -> int:
    """Count words separated by whitespace"""
    return len(text.split())

def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character"""
    return dict(Counter(text))

def compute_properties(value: str) -> Dict:
    """Analyze a string and return all computed properties"""
    return {
        "length": len(value),
        "is_palindrome": is_palindrome(value),
        "unique_characters": count_unique_characters(value),
        "word_count": count_words(value),
        "sha256_hash": compute_sha256(value),
        "character_frequency_map": get_character_frequency(value)
    }

def build_resource(value: str) -> StringResource:
    """Compute properties for a new string and stamp its creation time"""
    properties = StringProperties(**compute_properties(value))
    return StringResource(
        id=properties.sha256_hash,
        value=value,
        properties=properties,
        created_at=datetime.now(timezone.utc)
    )
