from string_analyzer.store.base import StringStore, paginate
from string_analyzer.store.errors import (
    StoreError,
    StorageError,
    StringAlreadyExistsError,
    StringNotFoundError,
)
from string_analyzer.store.memory import MemoryStringStore
from string_analyzer.store.sql import SQLStringStore

__all__ = [
    "StringStore",
    "paginate",
    "StoreError",
    "StorageError",
    "StringAlreadyExistsError",
    "StringNotFoundError",
    "MemoryStringStore",
    "SQLStringStore",
]
