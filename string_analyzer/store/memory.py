from typing import Dict, List, Tuple

from string_analyzer.schemas.string import StringResource
from string_analyzer.services.filters import FilterSet, filter_resources
from string_analyzer.store.base import ReadWriteLock, StringStore, paginate
from string_analyzer.store.errors import StringAlreadyExistsError, StringNotFoundError


class MemoryStringStore(StringStore):
    """In-process store. Results come back in insertion order."""

    def __init__(self):
        self._lock = ReadWriteLock()
        self._strings: Dict[str, StringResource] = {}

    def create(self, resource: StringResource) -> StringResource:
        with self._lock.write():
            if resource.value in self._strings:
                raise StringAlreadyExistsError(resource.value)
            self._strings[resource.value] = resource
        return resource

    def get(self, value: str) -> StringResource:
        with self._lock.read():
            try:
                return self._strings[value]
            except KeyError:
                raise StringNotFoundError(value) from None

    def delete(self, value: str) -> None:
        with self._lock.write():
            if self._strings.pop(value, None) is None:
                raise StringNotFoundError(value)

    def exists(self, value: str) -> bool:
        with self._lock.read():
            return value in self._strings

    def count(self) -> int:
        with self._lock.read():
            return len(self._strings)

    def list(self, filters: FilterSet, limit: int, offset: int) -> Tuple[List[StringResource], int]:
        with self._lock.read():
            matching = filter_resources(self._strings.values(), filters)
        return paginate(matching, limit, offset)
