"""
Storage capability consumed by the API layer.

Concurrency contract: implementations follow a single-writer /
multiple-reader discipline. ``create`` and ``delete`` are mutually
exclusive with each other and with every read; ``get``, ``exists``,
``count`` and ``list`` may run concurrently with one another.
"""
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import List, Sequence, Tuple, TypeVar

from string_analyzer.schemas.string import StringResource
from string_analyzer.services.filters import FilterSet

T = TypeVar("T")


class ReadWriteLock:
    """Many readers or one writer. Waiting writers block new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


def paginate(items: Sequence[T], limit: int, offset: int) -> Tuple[List[T], int]:
    """Slice a fully filtered sequence.

    The total is taken before slicing; an offset at or past the end yields an
    empty page with the real total.
    """
    total = len(items)
    if offset >= total:
        return [], total
    return list(items[offset:offset + limit]), total


class StringStore(ABC):
    """Where analyzed strings live, keyed by their raw value."""

    @abstractmethod
    def create(self, resource: StringResource) -> StringResource:
        """Store a new resource. Raises StringAlreadyExistsError on a duplicate value."""

    @abstractmethod
    def get(self, value: str) -> StringResource:
        """Raises StringNotFoundError if the value is not stored."""

    @abstractmethod
    def delete(self, value: str) -> None:
        """Raises StringNotFoundError if the value is not stored."""

    @abstractmethod
    def exists(self, value: str) -> bool:
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    @abstractmethod
    def list(self, filters: FilterSet, limit: int, offset: int) -> Tuple[List[StringResource], int]:
        """Return one page of matching resources and the total number of matches."""

    def close(self) -> None:
        pass
