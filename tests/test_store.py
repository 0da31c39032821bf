import threading

import pytest

from string_analyzer.services.analyzer import build_resource
from string_analyzer.store import (
    StringAlreadyExistsError,
    StringNotFoundError,
    paginate,
)
from string_analyzer.store.base import ReadWriteLock
from conftest import SEED_VALUES, seed


def test_paginate_counts_before_slicing():
    items = list(range(5))
    assert paginate(items, 2, 0) == ([0, 1], 5)
    assert paginate(items, 2, 4) == ([4], 5)
    assert paginate(items, 10, 1) == ([1, 2, 3, 4], 5)


@pytest.mark.parametrize("offset", [5, 6, 100])
def test_paginate_offset_past_end(offset):
    assert paginate(list(range(5)), 2, offset) == ([], 5)


def test_create_and_get(store):
    resource = build_resource("hello world")
    store.create(resource)

    fetched = store.get("hello world")
    assert fetched.id == resource.id
    assert fetched.properties == resource.properties
    assert fetched.created_at == resource.created_at
    assert store.exists("hello world")
    assert store.count() == 1


def test_create_duplicate_raises(store):
    store.create(build_resource("hello"))
    with pytest.raises(StringAlreadyExistsError):
        store.create(build_resource("hello"))
    assert store.count() == 1


def test_get_missing_raises(store):
    with pytest.raises(StringNotFoundError):
        store.get("missing")
    assert not store.exists("missing")


def test_delete(store):
    seed(store, "to be deleted")
    store.delete("to be deleted")
    assert not store.exists("to be deleted")
    with pytest.raises(StringNotFoundError):
        store.delete("to be deleted")


def test_values_are_case_sensitive_keys(store):
    seed(store, "Hello", "hello")
    assert store.get("Hello").value == "Hello"
    assert store.get("hello").value == "hello"


def test_list_without_filters_returns_everything(seeded_store):
    data, total = seeded_store.list({}, 100, 0)
    assert total == len(SEED_VALUES)
    assert {r.value for r in data} == set(SEED_VALUES)


def test_list_combined_filters(seeded_store):
    data, total = seeded_store.list({"is_palindrome": True, "word_count": 1}, 25, 0)
    assert total == 2
    assert {r.value for r in data} == {"racecar", "madam"}


def test_list_contains_character(seeded_store):
    data, total = seeded_store.list({"contains_character": "o"}, 25, 0)
    assert total == 1
    assert data[0].value == "hello world"

    data, total = seeded_store.list({"contains_character": "O"}, 25, 0)
    assert (data, total) == ([], 0)


def test_list_length_filters(seeded_store):
    _, total = seeded_store.list({"min_length": 10}, 25, 0)
    assert total == 2
    _, total = seeded_store.list({"max_length": 10}, 25, 0)
    assert total == 3
    _, total = seeded_store.list({"min_length": 10, "max_length": 5}, 25, 0)
    assert total == 0


def test_list_pagination_is_stable(seeded_store):
    pages = []
    for offset in range(0, 5, 2):
        data, total = seeded_store.list({}, 2, offset)
        assert total == 5
        assert len(data) == min(2, total - offset)
        pages.extend(r.value for r in data)

    assert sorted(pages) == sorted(SEED_VALUES)
    assert pages == [r.value for r in seeded_store.list({}, 100, 0)[0]]


def test_list_offset_past_end(seeded_store):
    assert seeded_store.list({}, 10, 5) == ([], 5)
    assert seeded_store.list({"is_palindrome": True}, 10, 50) == ([], 3)


def test_concurrent_creates_of_same_value(store):
    errors = []
    created = []

    def worker():
        try:
            created.append(store.create(build_resource("race")))
        except StringAlreadyExistsError as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(created) == 1
    assert len(errors) == 7
    assert store.count() == 1


def test_concurrent_creates_and_lists(store):
    def writer(n):
        for i in range(5):
            store.create(build_resource(f"value {n} {i}"))

    def reader():
        for _ in range(5):
            data, total = store.list({"word_count": 3}, 100, 0)
            assert len(data) == total

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    threads += [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.count() == 20


def test_write_lock_waits_for_readers():
    lock = ReadWriteLock()
    order = []
    reading = threading.Event()
    release = threading.Event()

    def reader():
        with lock.read():
            reading.set()
            release.wait(timeout=5)
            order.append("read")

    def writer():
        with lock.write():
            order.append("write")

    r = threading.Thread(target=reader)
    r.start()
    reading.wait(timeout=5)
    w = threading.Thread(target=writer)
    w.start()
    release.set()
    r.join()
    w.join()

    assert order == ["read", "write"]
