import pytest
from fastapi.testclient import TestClient

from string_analyzer.main import create_app
from string_analyzer.services.analyzer import build_resource
from string_analyzer.store import MemoryStringStore, SQLStringStore

SEED_VALUES = [
    "racecar",                         # palindrome, 1 word, length 7
    "hello world",                     # 2 words, length 11, has 'o'
    "test",                            # 1 word, length 4
    "A man, a plan, a canal: Panama",  # palindrome, 7 words, length 30
    "madam",                           # palindrome, 1 word, length 5
]


def seed(store, *values):
    for value in values:
        store.create(build_resource(value))
    return store


@pytest.fixture
def memory_store():
    return MemoryStringStore()


@pytest.fixture
def sql_store(tmp_path):
    store = SQLStringStore(f"sqlite:///{tmp_path / 'strings.db'}")
    yield store
    store.close()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Each backend in turn."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def seeded_store(store):
    return seed(store, *SEED_VALUES)


@pytest.fixture
def client(memory_store):
    return TestClient(create_app(memory_store))


@pytest.fixture
def seeded_client(memory_store):
    seed(memory_store, *SEED_VALUES)
    return TestClient(create_app(memory_store))
