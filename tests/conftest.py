"""Test fixtures.

Provides an in-memory FakeDatabase that mimics the slice of the motor async
API the repositories use (find/find_one/insert_one/update_one/delete_one/
count_documents), plus an app factory wired to it.
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, Iterator, List

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError
from fastapi.testclient import TestClient

from core.config import AppSettings
from main import create_app
from services.passwords import PasswordHasher
from services.tokens import TokenCodec

TEST_SECRET = "test-secret-key-for-unit-tests-only"

# ============================================================================
# Fake motor database
# ============================================================================


def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


def _sort_key(value: Any) -> tuple:
    # None sorts first, as in MongoDB
    return (value is not None, value)


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, keys: List[tuple[str, int]]) -> "FakeCursor":
        for field, direction in reversed(keys):
            self._docs.sort(key=lambda d: _sort_key(d.get(field)), reverse=direction < 0)
        return self

    def skip(self, n: int) -> "FakeCursor":
        self._docs = self._docs[n:]
        return self

    def limit(self, n: int) -> "FakeCursor":
        self._docs = self._docs[:n]
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._docs:
            yield doc


class FakeCollection:
    def __init__(self) -> None:
        self.docs: List[Dict[str, Any]] = []
        self.unique_fields: List[str] = []

    async def create_index(self, key: str, *, unique: bool = False) -> str:
        if unique and key not in self.unique_fields:
            self.unique_fields.append(key)
        return f"{key}_1"

    def _check_unique(self, candidate: Dict[str, Any], skip: Dict[str, Any] | None = None) -> None:
        for field in self.unique_fields:
            if field not in candidate:
                continue
            for doc in self.docs:
                if doc is not skip and doc.get(field) == candidate[field]:
                    raise DuplicateKeyError(f"E11000 duplicate key error dup key: {{ {field}: ... }}", 11000)

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query)])

    async def find_one(self, query: Dict[str, Any]) -> Dict[str, Any] | None:
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def count_documents(self, query: Dict[str, Any]) -> int:
        return sum(1 for d in self.docs if _matches(d, query))

    async def insert_one(self, doc: Dict[str, Any]) -> SimpleNamespace:
        stored = copy.deepcopy(doc)
        stored.setdefault("_id", ObjectId())
        self._check_unique(stored)
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any]) -> SimpleNamespace:
        for doc in self.docs:
            if _matches(doc, query):
                changes = copy.deepcopy(update.get("$set", {}))
                self._check_unique(changes, skip=doc)
                doc.update(changes)
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query: Dict[str, Any]) -> SimpleNamespace:
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class FakeClock:
    """Mutable clock for driving token expiry."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def codec(clock: FakeClock) -> TokenCodec:
    return TokenCodec(TEST_SECRET, clock=clock)


@pytest.fixture
def hasher() -> PasswordHasher:
    # Minimum cost keeps the suite fast; production uses 12
    return PasswordHasher(rounds=4)


@pytest.fixture
def settings() -> AppSettings:
    # Alias names so init kwargs win over any ambient environment variables
    return AppSettings(
        JWT_SECRET_KEY=TEST_SECRET,
        ENVIRONMENT="test",
        BCRYPT_ROUNDS=4,
        MONGO_URI="mongodb://unused:27017",
        MONGO_DB_NAME="educreate_test",
    )


@pytest.fixture
def make_client(settings: AppSettings, fake_db: FakeDatabase, codec: TokenCodec) -> Iterator[Callable[..., TestClient]]:
    clients: List[TestClient] = []

    def _make(**overrides: Any) -> TestClient:
        app = create_app(settings, database=fake_db, token_codec=codec, **overrides)
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def client(make_client: Callable[..., TestClient]) -> TestClient:
    return make_client()


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., Dict[str, Any]]:
    """Register through the API and return the response body."""

    def _register(email: str = "jane@example.com", password: str = "s3cret-pass", name: str = "Jane") -> Dict[str, Any]:
        res = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert res.status_code == 201, res.text
        return res.json()

    return _register
