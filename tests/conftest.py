"""
Pytest configuration and shared fixtures for fast-rules tests.
"""

from types import SimpleNamespace
from typing import Any, Optional

import pytest
from bson import ObjectId
from faker import Faker

from fast_rules.database.mongo import set_db
from fast_rules.utils.datetime_utils import now

fake = Faker()


def _matches(document: dict[str, Any], query: Optional[dict[str, Any]]) -> bool:
    for key, condition in (query or {}).items():
        value = document.get(key)
        if isinstance(condition, dict) and condition and all(op.startswith("$") for op in condition):
            for op, arg in condition.items():
                if op == "$ne" and value == arg:
                    return False
                if op == "$eq" and value != arg:
                    return False
                if op == "$in" and value not in arg:
                    return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    def __aiter__(self):
        self._iter = iter(self._documents)
        return self

    async def __anext__(self) -> dict[str, Any]:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    """In-memory stand-in for the subset of AsyncIOMotorCollection the models use."""

    def __init__(self) -> None:
        self.documents: list[dict[str, Any]] = []
        self.count_calls = 0
        self.fail_with: Optional[Exception] = None

    async def insert_one(self, data: dict[str, Any]):
        document = dict(data)
        document.setdefault("_id", ObjectId())
        self.documents.append(document)
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one(self, query: Optional[dict[str, Any]] = None, **kwargs) -> Optional[dict[str, Any]]:
        for document in self.documents:
            if _matches(document, query):
                return dict(document)
        return None

    def find(self, query: Optional[dict[str, Any]] = None, **kwargs) -> FakeCursor:
        return FakeCursor([dict(d) for d in self.documents if _matches(d, query)])

    async def update_one(self, query: dict[str, Any], payload: dict[str, Any]):
        for document in self.documents:
            if _matches(document, query):
                document.update(payload.get("$set", {}))
                for key in payload.get("$currentDate", {}):
                    document[key] = now()
                return SimpleNamespace(matched_count=1)
        return SimpleNamespace(matched_count=0)

    async def count_documents(self, query: Optional[dict[str, Any]] = None, **kwargs) -> int:
        self.count_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        return sum(1 for d in self.documents if _matches(d, query))

    async def delete_one(self, query: dict[str, Any]):
        for index, document in enumerate(self.documents):
            if _matches(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase(dict):
    def __missing__(self, name: str) -> FakeCollection:
        collection = FakeCollection()
        self[name] = collection
        return collection


@pytest.fixture
def fake_db():
    """Install an in-memory database for the duration of a test."""
    database = FakeDatabase()
    set_db(database)
    yield database
    set_db(None)


@pytest.fixture
def product_name():
    """A name made of letters only, so it passes alphanumeric format rules."""
    return fake.pystr(min_chars=6, max_chars=12)

