"""Shared pytest fixtures for prismafill tests."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from prismafill.core import ir
from prismafill.core.schema_parser import parse_schema

USER_SCHEMA = """
// Accounts
enum Role {
  USER
  ADMIN
}

model User {
  id        String   @id @default(auto()) @map("_id") @db.ObjectId
  email     String
  isActive  Boolean  @default(true)
  createdAt DateTime @default(now())
}
"""


_MISSING = object()


class FakeCollection:
    """In-memory stand-in for a pymongo Collection."""

    def __init__(self, name: str, documents: list[dict[str, Any]] | None = None, exists: bool = True):
        self.name = name
        self.documents = documents if documents is not None else []
        self.exists = exists
        self.updates: list[tuple[dict[str, Any], dict[str, Any]]] = []

    def index_information(self) -> dict[str, Any]:
        if not self.exists:
            return {}
        return {"_id_": {"v": 2, "key": [("_id", 1)]}}

    def find(self, filter: dict[str, Any] | None = None):
        return iter([dict(doc) for doc in self.documents])

    def update_one(self, filter: dict[str, Any], update: dict[str, Any]) -> SimpleNamespace:
        self.updates.append((filter, update))
        for doc in self.documents:
            if doc["_id"] == filter["_id"]:
                changes = update["$set"]
                changed = any(doc.get(k, _MISSING) != v for k, v in changes.items())
                doc.update(changes)
                return SimpleNamespace(matched_count=1, modified_count=int(changed))
        return SimpleNamespace(matched_count=0, modified_count=0)


class FakeDatabase:
    def __init__(self, name: str):
        self.name = name
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name in self.collections:
            return self.collections[name]
        return FakeCollection(name, exists=False)


class FakeClient:
    def __init__(self, mongo: FakeMongo, connection_string: str, **kwargs: Any):
        self.mongo = mongo
        self.connection_string = connection_string
        self.kwargs = kwargs
        self.closed = False
        self.admin = SimpleNamespace(command=self._command)

    def _command(self, name: str) -> dict[str, Any]:
        if self.mongo.unreachable:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")
        return {"ok": 1.0}

    def __getitem__(self, name: str) -> FakeDatabase:
        self.mongo.selected.append(name)
        return self.mongo.database(name)

    def close(self) -> None:
        self.closed = True


class FakeMongo:
    """
    Client factory backed by in-memory databases.

    Pass it as ``client_factory`` to MongoBackfillService.
    """

    def __init__(self) -> None:
        self.databases: dict[str, FakeDatabase] = {}
        self.clients: list[FakeClient] = []
        self.selected: list[str] = []
        self.unreachable = False

    def database(self, name: str) -> FakeDatabase:
        return self.databases.setdefault(name, FakeDatabase(name))

    def add_collection(
        self, database: str, name: str, documents: list[dict[str, Any]]
    ) -> FakeCollection:
        collection = FakeCollection(name, documents)
        self.database(database).collections[name] = collection
        return collection

    def __call__(self, connection_string: str, **kwargs: Any) -> FakeClient:
        client = FakeClient(self, connection_string, **kwargs)
        self.clients.append(client)
        return client


@pytest.fixture
def fake_mongo() -> FakeMongo:
    """Return an empty in-memory MongoDB."""
    return FakeMongo()


@pytest.fixture
def user_schema_text() -> str:
    return USER_SCHEMA


@pytest.fixture
def user_schema() -> ir.PrismaSchema:
    """Return the parsed User/Role schema."""
    return parse_schema(USER_SCHEMA)


@pytest.fixture
def user_model(user_schema: ir.PrismaSchema) -> ir.ModelSpec:
    model = user_schema.get_model("User")
    assert model is not None
    return model
