"""
Backfill default values into existing MongoDB documents.

For one model and its generated JSON Schema, the engine:

1. collects the properties that declare a default (nothing to do if none),
2. connects and resolves the model's collection by trying likely names,
3. scans every document and ``$set``s the defaulted fields that are missing
   or null, leaving every other value alone (``0``, ``False`` and ``""``
   included).

Running it twice is a no-op the second time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from pymongo import MongoClient, UpdateOne
from pymongo.errors import OperationFailure

from prismafill.core.strings import kebab_case, pluralize

from .mongo import ClientFactory, open_database

if TYPE_CHECKING:
    from pymongo.collection import Collection
    from pymongo.database import Database

    from prismafill.core.ir import JsonSchema, ModelSpec

logger = logging.getLogger(__name__)


class BackfillStatus(str, Enum):
    """Outcome of backfilling one model."""

    SKIPPED = "skipped"  # No defaults declared
    NOT_FOUND = "not_found"  # No candidate collection exists
    COMPLETED = "completed"


@dataclass
class BackfillResult:
    """What a backfill call targeted and changed."""

    model: str
    fields: dict[str, Any] = field(default_factory=dict)
    status: BackfillStatus = BackfillStatus.COMPLETED
    collection: str | None = None
    scanned: int = 0
    modified: int = 0


def collection_candidates(model: ModelSpec) -> list[str]:
    """
    Collection names to try for a model, most likely first.

    For each base name (the ``@@map`` override when present, then the model
    name): as-is, lowercased, plural, plural lowercased, kebab-case and
    plural kebab-case. Duplicates are removed, order is kept.

    Example:
        UserProfile -> UserProfile, userprofile, UserProfiles, userprofiles,
        user-profile, user-profiles
    """
    bases = [model.map_name, model.name] if model.map_name else [model.name]
    attempts: list[str] = []
    for base in bases:
        attempts.extend(
            [
                base,
                base.lower(),
                pluralize(base),
                pluralize(base.lower()),
                kebab_case(base),
                pluralize(kebab_case(base)),
            ]
        )
    return list(dict.fromkeys(attempts))


def resolve_collection(db: Database, model: ModelSpec) -> Collection | None:
    """
    Return the first candidate collection that exists.

    A collection exists when its index metadata can be read and lists at
    least the ``_id_`` index.
    """
    for name in collection_candidates(model):
        collection = db[name]
        try:
            indexes = collection.index_information()
        except OperationFailure as e:
            logger.debug("Probe of collection %s failed: %s", name, e)
            continue
        if indexes:
            logger.debug("Resolved model %s to collection %s", model.name, name)
            return collection
    return None


def missing_defaults(document: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    """Defaults for the fields that are absent or null in ``document``."""
    return {name: value for name, value in defaults.items() if document.get(name) is None}


class MongoBackfillService:
    """
    Applies JSON Schema defaults to the documents of a MongoDB database.

    Each :meth:`backfill_collection` call opens its own client and closes it
    before returning or raising.
    """

    def __init__(
        self,
        connection_string: str,
        database_name: str,
        batch_size: int | None = None,
        client_factory: ClientFactory = MongoClient,
    ):
        """
        Args:
            connection_string: MongoDB URI
            database_name: Database holding the model collections
            batch_size: Send updates as unordered bulk writes of this size
                instead of one ``update_one`` per document
            client_factory: Callable creating the client (``MongoClient``)
        """
        if batch_size is not None and batch_size < 1:
            raise ValueError("batch_size must be a positive integer")
        self.connection_string = connection_string
        self.database_name = database_name
        self.batch_size = batch_size
        self.client_factory = client_factory

    def backfill_collection(self, model: ModelSpec, json_schema: JsonSchema) -> BackfillResult:
        """Fill missing defaulted fields in the collection of ``model``."""
        defaults = json_schema.fields_with_defaults()
        result = BackfillResult(model=model.name, fields=defaults)

        if not defaults:
            logger.info("Skipping %s - no default values found", model.name)
            result.status = BackfillStatus.SKIPPED
            return result

        logger.info("Backfilling %s fields %s", model.name, defaults)

        with open_database(
            self.connection_string, self.database_name, client_factory=self.client_factory
        ) as db:
            collection = resolve_collection(db, model)
            if collection is None:
                logger.info("Collection not found for model %s", model.name)
                result.status = BackfillStatus.NOT_FOUND
                return result

            result.collection = collection.name
            result.scanned, result.modified = self._fill(collection, defaults)

        logger.info(
            "Backfill completed for %s (%s): scanned %d, updated %d documents",
            model.name,
            result.collection,
            result.scanned,
            result.modified,
        )
        return result

    def _fill(self, collection: Collection, defaults: dict[str, Any]) -> tuple[int, int]:
        scanned = 0
        modified = 0
        pending: list[UpdateOne] = []

        for document in collection.find({}):
            scanned += 1
            update = missing_defaults(document, defaults)
            if not update:
                continue

            if self.batch_size is None:
                outcome = collection.update_one({"_id": document["_id"]}, {"$set": update})
                modified += outcome.modified_count
                continue

            pending.append(UpdateOne({"_id": document["_id"]}, {"$set": update}))
            if len(pending) >= self.batch_size:
                modified += self._flush(collection, pending)
                pending = []

        if pending:
            modified += self._flush(collection, pending)
        return scanned, modified

    def _flush(self, collection: Collection, operations: list[UpdateOne]) -> int:
        outcome = collection.bulk_write(operations, ordered=False)
        logger.debug("Bulk update of %d documents in %s", len(operations), collection.name)
        return outcome.modified_count
