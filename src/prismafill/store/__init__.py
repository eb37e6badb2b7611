"""MongoDB access and default-value backfills."""

from .backfill import (
    BackfillResult,
    BackfillStatus,
    MongoBackfillService,
    collection_candidates,
    missing_defaults,
    resolve_collection,
)
from .mongo import open_database

__all__ = [
    "BackfillResult",
    "BackfillStatus",
    "MongoBackfillService",
    "collection_candidates",
    "missing_defaults",
    "resolve_collection",
    "open_database",
]
