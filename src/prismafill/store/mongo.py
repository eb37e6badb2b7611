"""
MongoDB client lifecycle.

A client is opened per backfill call and always closed when the call ends,
whether it returns normally or raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from prismafill.core.errors import StoreConnectionError

logger = logging.getLogger(__name__)

DEFAULT_SERVER_SELECTION_TIMEOUT_MS = 5000

ClientFactory = Callable[..., Any]


@contextmanager
def open_database(
    connection_string: str,
    database_name: str,
    client_factory: ClientFactory = MongoClient,
    server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
) -> Iterator[Database]:
    """
    Connect, ping the server and yield the selected database.

    Raises:
        StoreConnectionError: If the client cannot be created or the server
            does not answer the ping.
    """
    try:
        client = client_factory(
            connection_string, serverSelectionTimeoutMS=server_selection_timeout_ms
        )
    except PyMongoError as e:
        raise StoreConnectionError(f"Invalid MongoDB connection string: {e}") from e

    try:
        try:
            client.admin.command("ping")
        except PyMongoError as e:
            raise StoreConnectionError(f"Cannot connect to MongoDB: {e}") from e
        logger.debug("Connected to MongoDB, database %s", database_name)
        yield client[database_name]
    finally:
        client.close()
        logger.debug("Closed MongoDB connection")
