"""
Document store integration.

The services never talk to MongoDB directly.  They receive a store client
implementing the small ``DocumentStore`` interface below, which covers
exactly what the API needs: insert, find one, find many (with sorting),
update one, count, and index setup.  Two implementations exist:

* ``MongoDocumentStore`` wraps a ``pymongo`` database.  ``pymongo`` owns the
  connection pool; the client is created lazily and the first round trip
  happens at startup (``ping``) or on the first request.
* ``InMemoryDocumentStore`` keeps documents in Python lists.  It is used
  for local development when no ``MONGODB_URI`` is configured and by the
  test suite.

Documents are plain dictionaries.  The ``_id`` field is always exposed as a
string so that it can be placed in JSON responses and stored in reference
fields (``userId``, ``customerId``, ``providerId``) unchanged.
"""

from __future__ import annotations

import copy
import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo import errors as mongo_errors

from .config import Settings

logger = logging.getLogger(__name__)

USERS = "users"
PROVIDERS = "providers"
BOOKINGS = "bookings"
CONTACTS = "contacts"

# Fields that must be unique within their collection.  The Mongo store
# turns these into unique indexes; the in-memory store checks them on
# insert and update.
UNIQUE_FIELDS: Dict[str, Tuple[str, ...]] = {
    USERS: ("email",),
    PROVIDERS: ("userId",),
    BOOKINGS: ("bookingId",),
}

Sort = Sequence[Tuple[str, int]]


class StoreError(Exception):
    """The document store failed to execute an operation."""


class DuplicateKeyError(StoreError):
    """A write violated one of the unique constraints in ``UNIQUE_FIELDS``."""


class DocumentStore(Protocol):
    """Interface for document store access."""

    def insert_one(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    def find(
        self,
        collection: str,
        query: Optional[Dict[str, Any]] = None,
        sort: Optional[Sort] = None,
    ) -> List[Dict[str, Any]]:
        ...

    def update_one(
        self, collection: str, query: Dict[str, Any], changes: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        ...

    def count(self, collection: str, query: Optional[Dict[str, Any]] = None) -> int:
        ...

    def ping(self) -> None:
        ...

    def ensure_indexes(self) -> None:
        ...


def new_id() -> str:
    """Return a fresh ObjectId in its string form."""
    return str(ObjectId())


class MongoDocumentStore:
    """``DocumentStore`` backed by a MongoDB database."""

    def __init__(self, uri: str, database_name: str, client: Optional[MongoClient] = None) -> None:
        self._client = client or MongoClient(uri, serverSelectionTimeoutMS=5000, tz_aware=True)
        self._db = self._client[database_name]

    @contextmanager
    def _errors(self) -> Iterator[None]:
        try:
            yield
        except mongo_errors.DuplicateKeyError as exc:
            raise DuplicateKeyError(str(exc)) from exc
        except mongo_errors.PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    @staticmethod
    def _query(query: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Translate string ``_id`` values into ObjectIds.

        Returns ``None`` when the identifier is not a valid ObjectId, in
        which case no document can match.
        """
        query = dict(query or {})
        if isinstance(query.get("_id"), str):
            try:
                query["_id"] = ObjectId(query["_id"])
            except InvalidId:
                return None
        return query

    @staticmethod
    def _document(raw: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if raw is None:
            return None
        document = dict(raw)
        document["_id"] = str(document["_id"])
        return document

    def insert_one(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        to_insert = dict(document)
        to_insert.pop("_id", None)
        with self._errors():
            result = self._db[collection].insert_one(to_insert)
        to_insert["_id"] = str(result.inserted_id)
        return to_insert

    def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        query = self._query(query)
        if query is None:
            return None
        with self._errors():
            return self._document(self._db[collection].find_one(query))

    def find(
        self,
        collection: str,
        query: Optional[Dict[str, Any]] = None,
        sort: Optional[Sort] = None,
    ) -> List[Dict[str, Any]]:
        query = self._query(query)
        if query is None:
            return []
        with self._errors():
            cursor = self._db[collection].find(query)
            if sort:
                cursor = cursor.sort(list(sort))
            return [self._document(raw) for raw in cursor]

    def update_one(
        self, collection: str, query: Dict[str, Any], changes: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        query = self._query(query)
        if query is None:
            return None
        with self._errors():
            raw = self._db[collection].find_one_and_update(
                query, {"$set": changes}, return_document=ReturnDocument.AFTER
            )
        return self._document(raw)

    def count(self, collection: str, query: Optional[Dict[str, Any]] = None) -> int:
        query = self._query(query)
        if query is None:
            return 0
        with self._errors():
            return self._db[collection].count_documents(query)

    def ping(self) -> None:
        with self._errors():
            self._client.admin.command("ping")

    def ensure_indexes(self) -> None:
        with self._errors():
            for collection, fields in UNIQUE_FIELDS.items():
                for field in fields:
                    self._db[collection].create_index([(field, ASCENDING)], unique=True)


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    """Evaluate the subset of the Mongo query language the API uses.

    Supported: equality, membership of a scalar in an array field, and
    ``{"$regex": ..., "$options": "i"}``.
    """
    for key, expected in query.items():
        actual = document.get(key)
        if isinstance(expected, dict) and "$regex" in expected:
            flags = re.IGNORECASE if "i" in expected.get("$options", "") else 0
            if not isinstance(actual, str) or not re.search(expected["$regex"], actual, flags):
                return False
        elif isinstance(actual, list) and not isinstance(expected, list):
            if expected not in actual:
                return False
        elif actual != expected:
            return False
    return True


class InMemoryDocumentStore:
    """Simple in-memory document store for development and tests."""

    def __init__(self) -> None:
        self.collections: Dict[str, List[Dict[str, Any]]] = {}

    def _collection(self, name: str) -> List[Dict[str, Any]]:
        return self.collections.setdefault(name, [])

    def _check_unique(self, collection: str, document: Dict[str, Any]) -> None:
        for field in UNIQUE_FIELDS.get(collection, ()):
            if field not in document:
                continue
            for existing in self._collection(collection):
                if existing["_id"] != document["_id"] and existing.get(field) == document[field]:
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error collection: {collection} dup key: {{ {field}: {document[field]!r} }}"
                    )

    def insert_one(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        stored = copy.deepcopy(document)
        stored["_id"] = stored.get("_id") or new_id()
        self._check_unique(collection, stored)
        self._collection(collection).append(stored)
        return copy.deepcopy(stored)

    def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for document in self._collection(collection):
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(
        self,
        collection: str,
        query: Optional[Dict[str, Any]] = None,
        sort: Optional[Sort] = None,
    ) -> List[Dict[str, Any]]:
        documents = [d for d in self._collection(collection) if _matches(d, query or {})]
        for field, direction in reversed(list(sort or [])):
            if direction < 0:
                # Equal keys keep newest-inserted first, as a descending
                # ObjectId tie-break would in Mongo.
                documents.reverse()
            documents.sort(key=lambda d: (d.get(field) is not None, d.get(field)), reverse=direction < 0)
        return copy.deepcopy(documents)

    def update_one(
        self, collection: str, query: Dict[str, Any], changes: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        for index, document in enumerate(self._collection(collection)):
            if _matches(document, query):
                updated = {**document, **copy.deepcopy(changes)}
                self._check_unique(collection, updated)
                self._collection(collection)[index] = updated
                return copy.deepcopy(updated)
        return None

    def count(self, collection: str, query: Optional[Dict[str, Any]] = None) -> int:
        return sum(1 for d in self._collection(collection) if _matches(d, query or {}))

    def ping(self) -> None:
        return None

    def ensure_indexes(self) -> None:
        return None


def create_store(settings: Settings) -> DocumentStore:
    """Build the store client described by ``settings``."""
    if settings.use_in_memory_store:
        logger.info("Using the in-memory document store")
        return InMemoryDocumentStore()
    if not settings.mongodb_uri:
        logger.warning("MONGODB_URI is not set; using the in-memory document store")
        return InMemoryDocumentStore()
    return MongoDocumentStore(settings.mongodb_uri, settings.mongodb_db)
