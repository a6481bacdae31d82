"""Generic CRUD over the catalog's collections.

One engine serves all seven entity kinds: the kind selects the collection and
the registry supplies its field rules. Every call performs its own load and,
for mutations, its own save.
"""

from __future__ import annotations

import logging
import time
import uuid

from uicatalog.catalog.registry import COLLECTION_KEYS, EntityKind, get_kind
from uicatalog.errors import NotFoundError, ValidationError
from uicatalog.storage.document import Document, DocumentStore

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Nanosecond timestamp (hex) plus a random suffix."""
    return f"{time.time_ns():x}{uuid.uuid4().hex[:9]}"


class CatalogEngine:
    """List, get, create, update and delete records of any entity kind."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def list_records(self, kind: str, summary: bool = True) -> list[dict]:
        """All records of `kind` in insertion order, projected when `summary`."""
        entity = get_kind(kind)
        records = self._collection(self._store.load(), entity)
        if not summary:
            return records
        return [entity.project(record) for record in records]

    def get(self, kind: str, record_id: str) -> dict:
        entity = get_kind(kind)
        records = self._collection(self._store.load(), entity)
        return records[self._index_of(entity, records, record_id)]

    def create(self, kind: str, payload: dict) -> dict:
        entity = get_kind(kind)
        fields = {k: v for k, v in payload.items() if k != "id"}
        self._check(entity, fields)

        document = self._store.load()
        records = self._collection(document, entity)
        existing = {r.get("id") for r in records}
        record_id = generate_id()
        while record_id in existing:
            record_id = generate_id()

        record = {"id": record_id, **fields}
        records.append(record)
        self._store.save(document)
        logger.info(f"Created {entity.key} record {record_id}")
        return record

    def update(self, kind: str, record_id: str, payload: dict) -> dict:
        """Merge `payload` onto an existing record; `id` is never overwritten."""
        entity = get_kind(kind)
        document = self._store.load()
        records = self._collection(document, entity)
        index = self._index_of(entity, records, record_id)

        merged = {**records[index], **{k: v for k, v in payload.items() if k != "id"}}
        merged["id"] = records[index]["id"]
        self._check(entity, merged)

        records[index] = merged
        self._store.save(document)
        logger.info(f"Updated {entity.key} record {record_id}")
        return merged

    def delete(self, kind: str, record_id: str) -> None:
        entity = get_kind(kind)
        document = self._store.load()
        records = self._collection(document, entity)
        del records[self._index_of(entity, records, record_id)]
        self._store.save(document)
        logger.info(f"Deleted {entity.key} record {record_id}")

    def stats(self) -> dict[str, int]:
        """Record count per collection."""
        document = self._store.load()
        return {key: len(self._collection(document, get_kind(key))) for key in COLLECTION_KEYS}

    def _collection(self, document: Document, entity: EntityKind) -> list[dict]:
        """The live list for `entity` inside `document`.

        Documents written by older releases may keep a collection under a
        legacy key; it is adopted under the current key (and the legacy key
        dropped) so the next save writes the current layout.
        """
        if entity.key not in document:
            for alias in entity.aliases:
                if alias in document:
                    logger.info(f"Reading {entity.key} from legacy key '{alias}'")
                    document[entity.key] = document.pop(alias)
                    break
            else:
                document[entity.key] = []
        return document[entity.key]

    @staticmethod
    def _index_of(entity: EntityKind, records: list[dict], record_id: str) -> int:
        for i, record in enumerate(records):
            if record.get("id") == record_id:
                return i
        raise NotFoundError(entity.label, record_id)

    @staticmethod
    def _check(entity: EntityKind, record: dict) -> None:
        problems = entity.validate(record)
        if problems:
            raise ValidationError(entity.label, problems)
