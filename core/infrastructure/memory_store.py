"""
In-memory record store implementation.

A dict-backed stand-in for the external relational store, used by the
unit test suite and local experiments. Every operation yields to the
event loop once before touching data, so concurrently scheduled
handlers interleave the way independent requests against a real store
would.
"""

import asyncio
import logging
import re
import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence

from core.domain.exceptions import DuplicateRecordError, UnknownProcedureError
from core.ports.record_store import (
    Collections,
    Filter,
    FilterOp,
    Ordering,
    RecordStore,
    Row,
)

logger = logging.getLogger(__name__)

Procedure = Callable[["InMemoryRecordStore", Dict[str, Any]], Awaitable[Any]]

DEFAULT_UNIQUE_FIELDS: Dict[str, Sequence[str]] = {
    Collections.CUSTOMERS: ("email",),
    Collections.LICENSES: ("license_key",),
    Collections.PRODUCTS: ("sku",),
    Collections.PROFILES: ("email",),
    Collections.PAYMENT_EVENTS: ("event_id",),
}


def _like_to_regex(pattern: str) -> "re.Pattern[str]":
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def _matches(row: Row, condition: Filter) -> bool:
    actual = row.get(condition.field)
    op = condition.op
    if op is FilterOp.EQ:
        return actual == condition.value
    if op is FilterOp.NEQ:
        return actual != condition.value
    if op is FilterOp.IS:
        return actual is None
    if actual is None:
        return False
    if op is FilterOp.LT:
        return actual < condition.value
    if op is FilterOp.LTE:
        return actual <= condition.value
    if op is FilterOp.GT:
        return actual > condition.value
    if op is FilterOp.GTE:
        return actual >= condition.value
    if op is FilterOp.ILIKE:
        return bool(_like_to_regex(condition.value).fullmatch(str(actual)))
    raise ValueError(f"Unsupported filter operator: {op}")


class InMemoryRecordStore(RecordStore):
    """
    In-memory RecordStore implementation.

    Rows are plain dicts keyed by ``id``. Missing ``id`` and ``created_at``
    columns are generated on insert. Unique columns are enforced per
    collection.
    """

    def __init__(
        self,
        unique_fields: Optional[Dict[str, Sequence[str]]] = None,
        procedures: Optional[Dict[str, Procedure]] = None,
    ):
        """Initialize an empty store."""
        self._tables: Dict[str, Dict[Any, Row]] = defaultdict(dict)
        self._unique_fields = dict(DEFAULT_UNIQUE_FIELDS if unique_fields is None else unique_fields)
        self._procedures: Dict[str, Procedure] = dict(procedures or {})

    def register_procedure(self, name: str, procedure: Procedure) -> None:
        """Make a remote procedure available through ``call``."""
        self._procedures[name] = procedure

    def rows(self, collection: str) -> List[Row]:
        """Snapshot of every row in a collection, in insertion order."""
        return [dict(row) for row in self._tables[collection].values()]

    def _filtered(self, collection: str, filters: Iterable[Filter]) -> List[Row]:
        filters = list(filters)
        return [
            row
            for row in self._tables[collection].values()
            if all(_matches(row, condition) for condition in filters)
        ]

    def _check_unique(self, collection: str, values: Row, ignore_id: Any = None) -> None:
        table = self._tables[collection]
        row_id = values.get("id")
        if row_id is not None and row_id != ignore_id and row_id in table:
            raise DuplicateRecordError(f"{collection}.id {row_id} already exists")
        for column in self._unique_fields.get(collection, ()):
            value = values.get(column)
            if value is None:
                continue
            for existing_id, existing in table.items():
                if existing_id != ignore_id and existing.get(column) == value:
                    raise DuplicateRecordError(f"{collection}.{column} {value!r} already exists")

    async def select(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[Sequence[Ordering]] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        await asyncio.sleep(0)
        rows = self._filtered(collection, filters)
        for ordering in reversed(list(order_by or ())):
            present = [row for row in rows if row.get(ordering.field) is not None]
            missing = [row for row in rows if row.get(ordering.field) is None]
            present.sort(key=lambda row: row[ordering.field], reverse=ordering.descending)
            # NULLS LAST ascending, NULLS FIRST descending
            rows = missing + present if ordering.descending else present + missing
        if limit is not None:
            rows = rows[:limit]
        return [dict(row) for row in rows]

    async def insert(self, collection: str, values: Row) -> Row:
        await asyncio.sleep(0)
        row = dict(values)
        row.setdefault("id", uuid.uuid4())
        row.setdefault("created_at", datetime.now(timezone.utc))
        self._check_unique(collection, row)
        self._tables[collection][row["id"]] = row
        logger.debug("Inserted %s row %s", collection, row["id"])
        return dict(row)

    async def update(self, collection: str, values: Row, filters: Sequence[Filter]) -> List[Row]:
        await asyncio.sleep(0)
        targets = self._filtered(collection, filters)
        for row in targets:
            self._check_unique(collection, {**row, **values}, ignore_id=row["id"])
        updated = []
        for row in targets:
            row.update(values)
            updated.append(dict(row))
        return updated

    async def delete(self, collection: str, filters: Sequence[Filter]) -> int:
        await asyncio.sleep(0)
        targets = self._filtered(collection, filters)
        table = self._tables[collection]
        for row in targets:
            del table[row["id"]]
        return len(targets)

    async def upsert(self, collection: str, values: Row, on_conflict: str = "id") -> Row:
        await asyncio.sleep(0)
        key = values.get(on_conflict)
        existing = None
        if key is not None:
            existing = next(
                (row for row in self._tables[collection].values() if row.get(on_conflict) == key),
                None,
            )
        if existing is None:
            row = dict(values)
            row.setdefault("id", uuid.uuid4())
            row.setdefault("created_at", datetime.now(timezone.utc))
            self._check_unique(collection, row)
            self._tables[collection][row["id"]] = row
            return dict(row)
        self._check_unique(collection, {**existing, **values}, ignore_id=existing["id"])
        existing.update(values)
        return dict(existing)

    async def call(self, procedure: str, params: Dict[str, Any]) -> Any:
        handler = self._procedures.get(procedure)
        if handler is None:
            raise UnknownProcedureError(f"Procedure {procedure} is not available")
        return await handler(self, params)
