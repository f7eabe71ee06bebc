"""
Record store port (interface).

The back office owns no authoritative state: customers, subscriptions,
licenses, sales, products and staff profiles live in an external
relational store. Every component reaches that store through this
contract, which offers filtered select/insert/update/delete/upsert over
named collections plus named remote procedures.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

Row = Dict[str, Any]


class Collections:
    """Names of the collections the back office reads and writes."""

    CUSTOMERS = "customers"
    SUBSCRIPTIONS = "subscriptions"
    LICENSES = "licenses"
    SALES = "sales"
    PRODUCTS = "products"
    PROFILES = "profiles"
    PAYMENT_EVENTS = "payment_events"


class FilterOp(Enum):
    """Comparison operators understood by every store adapter."""

    EQ = "eq"
    NEQ = "neq"
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"
    ILIKE = "ilike"
    IS = "is"


@dataclass(frozen=True)
class Filter:
    """
    A single column predicate.

    ``ILIKE`` values use SQL wildcards (``%term%``); ``IS`` only accepts
    ``None`` and matches missing values.
    """

    field: str
    value: Any
    op: FilterOp = FilterOp.EQ


@dataclass(frozen=True)
class Ordering:
    """Sort key for a select."""

    field: str
    descending: bool = False


def eq(field: str, value: Any) -> Filter:
    return Filter(field, value, FilterOp.EQ)


def neq(field: str, value: Any) -> Filter:
    return Filter(field, value, FilterOp.NEQ)


def lt(field: str, value: Any) -> Filter:
    return Filter(field, value, FilterOp.LT)


def lte(field: str, value: Any) -> Filter:
    return Filter(field, value, FilterOp.LTE)


def gt(field: str, value: Any) -> Filter:
    return Filter(field, value, FilterOp.GT)


def gte(field: str, value: Any) -> Filter:
    return Filter(field, value, FilterOp.GTE)


def ilike(field: str, pattern: str) -> Filter:
    return Filter(field, pattern, FilterOp.ILIKE)


def is_null(field: str) -> Filter:
    return Filter(field, None, FilterOp.IS)


class RecordStore(ABC):
    """
    Abstract record store.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    Implementations raise ``StoreError`` (or a subclass) for faults.
    """

    @abstractmethod
    async def select(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[Sequence[Ordering]] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """
        Read rows matching every filter.

        Args:
            collection: Collection name
            filters: Predicates combined with AND
            order_by: Sort keys, applied in order
            limit: Maximum number of rows to return

        Returns:
            Matching rows
        """
        pass

    @abstractmethod
    async def insert(self, collection: str, values: Row) -> Row:
        """
        Insert one row.

        Args:
            collection: Collection name
            values: Column values

        Returns:
            The stored row, including generated columns

        Raises:
            DuplicateRecordError: If a unique column already holds the value
        """
        pass

    @abstractmethod
    async def update(
        self, collection: str, values: Row, filters: Sequence[Filter]
    ) -> List[Row]:
        """
        Update every row matching the filters.

        Args:
            collection: Collection name
            values: Columns to overwrite
            filters: Predicates combined with AND

        Returns:
            The updated rows
        """
        pass

    @abstractmethod
    async def delete(self, collection: str, filters: Sequence[Filter]) -> int:
        """
        Delete every row matching the filters.

        Args:
            collection: Collection name
            filters: Predicates combined with AND

        Returns:
            Number of deleted rows
        """
        pass

    @abstractmethod
    async def upsert(self, collection: str, values: Row, on_conflict: str = "id") -> Row:
        """
        Insert a row or overwrite the row sharing the conflict column.

        Args:
            collection: Collection name
            values: Column values, including the conflict column
            on_conflict: Column identifying an existing row

        Returns:
            The stored row
        """
        pass

    @abstractmethod
    async def call(self, procedure: str, params: Dict[str, Any]) -> Any:
        """
        Invoke a named remote procedure.

        Args:
            procedure: Procedure name
            params: Named parameters

        Returns:
            Procedure result

        Raises:
            UnknownProcedureError: If the store does not offer the procedure
        """
        pass
