"""
Django implementation of the RecordStore port.

This adapter maps collection names to Django models and translates
filters, orderings and limits into ORM querysets. Database faults are
converted into domain ``StoreError``s so callers never see ORM types.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from asgiref.sync import sync_to_async
from django.apps import apps
from django.core.exceptions import FieldDoesNotExist, FieldError
from django.db import DatabaseError, IntegrityError, models, transaction
from django.utils.module_loading import import_string

from core.domain.exceptions import DuplicateRecordError, StoreError, UnknownProcedureError
from core.ports.record_store import Filter, FilterOp, Ordering, RecordStore, Row

logger = logging.getLogger(__name__)

_LOOKUPS = {
    FilterOp.LT: "lt",
    FilterOp.LTE: "lte",
    FilterOp.GT: "gt",
    FilterOp.GTE: "gte",
}


def _ilike_lookup(field: str, pattern: str) -> Dict[str, str]:
    """Translate a SQL LIKE pattern into the closest case-insensitive lookup."""
    starts = pattern.startswith("%")
    ends = pattern.endswith("%") and len(pattern) > 1
    term = pattern.strip("%")
    if starts and ends:
        return {f"{field}__icontains": term}
    if ends:
        return {f"{field}__istartswith": term}
    if starts:
        return {f"{field}__iendswith": term}
    return {f"{field}__iexact": term}


class DjangoRecordStore(RecordStore):
    """
    Django ORM implementation of RecordStore.

    This adapter:
    1. Resolves collection names to models (``app_label.ModelName``)
    2. Converts rows to and from model instances by column name
    3. Runs remote procedures inside a single database transaction
    """

    def __init__(
        self,
        collections: Dict[str, str],
        procedures: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the store.

        Args:
            collections: Collection name to ``app_label.ModelName``
            procedures: Procedure name to dotted path of a callable
                taking the params dict
        """
        self._collections = dict(collections)
        self._procedures = dict(procedures or {})

    def _model(self, collection: str) -> type:
        try:
            label = self._collections[collection]
        except KeyError:
            raise StoreError(f"Unknown collection: {collection}") from None
        return apps.get_model(label)

    def _procedure(self, name: str) -> Callable[[Dict[str, Any]], Any]:
        try:
            return import_string(self._procedures[name])
        except KeyError:
            raise UnknownProcedureError(f"Procedure {name} is not available") from None

    @staticmethod
    def _to_row(instance: models.Model) -> Row:
        return {
            field.attname: getattr(instance, field.attname)
            for field in instance._meta.concrete_fields
        }

    @staticmethod
    def _queryset(model: type, filters: Sequence[Filter]) -> models.QuerySet:
        queryset = model.objects.all()
        for condition in filters:
            if condition.op is FilterOp.EQ:
                queryset = queryset.filter(**{condition.field: condition.value})
            elif condition.op is FilterOp.NEQ:
                queryset = queryset.exclude(**{condition.field: condition.value})
            elif condition.op is FilterOp.IS:
                queryset = queryset.filter(**{f"{condition.field}__isnull": True})
            elif condition.op is FilterOp.ILIKE:
                queryset = queryset.filter(**_ilike_lookup(condition.field, condition.value))
            else:
                lookup = _LOOKUPS[condition.op]
                queryset = queryset.filter(**{f"{condition.field}__{lookup}": condition.value})
        return queryset

    @staticmethod
    def _order_expressions(order_by: Sequence[Ordering]) -> List[Any]:
        expressions = []
        for ordering in order_by:
            column = models.F(ordering.field)
            if ordering.descending:
                expressions.append(column.desc(nulls_first=True))
            else:
                expressions.append(column.asc(nulls_last=True))
        return expressions

    def _run(self, operation: Callable[[], Any], description: str) -> Any:
        try:
            return operation()
        except IntegrityError as exc:
            logger.warning("Unique constraint violated during %s: %s", description, exc)
            raise DuplicateRecordError(str(exc)) from exc
        except (FieldError, FieldDoesNotExist) as exc:
            logger.warning("Unknown column during %s: %s", description, exc)
            raise StoreError(str(exc), code="UNKNOWN_COLUMN") from exc
        except DatabaseError as exc:
            logger.error("Database error during %s: %s", description, exc, exc_info=True)
            raise StoreError(str(exc)) from exc

    @sync_to_async
    def select(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[Sequence[Ordering]] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        model = self._model(collection)

        def operation():
            queryset = self._queryset(model, filters)
            if order_by:
                queryset = queryset.order_by(*self._order_expressions(order_by))
            if limit is not None:
                queryset = queryset[:limit]
            return [self._to_row(instance) for instance in queryset]

        return self._run(operation, f"select from {collection}")

    @sync_to_async
    def insert(self, collection: str, values: Row) -> Row:
        model = self._model(collection)

        def operation():
            with transaction.atomic():
                instance = model(**values)
                instance.save(force_insert=True)
            return self._to_row(instance)

        return self._run(operation, f"insert into {collection}")

    @sync_to_async
    def update(self, collection: str, values: Row, filters: Sequence[Filter]) -> List[Row]:
        model = self._model(collection)

        def operation():
            with transaction.atomic():
                queryset = self._queryset(model, filters)
                ids = list(queryset.values_list("pk", flat=True))
                model.objects.filter(pk__in=ids).update(**values)
                return [self._to_row(instance) for instance in model.objects.filter(pk__in=ids)]

        return self._run(operation, f"update of {collection}")

    @sync_to_async
    def delete(self, collection: str, filters: Sequence[Filter]) -> int:
        model = self._model(collection)

        def operation():
            deleted, per_model = self._queryset(model, filters).delete()
            return per_model.get(model._meta.label, 0)

        return self._run(operation, f"delete from {collection}")

    @sync_to_async
    def upsert(self, collection: str, values: Row, on_conflict: str = "id") -> Row:
        model = self._model(collection)

        def operation():
            defaults = {key: value for key, value in values.items() if key != on_conflict}
            with transaction.atomic():
                instance, _ = model.objects.update_or_create(
                    **{on_conflict: values[on_conflict]}, defaults=defaults
                )
            return self._to_row(instance)

        return self._run(operation, f"upsert into {collection}")

    @sync_to_async
    def call(self, procedure: str, params: Dict[str, Any]) -> Any:
        function = self._procedure(procedure)

        def operation():
            with transaction.atomic():
                return function(params)

        return self._run(operation, f"procedure {procedure}")
