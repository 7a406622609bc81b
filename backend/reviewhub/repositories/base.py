from __future__ import annotations

"""backend/reviewhub/repositories/base.py

Generic CRUD repository over a SQLAlchemy model.

A Repository is parameterized by:
- the ORM model class
- the set of columns list queries may filter and sort on

and provides create / get_single / get_list / update / delete with the
error contract the handlers rely on:

- missing rows raise NotFoundError
- integrity violations raise ConflictError
- untranslatable filters raise InvalidFilterError
- any other SQLAlchemy failure is logged and raised as DbError

Per-resource repositories subclass this and add their own queries.
"""

import enum
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Generic, Iterable, List, Tuple, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from reviewhub.exceptions import (
    ConflictError,
    DbError,
    InvalidFilterError,
    NotFoundError,
)
from reviewhub.schemas import GetListFilter

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# Operator name -> predicate builder
FILTER_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "eq": lambda col, value: col == value,
    "ne": lambda col, value: col != value,
    "gt": lambda col, value: col > value,
    "gte": lambda col, value: col >= value,
    "lt": lambda col, value: col < value,
    "lte": lambda col, value: col <= value,
    "like": lambda col, value: col.like(value),
    "ilike": lambda col, value: col.ilike(value),
    "in": lambda col, value: col.in_(value if isinstance(value, (list, tuple, set)) else [value]),
}

ORDER_DIRECTIONS = ("asc", "desc")


def _plain(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    return value


class Repository(Generic[ModelT]):
    """CRUD operations for one resource table."""

    resource_name: str = "Resource"

    def __init__(
        self,
        db: Session,
        model: type[ModelT],
        filterable_columns: Iterable[str] | None = None,
    ):
        self.db = db
        self.model = model
        self.filterable_columns = frozenset(
            filterable_columns
            if filterable_columns is not None
            else (c.name for c in model.__table__.columns)
        )
        self._has_updated_at = "updated_at" in model.__table__.columns

    # ---- Helpers ----

    def _column(self, name: str):
        if name not in self.filterable_columns:
            raise InvalidFilterError(f"Column '{name}' cannot be used to filter or sort")
        return getattr(self.model, name)

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Integrity error while %s %s: %s", action, self.resource_name, exc)
            raise ConflictError(f"{self.resource_name} violates a uniqueness or reference constraint") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Database error while %s %s", action, self.resource_name)
            raise DbError(f"Error {action} {self.resource_name.lower()}") from exc

    def _load(self, entity_id: str) -> ModelT:
        try:
            entity = self.db.get(self.model, entity_id)
        except SQLAlchemyError as exc:
            logger.exception("Database error while getting %s %s", self.resource_name, entity_id)
            raise DbError(f"Error getting {self.resource_name.lower()}") from exc
        if entity is None:
            raise NotFoundError(self.resource_name, entity_id)
        return entity

    def apply_filters(self, query: Query, list_filter: GetListFilter) -> Query:
        """Translate filter triples into WHERE clauses, in the order given.

        A filter whose value is None or "" is skipped, so an absent query
        parameter never narrows the result.
        """
        for item in list_filter.filters:
            if item.value is None or item.value == "":
                continue
            builder = FILTER_OPERATORS.get(item.type)
            if builder is None:
                raise InvalidFilterError(f"Unsupported filter type '{item.type}'")
            query = query.filter(builder(self._column(item.column), item.value))
        return query

    def apply_ordering(self, query: Query, list_filter: GetListFilter) -> Query:
        clauses = []
        for item in list_filter.order_by:
            direction = item.order.lower()
            if direction not in ORDER_DIRECTIONS:
                raise InvalidFilterError(f"Unsupported order direction '{item.order}'")
            column = self._column(item.column)
            clauses.append(column.desc() if direction == "desc" else column.asc())
        # Ties on the requested columns are broken by id for a stable page order
        clauses.append(self.model.id.asc())
        return query.order_by(*clauses)

    def paginate(self, query: Query, list_filter: GetListFilter) -> Tuple[List[Any], int]:
        """Return one page of `query` and the total row count of the unpaged query.

        A page past the end is answered from the count alone.
        """
        try:
            count = query.order_by(None).count()
            if list_filter.offset >= count:
                return [], count
            items = query.offset(list_filter.offset).limit(list_filter.limit).all()
        except SQLAlchemyError as exc:
            logger.exception("Database error while listing %s", self.resource_name)
            raise DbError(f"Error getting {self.resource_name.lower()} list") from exc
        return items, count

    # ---- CRUD ----

    def create(self, values: Dict[str, Any]) -> ModelT:
        entity = self.model(**{k: _plain(v) for k, v in values.items()})
        self.db.add(entity)
        self._commit("creating")
        self.db.refresh(entity)
        logger.info("Created %s %s", self.resource_name, entity.id)
        return entity

    def get_single(self, entity_id: str) -> ModelT:
        return self._load(entity_id)

    def get_list(self, list_filter: GetListFilter) -> Tuple[List[ModelT], int]:
        query = self.apply_filters(self.db.query(self.model), list_filter)
        return self.paginate(self.apply_ordering(query, list_filter), list_filter)

    def update(self, entity_id: str, values: Dict[str, Any]) -> ModelT:
        """Replace the supplied columns of the row keyed by `entity_id`.

        Columns not present in `values` keep their stored value; `id` and
        `created_at` are never overwritten.
        """
        entity = self._load(entity_id)
        for key, value in values.items():
            if key in ("id", "created_at"):
                continue
            setattr(entity, key, _plain(value))
        if self._has_updated_at:
            entity.updated_at = datetime.utcnow()
        self._commit("updating")
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: str) -> None:
        entity = self._load(entity_id)
        self.db.delete(entity)
        self._commit("deleting")
        logger.info("Deleted %s %s", self.resource_name, entity_id)
