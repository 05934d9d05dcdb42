"""
Generic repository providing paginated listing, search and CRUD for one model.

The repository is configured, not subclassed: a model class, an allow-list of
writable attribute names and the attributes free-text search looks at. Domain
repositories (customer_repository.py, product_repository.py) hold an instance of
it and only add configuration plus a few named queries.

Session handling:
    - Reads and writes run on the AsyncSession handed to the constructor.
    - Writes `flush()` so generated ids and defaults are visible, but never `commit()`.
      The caller that owns the session (the request dependency, a test fixture)
      decides when the transaction ends.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Mapping, Type, TypeVar

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession

from store_api.database.base import Base
from store_api.exceptions.base import InvalidFieldError, RepositoryError
from store_api.exceptions.mapper import db_error_handler
from store_api.schemas.common import ListOptions, Pagination

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page(Generic[ModelType]):
    """Rows of one page plus the pagination block computed from the same filter."""
    rows: list[ModelType]
    pagination: Pagination


class GenericRepository(Generic[ModelType]):
    """
    Table-agnostic data access, parameterized by configuration.

    Args:
        model: mapped class (e.g. Product, not Product())
        session: AsyncSession used for every query
        fields: allow-list of attribute names create/update may write
        search_fields: attributes matched by `list(search=...)` when the caller
            does not pass its own `search_fields`
        default_order_by: attribute used when `ListOptions.order_by` is None
    """

    def __init__(
        self,
        model: Type[ModelType],
        session: AsyncSession,
        *,
        fields: Iterable[str],
        search_fields: Iterable[str] = (),
        default_order_by: str = "created_at",
    ):
        self.model = model
        self.session = session
        self.model_name = model.__name__

        # attribute name -> InstrumentedAttribute, for every mapped column
        self._columns = {
            attr.key: getattr(model, attr.key) for attr in sa_inspect(model).column_attrs
        }
        self._pk = self._columns["id"]

        self.fields = tuple(fields)
        self.search_fields = tuple(search_fields)
        self.default_order_by = default_order_by

        # Configuration mistakes should fail at construction, not on first request
        self._check_fields(self.fields, "fields")
        self._check_fields(self.search_fields, "search_fields")
        self._check_fields((default_order_by,), "default_order_by")

    # =================================================================================================================
    # Helpers
    # =================================================================================================================

    def _check_fields(self, names: Iterable[str], role: str) -> None:
        unknown = sorted({n for n in names if n not in self._columns})
        if unknown:
            logger.info(
                "repo.invalid_fields",
                extra={"model": self.model_name, "role": role, "invalid_fields": unknown},
            )
            raise InvalidFieldError(
                f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown
            )

    def _column(self, name: str):
        self._check_fields((name,), "column")
        return self._columns[name]

    def _allowed(self, data: Mapping[str, Any], operation: str) -> dict[str, Any]:
        """Intersect the payload keys with the allow-list; extra keys are dropped, never written."""
        allowed = {k: v for k, v in data.items() if k in self.fields}
        dropped = sorted(k for k in data if k not in self.fields)
        if dropped:
            # keys only: values may carry personal data
            logger.debug(
                "repo.%s.dropped_keys", operation,
                extra={"model": self.model_name, "operation": operation, "dropped_keys": dropped},
            )
        return allowed

    def _search_clause(self, options: ListOptions):
        term = (options.search or "").strip()
        fields = self.search_fields if options.search_fields is None else tuple(options.search_fields)
        if not term or not fields:
            return None
        # LIKE '%term%' per field; autoescape keeps '%' and '_' in the term literal
        return or_(*(self._column(f).contains(term, autoescape=True) for f in fields))

    def _order_clauses(self, options: ListOptions) -> list:
        order_by = options.order_by or self.default_order_by
        direction = (options.order_direction or "DESC").upper()
        if direction not in ("ASC", "DESC"):
            raise InvalidFieldError(f"Invalid order direction: {options.order_direction}", fields=["order_direction"])

        column = self._column(order_by)
        clauses = [column.asc() if direction == "ASC" else column.desc()]
        # created_at has second resolution; the primary key keeps the order total
        if order_by != "id":
            clauses.append(self._pk.asc() if direction == "ASC" else self._pk.desc())
        return clauses

    # =================================================================================================================
    # Listing
    # =================================================================================================================

    async def list(self, options: ListOptions | None = None) -> Page[ModelType]:
        """
        Return one page of rows plus pagination metadata.

        `total_items` comes from `count(options)`, which builds its WHERE clause
        with the same `_search_clause`, so it always describes the filter that
        produced `rows`.
        """
        options = options or ListOptions()
        where = self._search_clause(options)
        order = self._order_clauses(options)

        data_query = select(self.model).order_by(*order).limit(options.limit).offset(options.offset)
        if where is not None:
            data_query = data_query.where(where)

        start = time.perf_counter()
        try:
            result = await self.session.execute(data_query)
            rows = list(result.scalars().all())
        except Exception as e:
            logger.error(f"Error listing {self.model_name}: {e}")
            raise RepositoryError(f"Failed to list {self.model_name}") from e
        total = await self.count(options)

        pagination = Pagination.build(options.page, options.limit, total)
        logger.debug(
            "repo.list.success",
            extra={
                "model": self.model_name,
                "operation": "list",
                "page": options.page,
                "limit": options.limit,
                "returned": len(rows),
                "total_items": total,
                "searched": where is not None,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return Page(rows=rows, pagination=pagination)

    async def count(self, options: ListOptions | None = None) -> int:
        """Number of rows matching the search filter of `options` (pagination ignored)."""
        options = options or ListOptions()
        where = self._search_clause(options)
        query = select(func.count()).select_from(self.model)
        if where is not None:
            query = query.where(where)
        try:
            result = await self.session.execute(query)
            return result.scalar() or 0
        except Exception as e:
            logger.error(f"Error counting {self.model_name}: {e}")
            raise RepositoryError(f"Failed to count {self.model_name} entities") from e

    # =================================================================================================================
    # Single / filtered reads
    # =================================================================================================================

    async def find_by_id(self, entity_id: int) -> ModelType | None:
        """
        Get an entity by its primary key.

        Returns:
            The entity if found, otherwise None
        """
        try:
            result = await self.session.execute(select(self.model).where(self._pk == entity_id))
            entity = result.scalar_one_or_none()
            logger.debug(f"Retrieved {self.model_name} by ID: {entity_id} (found={entity is not None})")
            return entity
        except Exception as e:
            logger.error(f"Error retrieving {self.model_name} by ID {entity_id}: {e}")
            raise RepositoryError(f"Failed to retrieve {self.model_name}") from e

    async def find_where(self, field: str, value: Any) -> ModelType | None:
        """First entity whose `field` equals `value`, or None."""
        column = self._column(field)
        try:
            result = await self.session.execute(
                select(self.model).where(column == value).order_by(self._pk.asc()).limit(1)
            )
            return result.scalars().first()
        except Exception as e:
            logger.error(f"Error finding {self.model_name} by {field}: {e}")
            raise RepositoryError(f"Failed to find {self.model_name}") from e

    async def list_where(self, field: str, value: Any) -> list[ModelType]:
        """Every entity whose `field` equals `value` (possibly empty)."""
        column = self._column(field)
        try:
            result = await self.session.execute(
                select(self.model).where(column == value).order_by(self._pk.asc())
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Error listing {self.model_name} by {field}: {e}")
            raise RepositoryError(f"Failed to list {self.model_name}") from e

    async def select_where(self, *criteria, order_by=None) -> list[ModelType]:
        """
        Escape hatch for domain repositories that need a predicate other than
        equality (e.g. `Product.stock <= 5`). Criteria are SQLAlchemy expressions.
        """
        query = select(self.model).where(*criteria)
        if order_by is not None:
            query = query.order_by(*order_by)
        try:
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Error querying {self.model_name}: {e}")
            raise RepositoryError(f"Failed to query {self.model_name}") from e

    # =================================================================================================================
    # Writes
    # =================================================================================================================

    async def create(self, data: Mapping[str, Any]) -> ModelType:
        """
        Insert a row built from the allow-listed keys of `data`.

        Returns the entity refreshed from storage, so the generated id and
        server defaults (stock=0, created_at) are populated.

        Raises:
            ConflictError: a unique constraint rejected the row
            ConstraintViolationError: any other constraint rejected the row
        """
        values = self._allowed(data, "create")
        logger.debug(
            "repo.create.start",
            extra={"model": self.model_name, "operation": "create", "provided_keys": sorted(values)},
        )

        start = time.perf_counter()
        async with db_error_handler(self.session, self.model_name):
            entity = self.model(**values)
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": entity.id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    async def update(self, entity_id: int, data: Mapping[str, Any]) -> ModelType | None:
        """
        Update the allow-listed keys of `data` on row `entity_id`.

        Returns:
            The re-read entity, or None when no row has that id.
            With no allow-listed key in `data` nothing is written and the
            current row (or None) is returned.
        """
        values = self._allowed(data, "update")
        if not values:
            logger.warning(f"No valid data provided for updating {self.model_name}")
            return await self.find_by_id(entity_id)

        stmt = (
            update(self.model)
            .where(self._pk == entity_id)
            .values({self._columns[k]: v for k, v in values.items()})
            .execution_options(synchronize_session="fetch")
        )
        async with db_error_handler(self.session, self.model_name):
            result = await self.session.execute(stmt)

        if result.rowcount == 0:
            logger.warning(f"{self.model_name} with ID {entity_id} not found for update")
            return None

        logger.info(
            "repo.update.success",
            extra={"model": self.model_name, "operation": "update", "id": entity_id, "updated_keys": sorted(values)},
        )
        try:
            return await self.session.get(self.model, entity_id, populate_existing=True)
        except Exception as e:
            raise RepositoryError(f"Failed to retrieve {self.model_name}") from e

    async def delete(self, entity_id: int) -> bool:
        """
        Delete by primary key.

        Returns:
            True if a row was removed, False if no row had that id
        """
        async with db_error_handler(self.session, self.model_name):
            result = await self.session.execute(delete(self.model).where(self._pk == entity_id))

        if result.rowcount > 0:
            logger.info("repo.delete.success", extra={"model": self.model_name, "operation": "delete", "id": entity_id})
            return True

        logger.warning(f"{self.model_name} with ID {entity_id} not found for deletion")
        return False

    # =================================================================================================================
    # Existence checks
    # =================================================================================================================

    async def exists(self, entity_id: int) -> bool:
        try:
            result = await self.session.execute(select(self._pk).where(self._pk == entity_id))
            return result.scalar() is not None
        except Exception as e:
            logger.error(f"Error checking existence of {self.model_name} {entity_id}: {e}")
            raise RepositoryError(f"Failed to check {self.model_name} existence") from e

    async def exists_where(self, field: str, value: Any, exclude_id: int | None = None) -> bool:
        """
        True when some row has `field == value`, ignoring the row whose id is
        `exclude_id` (used so an entity does not conflict with itself on update).
        """
        column = self._column(field)
        query = select(self._pk).where(column == value)
        if exclude_id is not None:
            query = query.where(self._pk != exclude_id)
        try:
            result = await self.session.execute(query.limit(1))
            return result.scalar() is not None
        except Exception as e:
            logger.error(f"Error checking {self.model_name} existence by {field}: {e}")
            raise RepositoryError(f"Failed to check {self.model_name} existence") from e
