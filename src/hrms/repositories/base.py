"""Base repository with common CRUD and query-composition operations."""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete as sql_delete
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import SQLModel, select

from src.hrms.core.exceptions import AppError, StorageError, ValidationError
from src.hrms.core.logging import get_logger
from src.hrms.models.base import utc_now
from src.hrms.repositories.query import (
    Combinator,
    Filter,
    FindOptions,
    Operator,
    OrderBy,
    Predicate,
    build_clause,
    order_clause,
    resolve_column,
)
from src.hrms.schemas.pagination import PaginatedResponse

logger = get_logger(__name__)


def _describe(exc: BaseException) -> str:
    """Short human-readable text for a storage exception (driver error if wrapped)."""
    text = str(getattr(exc, "orig", None) or exc)
    return text.splitlines()[0] if text else type(exc).__name__


def validate_required(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Check that every field in ``fields`` is present and not blank.

    Raises:
        ValidationError: Listing every missing field.
    """
    missing = [
        name
        for name in fields
        if data.get(name) is None or (isinstance(data[name], str) and not data[name].strip())
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", fields=missing)


ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Base repository providing common database operations.

    A repository is bound to one table (``model``) and holds only the shared
    session factory. Every call opens its own short-lived session, so calls can
    run concurrently and each write commits exactly once. Nothing here retries,
    and no transaction spans more than one call.

    Storage failures are re-raised as ``StorageError``; lookups that match
    nothing return ``None``.
    """

    model: type[ModelType]
    primary_key: ClassVar[str] = "id"
    # Fields that create/update must not leave empty
    required_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @property
    def table_name(self) -> str:
        return self.model.__tablename__  # type: ignore[return-value]

    @contextmanager
    def storage_errors(self, operation: str) -> Iterator[None]:
        """Translate SQLAlchemy/driver failures raised inside the block into StorageError."""
        try:
            yield
        except AppError:
            raise
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                "Storage operation failed",
                table=self.table_name,
                operation=operation,
                error=_describe(e),
            )
            raise StorageError(
                f"Failed to {operation.replace('_', ' ')} on {self.table_name}: {_describe(e)}",
                operation=operation,
                table=self.table_name,
            ) from e

    async def fetch_all(self, query: Any, operation: str) -> list[Any]:
        """Execute a select and return all scalars of the first column."""
        with self.storage_errors(operation):
            async with self.session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())

    async def fetch_rows(self, query: Any, operation: str) -> list[Any]:
        """Execute a select and return full result rows (for multi-column selects)."""
        with self.storage_errors(operation):
            async with self.session_factory() as session:
                result = await session.execute(query)
                return list(result.all())

    async def fetch_scalar(self, query: Any, operation: str) -> Any:
        """Execute a select that yields a single value (or None)."""
        with self.storage_errors(operation):
            async with self.session_factory() as session:
                result = await session.execute(query)
                return result.scalar()

    def validate_required(self, data: Mapping[str, Any], fields: Iterable[str]) -> None:
        validate_required(data, fields)

    def _pk_column(self) -> Any:
        return resolve_column(self.model, self.primary_key)

    def _to_values(
        self, data: BaseModel | Mapping[str, Any], *, partial: bool
    ) -> dict[str, Any]:
        """Normalize a payload into a column -> value dict."""
        if isinstance(data, BaseModel):
            values = data.model_dump(exclude_unset=partial)
        else:
            values = dict(data)
        for name in values:
            resolve_column(self.model, name)
        return values

    def _build_select(self, options: FindOptions) -> Any:
        if options.limit is not None and options.limit < 0:
            raise ValidationError("limit cannot be negative", fields=["limit"])
        if options.offset is not None and options.offset < 0:
            raise ValidationError("offset cannot be negative", fields=["offset"])

        query = select(self.model)
        clause = build_clause(self.model, options.where, options.combinator)
        if clause is not None:
            query = query.where(clause)
        if options.order_by is not None:
            query = query.order_by(order_clause(self.model, options.order_by))
        if options.limit is not None:
            query = query.limit(options.limit)
        if options.offset:
            query = query.offset(options.offset)
        return query

    async def find_all(self, options: FindOptions | None = None) -> list[ModelType]:
        """Find records with optional filtering, ordering and pagination.

        Args:
            options: Filter predicates, ordering and limit/offset. None means
                no filter, storage order and no limit.

        Returns:
            Matching records. Order is only stable when ``order_by`` is set.
        """
        query = self._build_select(options or FindOptions())
        return await self.fetch_all(query, "find_all")

    async def find_by_id(self, id: Any) -> ModelType | None:
        """Get a record by its primary key."""
        query = select(self.model).where(self._pk_column() == id)
        items = await self.fetch_all(query, "find_by_id")
        return items[0] if items else None

    async def find_by_field(
        self, field: str, value: Any, order_by: OrderBy | None = None
    ) -> ModelType | None:
        """Get the first record whose ``field`` equals ``value``.

        When several rows match, "first" follows ``order_by``, falling back to
        primary key order.
        """
        options = FindOptions(
            where=[Predicate(field, value)],
            order_by=order_by or OrderBy(self.primary_key),
            limit=1,
        )
        items = await self.find_all(options)
        return items[0] if items else None

    async def create(self, data: CreateSchemaType | Mapping[str, Any]) -> ModelType:
        """Insert a new record.

        Raises:
            ValidationError: If a required field is missing or a field is unknown.
            StorageError: If the insert fails (e.g. constraint violation).
        """
        values = self._to_values(data, partial=False)
        self.validate_required(values, self.required_fields)
        entity = self.model(**values)

        with self.storage_errors("create"):
            async with self.session_factory() as session:
                session.add(entity)
                await session.commit()
                await session.refresh(entity)

        logger.debug(
            "Record created", table=self.table_name, id=str(getattr(entity, self.primary_key))
        )
        return entity

    async def update(
        self, id: Any, data: UpdateSchemaType | Mapping[str, Any]
    ) -> ModelType | None:
        """Apply a partial update and stamp ``updated_at``.

        Returns:
            The updated record, or None if no record has this id (never upserts).
        """
        values = self._to_values(data, partial=True)
        if self.primary_key in values:
            raise ValidationError(
                f"Field '{self.primary_key}' cannot be updated", fields=[self.primary_key]
            )
        self.validate_required(values, [f for f in self.required_fields if f in values])

        with self.storage_errors("update"):
            async with self.session_factory() as session:
                result = await session.execute(
                    select(self.model).where(self._pk_column() == id)
                )
                entity = result.scalars().first()
                if entity is None:
                    return None

                for name, value in values.items():
                    setattr(entity, name, value)
                if "updated_at" in self.model.__table__.columns:  # type: ignore[attr-defined]
                    entity.updated_at = utc_now()  # type: ignore[attr-defined]

                await session.commit()
                await session.refresh(entity)
                return entity

    async def delete(self, id: Any) -> bool:
        """Delete a record by id.

        Returns:
            True if a row was removed, False if none matched. Deleting a
            missing id is not an error.
        """
        with self.storage_errors("delete"):
            async with self.session_factory() as session:
                result = await session.execute(
                    sql_delete(self.model).where(self._pk_column() == id)
                )
                await session.commit()
                deleted = result.rowcount > 0  # type: ignore[attr-defined]

        if deleted:
            logger.debug("Record deleted", table=self.table_name, id=str(id))
        return deleted

    async def count(
        self,
        where: Sequence[Filter] | None = None,
        combinator: Combinator = Combinator.AND,
    ) -> int:
        """Count records matching the same filter semantics as ``find_all``."""
        query = select(func.count()).select_from(self.model)
        clause = build_clause(self.model, where or [], combinator)
        if clause is not None:
            query = query.where(clause)
        return int(await self.fetch_scalar(query, "count") or 0)

    async def search(self, term: str, fields: Sequence[str]) -> list[ModelType]:
        """Find records where ANY of ``fields`` contains ``term`` (case-insensitive)."""
        if not fields:
            return []
        predicates = [Predicate(name, term, Operator.CONTAINS) for name in fields]
        return await self.find_all(FindOptions(where=predicates, combinator=Combinator.OR))

    async def find_by_ids(self, ids: Sequence[Any]) -> list[ModelType]:
        """Batch lookup. Missing ids are skipped; result order is unspecified."""
        if not ids:
            return []
        return await self.find_all(
            FindOptions(where=[Predicate(self.primary_key, list(ids), Operator.IN)])
        )

    async def exists(self, where: Sequence[Filter]) -> bool:
        """Check whether at least one record matches all predicates."""
        query = select(self._pk_column())
        clause = build_clause(self.model, where)
        if clause is not None:
            query = query.where(clause)
        return await self.fetch_scalar(query.limit(1), "exists") is not None

    async def paginate(self, options: FindOptions) -> PaginatedResponse[ModelType]:
        """Run ``find_all`` and a matching ``count`` to build one page of results."""
        items = await self.find_all(options)
        total = await self.count(options.where, options.combinator)
        offset = options.offset or 0
        return PaginatedResponse(
            items=items,
            total=total,
            limit=options.limit,
            offset=offset,
            has_more=offset + len(items) < total,
        )
