"""Query primitives shared by all repositories.

Filters are expressed as lists of ``Predicate`` objects (field, operator, value)
and only turned into SQL expressions right before execution, combined with an
explicit ``Combinator``. Adding a filter dimension means appending a predicate;
the combination step never changes.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import SQLModel

from src.hrms.core.exceptions import ValidationError


class Operator(str, Enum):
    """Comparison applied by a predicate."""

    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    CONTAINS = "contains"  # case-insensitive substring
    IN = "in"


class Combinator(str, Enum):
    """How a list of predicates is joined."""

    AND = "and"
    OR = "or"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Predicate:
    """A single structured filter condition, e.g. ``Predicate("location", "Cairo")``."""

    field: str
    value: Any
    op: Operator = Operator.EQ


@dataclass(frozen=True)
class Group:
    """Nested filters joined by their own combinator, e.g. an OR inside an AND list."""

    filters: Sequence["Filter"]
    combinator: Combinator = Combinator.OR


Filter = Predicate | Group


@dataclass(frozen=True)
class OrderBy:
    field: str
    direction: SortDirection = SortDirection.ASC


@dataclass
class FindOptions:
    """Options for ``BaseRepository.find_all``.

    Empty ``where`` means no filter, ``order_by=None`` means storage order
    (not stable), ``limit=None`` means unbounded.
    """

    where: Sequence[Filter] = field(default_factory=list)
    order_by: OrderBy | None = None
    limit: int | None = None
    offset: int | None = None
    combinator: Combinator = Combinator.AND


def where_equals(**fields: Any) -> list[Predicate]:
    """Build AND-able equality predicates from keyword arguments."""
    return [Predicate(name, value) for name, value in fields.items()]


def resolve_column(model: type[SQLModel], name: str) -> Any:
    """Return the mapped column attribute ``name`` of ``model``.

    Raises:
        ValidationError: If the model has no such column.
    """
    if name not in model.__table__.columns:  # type: ignore[attr-defined]
        raise ValidationError(
            f"Unknown field '{name}' for {model.__tablename__}",  # type: ignore[attr-defined]
            fields=[name],
        )
    return getattr(model, name)


def predicate_to_clause(model: type[SQLModel], predicate: Filter) -> ColumnElement[bool]:
    """Translate one predicate (or group) into a SQLAlchemy boolean expression."""
    if isinstance(predicate, Group):
        clause = build_clause(model, predicate.filters, predicate.combinator)
        if clause is None:
            raise ValidationError("Filter group cannot be empty")
        return clause

    column = resolve_column(model, predicate.field)
    value = predicate.value
    match predicate.op:
        case Operator.EQ:
            return column.is_(None) if value is None else column == value
        case Operator.NE:
            return column.is_not(None) if value is None else column != value
        case Operator.LT:
            return column < value
        case Operator.LE:
            return column <= value
        case Operator.GT:
            return column > value
        case Operator.GE:
            return column >= value
        case Operator.CONTAINS:
            return column.icontains(str(value), autoescape=True)
        case Operator.IN:
            return column.in_(list(value))
    raise ValidationError(f"Unsupported operator '{predicate.op}'")


def build_clause(
    model: type[SQLModel],
    predicates: Sequence[Filter],
    combinator: Combinator = Combinator.AND,
) -> ColumnElement[bool] | None:
    """Combine predicates into a single clause, or None when there are none."""
    clauses = [predicate_to_clause(model, p) for p in predicates]
    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    if combinator == Combinator.OR:
        return or_(*clauses)
    return and_(*clauses)


def order_clause(model: type[SQLModel], order_by: OrderBy) -> Any:
    """Translate an OrderBy into an ORDER BY expression."""
    column = resolve_column(model, order_by.field)
    return column.desc() if order_by.direction == SortDirection.DESC else column.asc()
