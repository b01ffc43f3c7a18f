"""Tests for predicate objects and their translation to SQL clauses."""

import pytest

from src.hrms.core.exceptions import ValidationError
from src.hrms.models import Company
from src.hrms.repositories.query import (
    Combinator,
    Group,
    Operator,
    OrderBy,
    Predicate,
    SortDirection,
    build_clause,
    order_clause,
    predicate_to_clause,
    resolve_column,
    where_equals,
)

pytestmark = pytest.mark.unit


def _sql(clause) -> str:
    return str(clause.compile())


class TestWhereEquals:
    def test_builds_one_equality_predicate_per_field(self):
        predicates = where_equals(location="Cairo", is_active=True)

        assert predicates == [
            Predicate("location", "Cairo"),
            Predicate("is_active", True),
        ]
        assert all(p.op == Operator.EQ for p in predicates)

    def test_no_fields_gives_no_predicates(self):
        assert where_equals() == []


class TestBuildClause:
    def test_empty_predicates_means_no_filter(self):
        assert build_clause(Company, []) is None

    def test_single_predicate_is_not_wrapped(self):
        sql = _sql(build_clause(Company, [Predicate("location", "Cairo")]))
        assert sql == "companies.location = :location_1"

    def test_predicates_are_anded_by_default(self):
        sql = _sql(build_clause(Company, where_equals(location="Cairo", industry_type="oil")))
        assert sql == (
            "companies.location = :location_1 AND companies.industry_type = :industry_type_1"
        )

    def test_or_combinator(self):
        sql = _sql(
            build_clause(
                Company,
                [Predicate("location", "Cairo"), Predicate("location", "Giza")],
                Combinator.OR,
            )
        )
        assert " OR " in sql
        assert " AND " not in sql

    def test_group_nests_or_inside_and(self):
        clause = build_clause(
            Company,
            [
                Group(
                    [
                        Predicate("name", "nile", Operator.CONTAINS),
                        Predicate("location", "nile", Operator.CONTAINS),
                    ]
                ),
                Predicate("is_active", True),
            ],
        )
        sql = _sql(clause)
        assert sql.startswith("(")
        assert ") AND companies.is_active" in sql
        assert " OR " in sql

    def test_empty_group_rejected(self):
        with pytest.raises(ValidationError):
            build_clause(Company, [Group([])])

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            build_clause(Company, [Predicate("does_not_exist", 1)])

        assert exc_info.value.fields == ["does_not_exist"]
        assert "companies" in exc_info.value.message


class TestPredicateToClause:
    def test_eq_none_becomes_is_null(self):
        sql = _sql(predicate_to_clause(Company, Predicate("location", None)))
        assert sql == "companies.location IS NULL"

    def test_ne_none_becomes_is_not_null(self):
        sql = _sql(predicate_to_clause(Company, Predicate("location", None, Operator.NE)))
        assert sql == "companies.location IS NOT NULL"

    @pytest.mark.parametrize(
        ("op", "symbol"),
        [
            (Operator.LT, "<"),
            (Operator.LE, "<="),
            (Operator.GT, ">"),
            (Operator.GE, ">="),
            (Operator.NE, "!="),
        ],
    )
    def test_comparison_operators(self, op, symbol):
        sql = _sql(predicate_to_clause(Company, Predicate("total_employees", 5, op)))
        assert sql == f"companies.total_employees {symbol} :total_employees_1"

    def test_contains_is_case_insensitive_like(self):
        sql = _sql(predicate_to_clause(Company, Predicate("name", "Nile", Operator.CONTAINS)))
        assert "lower(companies.name) LIKE" in sql

    def test_in_operator(self):
        sql = _sql(predicate_to_clause(Company, Predicate("location", ["a", "b"], Operator.IN)))
        assert "companies.location IN" in sql

    def test_string_operator_values_are_accepted(self):
        sql = _sql(predicate_to_clause(Company, Predicate("total_employees", 3, "ge")))
        assert sql == "companies.total_employees >= :total_employees_1"


class TestOrdering:
    def test_ascending_by_default(self):
        assert _sql(order_clause(Company, OrderBy("name"))) == "companies.name ASC"

    def test_descending(self):
        clause = order_clause(Company, OrderBy("created_at", SortDirection.DESC))
        assert _sql(clause) == "companies.created_at DESC"

    def test_unknown_order_field_rejected(self):
        with pytest.raises(ValidationError):
            order_clause(Company, OrderBy("nope"))


def test_resolve_column_returns_model_attribute():
    assert resolve_column(Company, "name") is Company.name
