"""
Unit tests for the partial-update and filter builders.
"""
import pytest

from app.errors import BadRequestError, EmptyInputError
from app.query_builder import (
    COMPANY_COLUMNS,
    JOB_COLUMNS,
    USER_COLUMNS,
    UNBOUND,
    Predicate,
    build_company_filter,
    build_job_filter,
    build_where,
    sql_for_partial_update,
)


class TestPartialUpdate:
    """Test sql_for_partial_update."""

    def test_job_update_scenario(self):
        update = sql_for_partial_update(
            {"title": "senior librarian", "salary": 85000, "equity": 0},
            {"companyHandle": "company_handle"},
        )
        assert update.assignments == ["title = $1", "salary = $2", "equity = $3"]
        assert update.values == ["senior librarian", 85000, 0]

    def test_maps_columns(self):
        update = sql_for_partial_update({"firstName": "Aliya", "age": 32}, USER_COLUMNS)
        assert update.assignments == ["first_name = $1", "age = $2"]
        assert update.values == ["Aliya", 32]

    def test_empty_mapping_uses_field_names(self):
        update = sql_for_partial_update({"numEmployees": 10}, {})
        assert update.assignments == ["numEmployees = $1"]

    def test_preserves_insertion_order(self):
        fields = {"logoUrl": "http://x.img", "name": "X", "numEmployees": 3}
        update = sql_for_partial_update(fields, COMPANY_COLUMNS)
        assert update.assignments == ["logo_url = $1", "name = $2", "num_employees = $3"]
        assert update.values == ["http://x.img", "X", 3]

    def test_null_values_pass_through(self):
        update = sql_for_partial_update({"title": "x", "salary": None, "equity": None}, JOB_COLUMNS)
        assert update.values == ["x", None, None]
        assert len(update.assignments) == 3

    @pytest.mark.parametrize("columns", [{}, JOB_COLUMNS, None])
    def test_empty_fields_rejected(self, columns):
        with pytest.raises(EmptyInputError):
            sql_for_partial_update({}, columns)

    def test_empty_input_is_bad_request(self):
        with pytest.raises(BadRequestError):
            sql_for_partial_update({}, JOB_COLUMNS)

    def test_set_clause_and_next_index(self):
        update = sql_for_partial_update({"title": "a", "salary": 1}, JOB_COLUMNS)
        assert update.set_clause == "title = $1, salary = $2"
        assert update.next_index == 3

    def test_lengths_match_field_count(self):
        fields = {f"f{i}": i for i in range(12)}
        update = sql_for_partial_update(fields)
        assert len(update.assignments) == len(update.values) == 12
        assert update.assignments[-1] == "f11 = $12"

    def test_deterministic(self):
        fields = {"title": "x", "companyHandle": "c1"}
        assert sql_for_partial_update(fields, JOB_COLUMNS) == sql_for_partial_update(fields, JOB_COLUMNS)

    def test_column_mappings_are_read_only(self):
        with pytest.raises(TypeError):
            JOB_COLUMNS["title"] = "job_title"


class TestBuildWhere:
    """Test predicate assembly."""

    def test_unbound_predicate_uses_no_placeholder(self):
        result = build_where([Predicate("a = {}", 1), Predicate("b > 0"), Predicate("c = {}", 2)])
        assert result.clause == "a = $1 AND b > 0 AND c = $2"
        assert result.values == [1, 2]

    def test_start_offset(self):
        result = build_where([Predicate("a = {}", "x")], start=4)
        assert result.clause == "a = $4"

    def test_empty(self):
        result = build_where([])
        assert result.clause == ""
        assert result.values == []
        assert not result
        assert result.where == ""

    def test_none_is_a_bound_value(self):
        predicate = Predicate("a IS NOT DISTINCT FROM {}", None)
        assert predicate.is_bound
        assert Predicate("b > 0").value is UNBOUND
        assert build_where([predicate]).values == [None]


class TestJobFilter:
    """Test build_job_filter."""

    def test_all_three(self):
        result = build_job_filter({"title": "engineer", "minSalary": 1000, "hasEquity": True})
        assert result.clause == "title ILIKE $1 AND salary >= $2 AND equity > 0"
        assert result.values == ["%engineer%", 1000]
        assert result.where == "WHERE title ILIKE $1 AND salary >= $2 AND equity > 0"

    def test_fixed_order_regardless_of_input_order(self):
        result = build_job_filter({"hasEquity": True, "minSalary": 5, "title": "x"})
        assert result.clause == "title ILIKE $1 AND salary >= $2 AND equity > 0"

    def test_has_equity_only(self):
        result = build_job_filter({"hasEquity": True})
        assert result.clause == "equity > 0"
        assert result.values == []

    def test_has_equity_false_adds_nothing(self):
        assert not build_job_filter({"hasEquity": False})
        result = build_job_filter({"hasEquity": False, "minSalary": 55000})
        assert result.clause == "salary >= $1"
        assert result.values == [55000]

    def test_min_salary_zero_is_a_filter(self):
        result = build_job_filter({"minSalary": 0})
        assert result.clause == "salary >= $1"
        assert result.values == [0]

    def test_empty_title_ignored(self):
        assert not build_job_filter({"title": ""})

    def test_empty_spec(self):
        result = build_job_filter({})
        assert result.clause == ""
        assert result.where == ""

    def test_title_is_bound_not_interpolated(self):
        result = build_job_filter({"title": "x'; DROP TABLE jobs; --"})
        assert "DROP" not in result.clause
        assert result.values == ["%x'; DROP TABLE jobs; --%"]


class TestCompanyFilter:
    """Test build_company_filter."""

    def test_all_three(self):
        result = build_company_filter({"maxEmployees": 500, "nameLike": "net", "minEmployees": 10})
        assert result.clause == "name ILIKE $1 AND num_employees >= $2 AND num_employees <= $3"
        assert result.values == ["%net%", 10, 500]

    def test_max_only(self):
        result = build_company_filter({"maxEmployees": 2})
        assert result.clause == "num_employees <= $1"

    def test_empty(self):
        assert not build_company_filter({})
