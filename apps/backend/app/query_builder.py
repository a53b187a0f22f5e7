"""
SQL fragment builders shared by the repositories.

Two builders live here:
- sql_for_partial_update: sparse field map -> "column = $n" assignments
- build_where / build_job_filter / build_company_filter: optional filter
  keys -> conjunctive WHERE clause

All user-supplied values travel in the returned `values` list and are bound
positionally by the database layer; nothing here puts user data in SQL text.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from app.errors import EmptyInputError

# Sentinel for predicates that bind no value (None is a legal bound value).
UNBOUND = object()


def column_mapping(**columns: str) -> Mapping[str, str]:
    """Read-only field -> column map for one entity."""
    return MappingProxyType(dict(columns))


JOB_COLUMNS = column_mapping(companyHandle="company_handle")
COMPANY_COLUMNS = column_mapping(numEmployees="num_employees", logoUrl="logo_url")
USER_COLUMNS = column_mapping(firstName="first_name", lastName="last_name", isAdmin="is_admin")


@dataclass(frozen=True)
class PartialUpdate:
    assignments: list[str]
    values: list[Any]

    @property
    def set_clause(self) -> str:
        return ", ".join(self.assignments)

    @property
    def next_index(self) -> int:
        """Placeholder index available for the statement's own parameters."""
        return len(self.values) + 1


def sql_for_partial_update(fields: Mapping[str, Any], columns: Optional[Mapping[str, str]] = None) -> PartialUpdate:
    """
    Build the SET part of an UPDATE from a sparse field map.

    Fields are visited in insertion order; a field missing from `columns`
    uses its own name as the column. Explicit None values are kept.

        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        PartialUpdate(assignments=['first_name = $1', 'age = $2'], values=['Aliya', 32])

    Raises:
        EmptyInputError: if `fields` is empty
    """
    if not fields:
        raise EmptyInputError("No data")

    columns = columns or {}
    assignments = []
    values = []
    for key, value in fields.items():
        values.append(value)
        assignments.append(f"{columns.get(key, key)} = ${len(values)}")

    return PartialUpdate(assignments=assignments, values=values)


@dataclass(frozen=True)
class Predicate:
    """
    One WHERE condition. `template` holds a single "{}" where the
    placeholder goes, unless the predicate binds nothing.
    """
    template: str
    value: Any = UNBOUND

    @property
    def is_bound(self) -> bool:
        return self.value is not UNBOUND


@dataclass(frozen=True)
class FilterClause:
    clause: str = ""
    values: list[Any] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.clause)

    @property
    def where(self) -> str:
        return f"WHERE {self.clause}" if self.clause else ""


def build_where(predicates: list[Predicate], start: int = 1) -> FilterClause:
    """
    AND together predicates in the order given.

    Only bound predicates consume a placeholder index, beginning at `start`.
    An empty list gives an empty clause; callers must then skip WHERE.
    """
    parts = []
    values = []
    for predicate in predicates:
        if predicate.is_bound:
            values.append(predicate.value)
            parts.append(predicate.template.format(f"${start + len(values) - 1}"))
        else:
            parts.append(predicate.template)

    return FilterClause(clause=" AND ".join(parts), values=values)


def job_filter_predicates(spec: Mapping[str, Any]) -> list[Predicate]:
    """title -> minSalary -> hasEquity, whatever order `spec` uses."""
    predicates = []

    title = spec.get("title")
    if title:
        predicates.append(Predicate("title ILIKE {}", f"%{title}%"))

    min_salary = spec.get("minSalary")
    if min_salary is not None:
        predicates.append(Predicate("salary >= {}", min_salary))

    # hasEquity=False is the same as leaving it out
    if spec.get("hasEquity") is True:
        predicates.append(Predicate("equity > 0"))

    return predicates


def company_filter_predicates(spec: Mapping[str, Any]) -> list[Predicate]:
    """nameLike -> minEmployees -> maxEmployees."""
    predicates = []

    name_like = spec.get("nameLike")
    if name_like:
        predicates.append(Predicate("name ILIKE {}", f"%{name_like}%"))

    min_employees = spec.get("minEmployees")
    if min_employees is not None:
        predicates.append(Predicate("num_employees >= {}", min_employees))

    max_employees = spec.get("maxEmployees")
    if max_employees is not None:
        predicates.append(Predicate("num_employees <= {}", max_employees))

    return predicates


def build_job_filter(spec: Mapping[str, Any], start: int = 1) -> FilterClause:
    return build_where(job_filter_predicates(spec), start=start)


def build_company_filter(spec: Mapping[str, Any], start: int = 1) -> FilterClause:
    return build_where(company_filter_predicates(spec), start=start)
