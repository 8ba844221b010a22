"""
SQL fragment builder.

Compiles loosely-typed partial-update and filter payloads into parameterized
SQL fragments. Both builders are pure: they return the clause text with
positional placeholders ($1, $2, ...) and the ordered values to bind, and
never interpolate a value into the SQL string.

Callers splice the clause into a larger statement and run it through
jobly.core.database.execute. A caller that needs one more parameter after
the clause (e.g. a row id for a targeted UPDATE) numbers it
len(values) + 1.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, NamedTuple, Optional, Union

from jobly.core.exceptions import EmptyUpdate, InvalidArgument, NoValidCriteria


class SqlClause(NamedTuple):
    """A SQL fragment and the values for its placeholders, in order."""
    clause: str
    values: List[Any]


@dataclass(frozen=True)
class Comparison:
    """
    A predicate that takes an operand, e.g. Comparison("salary >=").

    substring wraps the operand in a case-insensitive substring pattern.
    When left as None it is inferred from an ILIKE operator.
    """
    operator: str
    substring: Optional[bool] = None

    @property
    def wraps_substring(self) -> bool:
        if self.substring is None:
            return "ILIKE" in self.operator
        return self.substring


@dataclass(frozen=True)
class Presence:
    """A boolean-only predicate with no operand, e.g. Presence("equity > 0")."""
    predicate: str


CriterionDefinition = Union[str, Comparison, Presence]

# Case-insensitive substring patterns per SQLAlchemy dialect name
SUBSTRING_PATTERNS = {
    "postgresql": "CONCAT('%', {}::text, '%')",
    "sqlite": "('%' || {} || '%')",
}
# SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII
LIKE_OPERATORS = {
    "postgresql": "ILIKE",
    "sqlite": "LIKE",
}
DEFAULT_DIALECT = "postgresql"


def build_set_clause(update: Mapping[str, Any], field_name_map: Mapping[str, str]) -> SqlClause:
    """
    Build the column list of an UPDATE ... SET statement.

    Args:
        update: Logical field names mapped to their new values. Insertion
            order decides column and placeholder order. None is a value.
        field_name_map: Logical field names mapped to column names. Fields
            missing from it use their logical name as the column.

    Returns:
        SqlClause, e.g. for ({"firstName": "Aliya", "age": 32},
        {"firstName": "first_name"}):
        ('"first_name"=$1, "age"=$2', ['Aliya', 32])

    Raises:
        InvalidArgument: Either argument is missing or not a mapping
        EmptyUpdate: update has no entries
    """
    _validate_set_args(update, field_name_map)

    columns = []
    for idx, field_name in enumerate(update, start=1):
        column = field_name_map.get(field_name, field_name)
        columns.append(f'"{column}"=${idx}')

    return SqlClause(", ".join(columns), list(update.values()))


def _validate_set_args(update, field_name_map) -> None:
    if update is None or field_name_map is None:
        raise InvalidArgument("Missing args")

    if not isinstance(update, Mapping) or not isinstance(field_name_map, Mapping):
        raise InvalidArgument("Args must be mappings")

    if not update:
        raise EmptyUpdate("No data")


def build_where_clause(
    criteria: Mapping[str, Any],
    criterion_map: Mapping[str, CriterionDefinition],
    dialect: str = DEFAULT_DIALECT,
) -> SqlClause:
    """
    Build a WHERE clause joining the recognized criteria with AND.

    Keys of criteria that are not in criterion_map are ignored. For the
    recognized ones:

    - False or "false" drops the criterion ("don't filter on this").
    - A Presence predicate (or a plain string fragment given True/"true")
      is emitted as-is and consumes no placeholder.
    - Anything else binds the value to the next placeholder. Substring
      comparisons (ILIKE) wrap it in a %...% pattern for the dialect.

    Returns:
        SqlClause. The clause is "" when every recognized criterion was
        dropped.

    Raises:
        NoValidCriteria: No key of criteria is in criterion_map
    """
    valid = [name for name in criteria if name in criterion_map]
    if not valid:
        raise NoValidCriteria("Could not filter by criteria provided")

    conditions = []
    values = []

    for name in valid:
        value = criteria[name]
        if _is_false(value):
            continue

        definition = _resolve(criterion_map[name], value)
        if isinstance(definition, Presence):
            conditions.append(definition.predicate)
            continue

        values.append(value)
        placeholder = f"${len(values)}"
        conditions.append(_render_comparison(definition, placeholder, dialect))

    where_clause = "WHERE " + " AND ".join(conditions) if conditions else ""
    return SqlClause(where_clause, values)


def _is_false(value) -> bool:
    return value is False or (isinstance(value, str) and value == "false")


def _is_true(value) -> bool:
    return value is True or (isinstance(value, str) and value == "true")


def _resolve(definition: CriterionDefinition, value) -> Union[Comparison, Presence]:
    """Turn a plain string fragment into a tagged definition."""
    if isinstance(definition, (Comparison, Presence)):
        return definition
    if _is_true(value):
        return Presence(definition)
    return Comparison(definition)


def _render_comparison(definition: Comparison, placeholder: str, dialect: str) -> str:
    if not definition.wraps_substring:
        return f"{definition.operator} {placeholder}"

    operator = definition.operator.replace(
        "ILIKE", LIKE_OPERATORS.get(dialect, LIKE_OPERATORS[DEFAULT_DIALECT])
    )
    pattern = SUBSTRING_PATTERNS.get(dialect, SUBSTRING_PATTERNS[DEFAULT_DIALECT])
    return f"{operator} {pattern.format(placeholder)}"
