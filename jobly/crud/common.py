"""
Helpers shared by the CRUD modules.
"""

from typing import Any, Optional, Tuple
from sqlalchemy.orm import Session

from jobly.core.database import execute
from jobly.core.exceptions import BadRequestError


def check_duplicate(
    db: Session,
    table: str,
    column: str,
    value,
    exclude: Optional[Tuple[str, Any]] = None,
) -> None:
    """
    Raise if a row in `table` already has `value` in `column`.

    Table and column names are interpolated, so they must come from code,
    never from a request.

    Args:
        exclude: (key_column, key) of a row to skip, e.g. the row being
            updated

    Raises:
        BadRequestError: A matching row exists
    """
    sql = f"SELECT {column} FROM {table} WHERE {column} = $1"
    values = [value]
    if exclude:
        key_column, key = exclude
        sql += f" AND {key_column} <> $2"
        values.append(key)

    duplicate = execute(db, sql, values).first()

    if duplicate:
        raise BadRequestError(f"Duplicate: {value} already exists in {table}")
