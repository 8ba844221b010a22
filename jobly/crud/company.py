"""
CRUD operations for companies.
"""

from typing import Any, Dict, List
from sqlalchemy.orm import Session

from jobly.core.database import dialect_name, execute
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import Comparison, build_set_clause, build_where_clause
from jobly.crud.common import check_duplicate
from jobly.schemas.company import CompanyCreateRequest

PUBLIC_FIELDS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'

FILTERS = {
    "name": Comparison("name ILIKE"),
    "minEmployees": Comparison("num_employees >="),
    "maxEmployees": Comparison("num_employees <="),
}

FIELD_NAMES = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def create(db: Session, company_data: CompanyCreateRequest) -> Dict[str, Any]:
    """
    Create a company.

    Raises:
        BadRequestError: The handle or name is already taken
    """
    check_duplicate(db, "companies", "handle", company_data.handle)
    check_duplicate(db, "companies", "name", company_data.name)

    company = execute(
        db,
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {PUBLIC_FIELDS}""",
        [
            company_data.handle,
            company_data.name,
            company_data.description,
            company_data.num_employees,
            company_data.logo_url,
        ],
    ).mappings().one()

    db.commit()
    return dict(company)


def find_all(db: Session) -> List[Dict[str, Any]]:
    """Return all companies, ordered by name."""
    rows = execute(db, f"SELECT {PUBLIC_FIELDS} FROM companies ORDER BY name").mappings().all()
    return [dict(row) for row in rows]


def filter_by(db: Session, criteria: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Return companies matching the recognized criteria, ordered by name.

    Criteria: name (case-insensitive substring), minEmployees, maxEmployees.
    Employee counts are expected already typed, as CompanyFilter leaves them.

    Raises:
        BadRequestError: minEmployees is greater than maxEmployees
        NoValidCriteria: None of the criteria are recognized
    """
    min_employees = criteria.get("minEmployees")
    max_employees = criteria.get("maxEmployees")
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    where_clause, values = build_where_clause(criteria, FILTERS, dialect_name(db))

    rows = execute(
        db,
        f"SELECT {PUBLIC_FIELDS} FROM companies {where_clause} ORDER BY name",
        values,
    ).mappings().all()
    return [dict(row) for row in rows]


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Return a company with its jobs.

    Raises:
        NotFoundError: No such company
    """
    company = execute(
        db,
        f"SELECT {PUBLIC_FIELDS} FROM companies WHERE handle = $1",
        [handle],
    ).mappings().first()

    if not company:
        raise NotFoundError(f"No company: {handle}")

    jobs = execute(
        db,
        "SELECT id, title, salary, equity FROM jobs WHERE company_handle = $1 ORDER BY id",
        [handle],
    ).mappings().all()

    return {**company, "jobs": [dict(job) for job in jobs]}


def update(db: Session, handle: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company.

    Args:
        data: Any of {name, description, numEmployees, logoUrl}

    Raises:
        EmptyUpdate: data is empty
        BadRequestError: Another company already has the new name
        NotFoundError: No such company
    """
    if data.get("name") is not None:
        check_duplicate(db, "companies", "name", data["name"], exclude=("handle", handle))

    set_cols, values = build_set_clause(data, FIELD_NAMES)
    handle_param = f"${len(values) + 1}"

    company = execute(
        db,
        f"""UPDATE companies
            SET {set_cols}
            WHERE handle = {handle_param}
            RETURNING {PUBLIC_FIELDS}""",
        [*values, handle],
    ).mappings().first()

    if not company:
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    return dict(company)


def remove(db: Session, handle: str) -> None:
    """
    Raises:
        NotFoundError: No such company
    """
    deleted = execute(
        db,
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle],
    ).first()

    if not deleted:
        raise NotFoundError(f"No company: {handle}")

    db.commit()
