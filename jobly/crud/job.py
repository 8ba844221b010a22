"""
CRUD operations for jobs.

Implements the Repository pattern over hand-written parameterized SQL;
rows come back as dicts keyed the way the API exposes them.
"""

from typing import Any, Dict, List
from sqlalchemy.orm import Session

from jobly.core.database import dialect_name, execute
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import Comparison, Presence, build_set_clause, build_where_clause
from jobly.schemas.job import JobCreateRequest

PUBLIC_FIELDS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# Query-string criteria -> predicates
FILTERS = {
    "title": Comparison("title ILIKE"),
    "minSalary": Comparison("salary >="),
    "hasEquity": Presence("equity > 0"),
}

# API field names -> column names, where they differ
FIELD_NAMES = {
    "companyHandle": "company_handle",
}


def create(db: Session, job_data: JobCreateRequest) -> Dict[str, Any]:
    """
    Create a new job for an existing company.

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        BadRequestError: The company does not exist
    """
    company = execute(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [job_data.company_handle],
    ).first()

    if not company:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    job = execute(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {PUBLIC_FIELDS}""",
        [job_data.title, job_data.salary, job_data.equity, job_data.company_handle],
    ).mappings().one()

    db.commit()
    return dict(job)


def find_all(db: Session) -> List[Dict[str, Any]]:
    """Return all jobs, ordered by title."""
    rows = execute(db, f"SELECT {PUBLIC_FIELDS} FROM jobs ORDER BY title").mappings().all()
    return [dict(row) for row in rows]


def filter_by(db: Session, criteria: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Return jobs matching the recognized criteria, ordered by title.

    Criteria: title (case-insensitive substring), minSalary, hasEquity.

    Raises:
        NoValidCriteria: None of the criteria are recognized
    """
    where_clause, values = build_where_clause(criteria, FILTERS, dialect_name(db))

    rows = execute(
        db,
        f"SELECT {PUBLIC_FIELDS} FROM jobs {where_clause} ORDER BY title",
        values,
    ).mappings().all()
    return [dict(row) for row in rows]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Raises:
        NotFoundError: No such job
    """
    job = execute(db, f"SELECT {PUBLIC_FIELDS} FROM jobs WHERE id = $1", [job_id]).mappings().first()

    if not job:
        raise NotFoundError(f"No job with id: {job_id}")

    return dict(job)


def update(db: Session, job_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job.

    Args:
        data: Any of {title, salary, equity}

    Raises:
        EmptyUpdate: data is empty
        NotFoundError: No such job
    """
    set_cols, values = build_set_clause(data, FIELD_NAMES)
    id_param = f"${len(values) + 1}"

    job = execute(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE id = {id_param}
            RETURNING {PUBLIC_FIELDS}""",
        [*values, job_id],
    ).mappings().first()

    if not job:
        raise NotFoundError(f"No job with id: {job_id}")

    db.commit()
    return dict(job)


def remove(db: Session, job_id: int) -> None:
    """
    Raises:
        NotFoundError: No such job
    """
    deleted = execute(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id]).first()

    if not deleted:
        raise NotFoundError(f"No job with id: {job_id}")

    db.commit()
