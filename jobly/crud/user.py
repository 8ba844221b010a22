"""
CRUD operations for users and their job applications.
"""

import logging
from typing import Any, Dict, List
from sqlalchemy.orm import Session

from jobly.core.database import execute
from jobly.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import build_set_clause
from jobly.crud.common import check_duplicate

logger = logging.getLogger(__name__)

PUBLIC_FIELDS = 'username, first_name AS "firstName", last_name AS "lastName", email, is_admin AS "isAdmin"'

FIELD_NAMES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def _to_user(row) -> Dict[str, Any]:
    user = dict(row)
    user["isAdmin"] = bool(user["isAdmin"])
    return user


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        UnauthorizedError: Unknown user or wrong password
    """
    row = execute(
        db,
        f"SELECT {PUBLIC_FIELDS}, password FROM users WHERE username = $1",
        [username],
    ).mappings().first()

    if row and verify_password(password, row["password"]):
        user = _to_user(row)
        del user["password"]
        return user

    raise UnauthorizedError("Invalid username/password")


def register(
    db: Session,
    username: str,
    password: str,
    first_name: str,
    last_name: str,
    email: str,
    is_admin: bool = False,
) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Raises:
        BadRequestError: The username is taken
    """
    check_duplicate(db, "users", "username", username)

    row = execute(
        db,
        f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {PUBLIC_FIELDS}""",
        [username, get_password_hash(password), first_name, last_name, email, is_admin],
    ).mappings().one()

    db.commit()
    logger.info(f"Registered user {username} (admin: {is_admin})")
    return _to_user(row)


def find_all(db: Session) -> List[Dict[str, Any]]:
    """Return all users, ordered by username."""
    rows = execute(db, f"SELECT {PUBLIC_FIELDS} FROM users ORDER BY username").mappings().all()
    return [_to_user(row) for row in rows]


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Return a user with the ids of the jobs they applied to.

    Raises:
        NotFoundError: No such user
    """
    row = execute(
        db,
        f"SELECT {PUBLIC_FIELDS} FROM users WHERE username = $1",
        [username],
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No user: {username}")

    job_ids = execute(
        db,
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        [username],
    ).scalars().all()

    user = _to_user(row)
    user["jobs"] = list(job_ids)
    return user


def update(db: Session, username: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user. A new password is hashed before storing.

    Args:
        data: Any of {firstName, lastName, password, email, isAdmin}

    Raises:
        EmptyUpdate: data is empty
        NotFoundError: No such user
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])

    set_cols, values = build_set_clause(data, FIELD_NAMES)
    username_param = f"${len(values) + 1}"

    row = execute(
        db,
        f"""UPDATE users
            SET {set_cols}
            WHERE username = {username_param}
            RETURNING {PUBLIC_FIELDS}""",
        [*values, username],
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No user: {username}")

    db.commit()
    return _to_user(row)


def remove(db: Session, username: str) -> None:
    """
    Raises:
        NotFoundError: No such user
    """
    deleted = execute(
        db,
        "DELETE FROM users WHERE username = $1 RETURNING username",
        [username],
    ).first()

    if not deleted:
        raise NotFoundError(f"No user: {username}")

    db.commit()


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: No such user or job
        BadRequestError: Already applied
    """
    job = execute(db, "SELECT id FROM jobs WHERE id = $1", [job_id]).first()
    if not job:
        raise NotFoundError(f"No job with id: {job_id}")

    user = execute(db, "SELECT username FROM users WHERE username = $1", [username]).first()
    if not user:
        raise NotFoundError(f"No user: {username}")

    existing = execute(
        db,
        "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2",
        [username, job_id],
    ).first()
    if existing:
        raise BadRequestError(f"{username} already applied to job {job_id}")

    execute(
        db,
        "INSERT INTO applications (username, job_id) VALUES ($1, $2)",
        [username, job_id],
    )
    db.commit()
