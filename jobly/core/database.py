import re
import logging
from typing import Any, Dict, Sequence, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Result
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.sql.elements import TextClause

from jobly.core.config import settings

logger = logging.getLogger(__name__)

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Register models with Base.metadata.

    Schema is managed by Alembic ("alembic upgrade head").
    """
    from jobly.models import application, company, job, user  # noqa: F401


def bind_positional(sql: str, values: Sequence[Any] = ()) -> Tuple[TextClause, Dict[str, Any]]:
    """
    Convert a $1, $2, ... statement into a text() clause with named binds.

    "::" casts are escaped so text() does not read them as bind markers.

    Example:
        bind_positional("SELECT * FROM jobs WHERE id = $1", [7])
        => (text("SELECT * FROM jobs WHERE id = :p1"), {"p1": 7})
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    named = _POSITIONAL_PARAM.sub(lambda m: f":p{m.group(1)}", sql.replace("::", r"\:\:"))
    return text(named), params


def execute(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """Execute a positional-parameter statement on the session."""
    statement, params = bind_positional(sql, values)
    return db.execute(statement, params)


def dialect_name(db: Session) -> str:
    """SQLAlchemy dialect name of the session's bind ("postgresql", "sqlite")."""
    return db.get_bind().dialect.name
