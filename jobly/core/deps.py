"""
FastAPI dependencies for authentication and authorization.

authenticate_jwt reads the token payload if one is present; the ensure_*
dependencies build on it to protect endpoints. The payload already holds
the username and admin flag, so none of these touch the database.

query_filters builds the dependency that parses search query strings.
"""

import logging
from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import BaseModel, ValidationError
from typing import Callable, Optional, Type

from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>), optional
security = HTTPBearer(auto_error=False)


async def authenticate_jwt(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """
    Return the token payload ({"username", "isAdmin", ...}) if a valid
    bearer token was sent, otherwise None.

    It is not an error to send no token or an invalid one.
    """
    if not credentials:
        return None

    try:
        return decode_token(credentials.credentials.strip())
    except JWTError as e:
        logger.debug(f"Ignoring invalid token: {e}")
        return None


async def ensure_logged_in(user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """
    Require a logged-in user.

    Raises:
        UnauthorizedError: No valid token
    """
    if not user:
        raise UnauthorizedError()
    return user


async def ensure_admin(user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """
    Require an admin user.

    Raises:
        UnauthorizedError: No valid token, or the user is not an admin
    """
    if user and user.get("isAdmin"):
        return user
    raise UnauthorizedError()


async def ensure_correct_user_or_admin(
    username: str,
    user: Optional[dict] = Depends(authenticate_jwt),
) -> dict:
    """
    Require the user named in the path (the `username` path parameter)
    or an admin.

    Raises:
        UnauthorizedError: Anyone else
    """
    if user and (user.get("username") == username or user.get("isAdmin")):
        return user
    raise UnauthorizedError()


def query_filters(schema: Type[BaseModel]) -> Callable[[Request], dict]:
    """
    Build a dependency that validates the raw query string with `schema`.

    Returns the provided parameters keyed by their public (camelCase) names,
    unknown parameters included, so the filter builder can tell "nothing
    usable" apart from "no filters at all".
    """
    def dependency(request: Request) -> dict:
        try:
            filters = schema.model_validate(dict(request.query_params))
        except ValidationError as e:
            raise RequestValidationError(e.errors(include_url=False))
        provided = filters.model_dump(by_alias=True, exclude_unset=True)
        provided.update(filters.model_extra or {})
        return provided

    return dependency
