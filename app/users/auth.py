from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session
from loguru import logger

from app.database import get_db
from app.errors import Unauthenticated
from app.security.tokens import TokenInvalid, TokenService
from app.users import crud as user_crud
from app.users.models import User

BEARER_PREFIX = "Bearer "

# Reads the raw header so the prefix check stays exact; auto_error is off so
# a missing header goes through the same Unauthenticated path as a bad one
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthenticated("Access denied. No token provided.")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise Unauthenticated("Access denied. No token provided.")
    return token


def get_current_user(
    authorization: str | None = Depends(authorization_header),
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> User:
    token = extract_bearer_token(authorization)

    try:
        user_id = token_service.verify(token)
    except TokenInvalid as exc:
        logger.warning(f"Rejected session token: {exc}")
        raise Unauthenticated("Invalid or expired token") from exc

    user = user_crud.get_user_by_id(db, user_id)
    if user is None:
        logger.warning(f"Session token refers to missing user id {user_id}")
        raise Unauthenticated("User not found")

    return user
