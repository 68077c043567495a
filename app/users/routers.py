from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from loguru import logger

from app.database import get_db
from app.security.tokens import TokenService
from app.users import crud as user_crud, schemas
from app.users.auth import get_current_user, get_token_service
from app.users.models import User

router = APIRouter()


def _token_response(user: User, token_service: TokenService) -> schemas.TokenResponse:
    return schemas.TokenResponse(
        id=user.id,
        username=user.username,
        access_token=token_service.issue(user.id),
        expires_in=token_service.ttl_seconds,
    )


@router.post(
    "/signup",
    response_model=schemas.TokenResponse,
    status_code=status.HTTP_201_CREATED
)
def sign_up(
    credentials: schemas.UserCredentials,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    user = user_crud.register(db, credentials.username, credentials.password)
    return _token_response(user, token_service)


@router.post("/login", response_model=schemas.TokenResponse)
def login(
    credentials: schemas.UserCredentials,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    user = user_crud.verify(db, credentials.username, credentials.password)
    logger.info(f"User authenticated: {user.username}")
    return _token_response(user, token_service)


@router.get("/me", response_model=schemas.UserDisplaySchema)
def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    return current_user


@router.get("/status", response_model=schemas.UserStatusSchema)
def session_status(
    current_user: User = Depends(get_current_user),
):
    return {"user": {"username": current_user.username}}
