from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from loguru import logger

from app.errors import DuplicateUsername, InvalidCredentials, MissingField
from app.security.passwords import dummy_verify, hash_password, verify_password
from app.users.models import User


def normalize_username(username: str) -> str:
    return (username or "").strip().lower()


def get_user_by_username(db: Session, username: str):
    return db.query(User).filter(User.username == username).first()


def get_user_by_id(db: Session, user_id: int):
    return db.get(User, user_id)


def register(db: Session, username: str, password: str) -> User:
    """Create a user with a salted password hash.

    The hash is computed here, before anything touches the database, so the
    plaintext never reaches the model.
    """
    username = normalize_username(username)
    if not username or not password:
        raise MissingField("Username and password are required")

    if get_user_by_username(db, username):
        raise DuplicateUsername()

    new_user = User(
        username=username,
        hashed_password=hash_password(password),
    )
    try:
        db.add(new_user)
        db.commit()
    except IntegrityError as exc:
        # Lost a race against a concurrent signup for the same name
        db.rollback()
        raise DuplicateUsername() from exc
    db.refresh(new_user)

    logger.info(f"User registered: {username}")
    return new_user


def verify(db: Session, username: str, password: str) -> User:
    """Return the user for a username/password pair.

    Unknown usernames and wrong passwords raise the same error.
    """
    username = normalize_username(username)
    if not username or not password:
        raise MissingField("Username and password are required")

    user = get_user_by_username(db, username)

    if user is None:
        dummy_verify()
        logger.warning(f"Authentication denied for username: {username}")
        raise InvalidCredentials()

    if not verify_password(password, user.hashed_password):
        logger.warning(f"Authentication denied for username: {username}")
        raise InvalidCredentials()

    return user
