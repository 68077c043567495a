from passlib.context import CryptContext

# pbkdf2_sha256 is pure Python (no native backend to break across releases)
# and draws a fresh random salt on every hash() call
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """Return a salted PBKDF2-SHA256 hash for plain_password."""
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, stored_hash: str) -> bool:
    """Verify a candidate password against a stored hash."""
    try:
        return pwd_context.verify(plain_password, stored_hash)
    except (ValueError, TypeError):
        # Malformed or unrecognised stored hash
        return False


def dummy_verify() -> None:
    """Spend roughly one verification's worth of work without a real hash."""
    pwd_context.dummy_verify()
