import time
from dataclasses import dataclass
from typing import Callable

from jose import JWTError, jwt

from app.config import Settings


class TokenInvalid(Exception):
    """Raised when a session token cannot be trusted."""


@dataclass(frozen=True)
class TokenService:
    """Issues and verifies signed, time-limited session tokens.

    The signing key is fixed at construction time. ``clock`` returns the
    current wall-clock time in seconds and is only swapped out in tests.
    """

    secret_key: str
    algorithm: str = "HS256"
    ttl_seconds: int = 3600
    clock: Callable[[], float] = time.time

    def __post_init__(self):
        if not self.secret_key:
            raise ValueError("secret_key must not be empty")

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            ttl_seconds=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )

    def issue(self, user_id: int) -> str:
        """Sign a token for user_id.

        ``iat`` is truncated to whole seconds, so the token can lapse up to
        one second short of a full ``ttl_seconds`` after the call.
        """
        issued_at = int(self.clock())
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Return the user id a token was issued for.

        Expiry is checked here rather than by the JWT library so the
        comparison is exact against ``clock``: a token is dead from the
        second its ``exp`` is reached.
        """
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise TokenInvalid("Token signature or format is invalid") from exc

        expires_at = claims.get("exp")
        subject = claims.get("sub")
        if not isinstance(expires_at, int) or isinstance(expires_at, bool) or subject is None:
            raise TokenInvalid("Token payload is malformed")

        if self.clock() >= expires_at:
            raise TokenInvalid("Token has expired")

        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise TokenInvalid("Token subject is malformed") from exc
