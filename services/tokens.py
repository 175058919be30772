from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict

from jose import JWTError, jwt

from core.config import AppSettings
from core.errors import InvalidToken, TokenExpired
from schemas.auth import TokenData


Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """Mints and verifies the signed, self-contained identity token.

    Tokens carry ``userId``, ``email``, ``iat`` and ``exp`` and are checked by
    signature and expiry only; resolving the user is the auth gate's job.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=7),
        clock: Clock = utcnow,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: AppSettings, *, clock: Clock = utcnow) -> "TokenCodec":
        return cls(
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(days=settings.access_token_expire_days),
            clock=clock,
        )

    def mint(self, user_id: str, email: str) -> str:
        issued = int(self._clock().timestamp())
        claims: Dict[str, Any] = {
            "userId": str(user_id),
            "email": email,
            "iat": issued,
            "exp": issued + int(self._ttl.total_seconds()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenData:
        try:
            # Expiry is checked below against our own clock
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidToken() from exc

        user_id, email = claims.get("userId"), claims.get("email")
        issued, expiry = claims.get("iat"), claims.get("exp")
        if not user_id or email is None or not isinstance(expiry, int) or not isinstance(issued, int):
            raise InvalidToken()

        if int(self._clock().timestamp()) > expiry:
            raise TokenExpired()

        return TokenData(
            user_id=str(user_id),
            email=str(email),
            issued_at=datetime.fromtimestamp(issued, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(expiry, tz=timezone.utc),
        )
