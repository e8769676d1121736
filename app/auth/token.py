from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Iterable, Optional, Tuple

from jose import jwt, JWTError

from app.core.config import settings
from app.core.exceptions import InvalidToken


@dataclass(frozen=True)
class TokenClaims:
    username: str
    roles: Tuple[str, ...]
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """Signs and verifies stateless JWTs.

    Nothing is stored server side: a token is valid as long as its signature
    checks out and ``exp`` lies in the future.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", ttl_ms: int = 86400000):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self._ttl_ms = ttl_ms

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_ms // 1000

    def generate_token(self, username: str, roles: Iterable[str] = (), now: Optional[datetime] = None) -> str:
        issued_at = int((now or datetime.now(timezone.utc)).timestamp())
        to_encode = {
            "sub": username,
            "roles": sorted(roles),
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidToken() from e

        username = payload.get("sub")
        if not username or "exp" not in payload:
            raise InvalidToken("Invalid token: no subject")

        issued_at = payload.get("iat", payload["exp"] - self.ttl_seconds)
        return TokenClaims(
            username=username,
            roles=tuple(payload.get("roles") or ()),
            issued_at=datetime.fromtimestamp(issued_at, timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], timezone.utc),
        )


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        ttl_ms=settings.ACCESS_TOKEN_EXPIRE_MS,
    )
