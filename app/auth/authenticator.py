from dataclasses import dataclass, field
from typing import FrozenSet

from sqlalchemy.orm import Session

from app.auth.utils import dummy_verify, verify_password
from app.core.exceptions import InvalidCredentials
from app.core.logger import setup_logger
from app.repository.user import get_user_by_name

logger = setup_logger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: int
    username: str
    email: str
    roles: FrozenSet[str] = field(default_factory=frozenset)


class Authenticator:
    def __init__(self, db: Session):
        self.db = db

    def authenticate(self, username: str, password: str) -> AuthenticatedUser:
        """Check a username/password pair against the stored hash.

        Unknown users and wrong passwords raise the very same
        ``InvalidCredentials`` so callers cannot tell them apart.
        """
        user = get_user_by_name(self.db, username=username) if username else None

        if user is None:
            dummy_verify()
            logger.warning("Login failed for username=%r", username)
            raise InvalidCredentials()

        if not verify_password(password, user.password):
            logger.warning("Login failed for username=%r", username)
            raise InvalidCredentials()

        logger.info("User %s authenticated", user.username)
        return AuthenticatedUser(
            id=user.id,
            username=user.username,
            email=user.email,
            roles=frozenset(user.role_names),
        )
