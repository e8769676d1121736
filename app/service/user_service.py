import re
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.utils import hash_password
from app.core.exceptions import (
    DuplicateEmail,
    DuplicateUsername,
    PasswordMismatch,
    StoreNotFound,
    UnknownRole,
    UserNotFound,
)
from app.core.logger import setup_logger
from app.model.role import Role, RoleName
from app.model.store import Store
from app.model.store_schema import StoreResponse
from app.model.user import User
from app.model.user_schema import ChangePasswordRequest, UserCreate, UserResponse, UserUpdate
from app.repository import role as role_repository
from app.repository import store as store_repository
from app.repository import user as user_repository

logger = setup_logger(__name__)

# storeId value that means "take the user out of their store"
NO_STORE = 0

UNIQUE_FIELDS = ("username", "email")


def duplicate_field(error: IntegrityError) -> Optional[str]:
    """Name the unique users column an IntegrityError tripped over, if any.

    Only the constraint name (psycopg2) or the column reference in the
    message counts; the rejected value itself may contain any text.
    """
    diag = getattr(error.orig, "diag", None)
    constraint = (getattr(diag, "constraint_name", None) or "").lower()
    for field in UNIQUE_FIELDS:
        if constraint == f"users_{field}_key":
            return field

    # the first line names the constraint; later lines may echo the value
    headline = str(error.orig).lower().split("\n", 1)[0]
    for field in UNIQUE_FIELDS:
        # sqlite: "UNIQUE constraint failed: users.email"
        # postgres: ... unique constraint "users_email_key"
        if re.search(rf"users\.{field}\b|\busers_{field}_key\b", headline):
            return field
    return None


def to_user_response(user: User) -> UserResponse:
    store = None
    if user.store is not None:
        store = StoreResponse.model_validate(user.store, from_attributes=True)
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=user.role_names,
        store=store,
    )


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def list_users(self) -> List[UserResponse]:
        return [to_user_response(user) for user in user_repository.get_users(self.db)]

    def get_user(self, user_id: int) -> UserResponse:
        return to_user_response(self._get_user(user_id))

    def create_user(self, data: UserCreate) -> UserResponse:
        self.validate_unique_user_data(data.username, data.email)
        role = self._get_role_by_name(data.role)

        store = None
        if data.store_id is not None:
            store = self._get_store(data.store_id)

        user = User(
            username=data.username,
            email=data.email,
            password=hash_password(data.password),
            roles=[role],
            store=store,
        )
        user = self._save(user)
        logger.info("Created user %s (id=%s, role=%s)", user.username, user.id, role.name.value)
        return to_user_response(user)

    def update_user(self, user_id: int, data: UserUpdate) -> UserResponse:
        user = self._get_user(user_id)

        # resolve everything first so a rejected field leaves the user untouched
        if data.username is not None:
            self.validate_unique_user_data(username=data.username, exclude_user_id=user_id)
        if data.email is not None:
            self.validate_unique_user_data(email=data.email, exclude_user_id=user_id)
        role = self._get_role_by_name(data.role) if data.role is not None else None
        store = None
        if data.store_id is not None and data.store_id != NO_STORE:
            store = self._get_store(data.store_id)

        if data.username is not None:
            user.username = data.username
        if data.email is not None:
            user.email = data.email
        if role is not None:
            user.roles = [role]
        if data.store_id is not None:
            user.store = store

        user = self._save(user)
        logger.info("Updated user %s (id=%s)", user.username, user.id)
        return to_user_response(user)

    def delete_user(self, user_id: int):
        user = self._get_user(user_id)
        user_repository.delete_user(self.db, user)
        logger.info("Deleted user id=%s", user_id)

    def change_password(self, user_id: int, data: ChangePasswordRequest):
        # Administrative override: the current password is not asked for.
        if not data.is_new_password_confirmed():
            raise PasswordMismatch()

        user = self._get_user(user_id)
        user.password = hash_password(data.new_password)
        user_repository.save_user(self.db, user)
        logger.info("Password changed for user id=%s", user_id)

    def validate_unique_user_data(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
        exclude_user_id: Optional[int] = None,
    ):
        if username is not None and user_repository.username_exists(self.db, username, exclude_user_id):
            raise DuplicateUsername()
        if email is not None and user_repository.email_exists(self.db, email, exclude_user_id):
            raise DuplicateEmail()

    def _get_user(self, user_id: int) -> User:
        user = user_repository.get_user(self.db, user_id)
        if user is None:
            raise UserNotFound(f"User not found with id: {user_id}")
        return user

    def _get_store(self, store_id: int) -> Store:
        store = store_repository.get_store(self.db, store_id)
        if store is None:
            raise StoreNotFound(f"Store not found with id: {store_id}")
        return store

    def _get_role_by_name(self, role_name: str) -> Role:
        try:
            name = RoleName(role_name.strip().upper())
        except ValueError:
            raise UnknownRole(f"Role is not found: {role_name}")

        role = role_repository.get_role_by_name(self.db, name)
        if role is None:
            raise UnknownRole(f"Role is not found: {role_name}")
        return role

    def _save(self, user: User) -> User:
        try:
            return user_repository.save_user(self.db, user)
        except IntegrityError as e:
            # lost a race against a concurrent insert; the unique index decides
            self.db.rollback()
            field = duplicate_field(e)
            if field == "username":
                raise DuplicateUsername() from e
            if field == "email":
                raise DuplicateEmail() from e
            raise
