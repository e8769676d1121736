from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Optional, Set
from app.model.store_schema import StoreResponse


class UserCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    store_id: Optional[int] = Field(None, alias="storeId")


class UserUpdate(BaseModel):
    """Partial update: a missing or blank field leaves the stored value as is.

    ``store_id`` of 0 clears the store assignment.
    """

    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[str] = None
    store_id: Optional[int] = Field(None, alias="storeId", ge=0)

    @field_validator("username", "email", "role", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_password: str = Field(..., alias="newPassword", min_length=1)
    confirm_password: str = Field(..., alias="confirmPassword")

    def is_new_password_confirmed(self) -> bool:
        return self.new_password == self.confirm_password


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    roles: Set[str]
    store: Optional[StoreResponse] = None


class UserDetailsResponse(BaseModel):
    id: int
    username: str
    email: str
    roles: List[str]


class UserLogin(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    csrf_token: Optional[str] = Field(None, alias="csrfToken")
    message: str
