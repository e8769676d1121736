from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.auth.utils import require_admin
from app.db.session import get_db
from app.model.user_schema import ChangePasswordRequest, UserCreate, UserResponse, UserUpdate
from app.service.user_service import UserService

router = APIRouter(
    prefix="/api/admin/users",
    tags=["Admin Users"],
    dependencies=[Depends(require_admin)],
)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("", response_model=List[UserResponse])
def list_users(service: UserService = Depends(get_user_service)):
    return service.list_users()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return service.get_user(user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    return service.create_user(data)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, data: UserUpdate, service: UserService = Depends(get_user_service)):
    return service.update_user(user_id, data)


@router.put("/{user_id}/password")
def change_password(user_id: int, data: ChangePasswordRequest, service: UserService = Depends(get_user_service)):
    service.change_password(user_id, data)
    return {"message": "Password changed successfully"}


@router.delete("/{user_id}")
def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    service.delete_user(user_id)
    return {"message": "User deleted successfully"}
