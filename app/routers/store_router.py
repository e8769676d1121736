from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.auth.utils import require_admin
from app.db.session import get_db
from app.model.store_schema import StoreCreate, StoreResponse, StoreUpdate
from app.model.user_schema import UserResponse
from app.service.store_service import StoreService

router = APIRouter(
    prefix="/api/admin/stores",
    tags=["Admin Stores"],
    dependencies=[Depends(require_admin)],
)


def get_store_service(db: Session = Depends(get_db)) -> StoreService:
    return StoreService(db)


@router.get("", response_model=List[StoreResponse])
def list_stores(service: StoreService = Depends(get_store_service)):
    return service.list_stores()


@router.get("/{store_id}", response_model=StoreResponse)
def get_store(store_id: int, service: StoreService = Depends(get_store_service)):
    return service.get_store(store_id)


@router.post("", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
def create_store(data: StoreCreate, service: StoreService = Depends(get_store_service)):
    return service.create_store(data)


@router.put("/{store_id}", response_model=StoreResponse)
def update_store(store_id: int, data: StoreUpdate, service: StoreService = Depends(get_store_service)):
    return service.update_store(store_id, data)


@router.delete("/{store_id}")
def delete_store(store_id: int, service: StoreService = Depends(get_store_service)):
    """Deletes the store and, with it, every user assigned to the store."""
    service.delete_store(store_id)
    return {"message": "Store deleted successfully"}


@router.get("/{store_id}/users", response_model=List[UserResponse])
def list_store_users(store_id: int, service: StoreService = Depends(get_store_service)):
    return service.list_store_users(store_id)
