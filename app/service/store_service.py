from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import StoreNotFound
from app.core.logger import setup_logger
from app.model.store import Store
from app.model.store_schema import StoreCreate, StoreResponse, StoreUpdate
from app.model.user_schema import UserResponse
from app.repository import store as store_repository
from app.repository import user as user_repository
from app.service.user_service import to_user_response

logger = setup_logger(__name__)


def to_store_response(store: Store) -> StoreResponse:
    return StoreResponse.model_validate(store, from_attributes=True)


class StoreService:
    def __init__(self, db: Session):
        self.db = db

    def list_stores(self) -> List[StoreResponse]:
        return [to_store_response(store) for store in store_repository.get_stores(self.db)]

    def get_store(self, store_id: int) -> StoreResponse:
        return to_store_response(self._get_store(store_id))

    def create_store(self, data: StoreCreate) -> StoreResponse:
        store = Store(name=data.name, latitude=data.latitude, longitude=data.longitude)
        store = store_repository.save_store(self.db, store)
        logger.info("Created store %s (id=%s)", store.name, store.id)
        return to_store_response(store)

    def update_store(self, store_id: int, data: StoreUpdate) -> StoreResponse:
        store = self._get_store(store_id)
        store.name = data.name
        store.latitude = data.latitude
        store.longitude = data.longitude
        store = store_repository.save_store(self.db, store)
        logger.info("Updated store id=%s", store.id)
        return to_store_response(store)

    def delete_store(self, store_id: int):
        """Delete a store. Every user assigned to it is deleted as well."""
        store = self._get_store(store_id)
        removed = store_repository.delete_store(self.db, store)
        logger.warning("Deleted store id=%s and %d assigned user(s)", store_id, removed)

    def list_store_users(self, store_id: int) -> List[UserResponse]:
        store = self._get_store(store_id)
        return [to_user_response(user) for user in user_repository.get_users(self.db, store_id=store.id)]

    def _get_store(self, store_id: int) -> Store:
        store = store_repository.get_store(self.db, store_id)
        if store is None:
            raise StoreNotFound(f"Store not found with id: {store_id}")
        return store
