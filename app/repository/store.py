from sqlalchemy.orm import Session
from typing import List, Optional
from app.model.store import Store
from app.model.user import User


def get_stores(db: Session) -> List[Store]:
    return db.query(Store).order_by(Store.id).all()


def get_store(db: Session, store_id: int) -> Optional[Store]:
    return db.get(Store, store_id)


def save_store(db: Session, store: Store) -> Store:
    db.add(store)
    db.commit()
    db.refresh(store)
    return store


def delete_store(db: Session, store: Store) -> int:
    """Delete a store together with every user assigned to it.

    Users are removed through the ORM so their role memberships go too,
    without relying on the database honouring ON DELETE CASCADE.
    """
    users = db.query(User).filter(User.store_id == store.id).all()
    for user in users:
        db.delete(user)
    db.flush()
    db.delete(store)
    db.commit()
    return len(users)
