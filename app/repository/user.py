from sqlalchemy.orm import Session
from typing import List, Optional
from app.model.user import User


def get_user_by_name(db: Session, username: str = None, id: int = None) -> Optional[User]:
    query = db.query(User)
    if id is not None:
        query = query.filter(User.id == id)
    if username:
        query = query.filter(User.username == username)
    return query.first()


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_users(db: Session, store_id: Optional[int] = None) -> List[User]:
    query = db.query(User)
    if store_id is not None:
        query = query.filter(User.store_id == store_id)
    return query.order_by(User.id).all()


def username_exists(db: Session, username: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(User.id).filter(User.username == username)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return db.query(query.exists()).scalar()


def email_exists(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return db.query(query.exists()).scalar()


def save_user(db: Session, user: User) -> User:
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user: User):
    db.delete(user)
    db.commit()
