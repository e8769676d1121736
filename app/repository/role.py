from sqlalchemy.orm import Session
from typing import Optional
from app.model.role import Role, RoleName


def get_role_by_name(db: Session, name: RoleName) -> Optional[Role]:
    return db.query(Role).filter(Role.name == name).first()


def ensure_roles(db: Session):
    """Insert any missing reference roles. Returns the names that were added."""
    existing = {role.name for role in db.query(Role).all()}
    added = []
    for name in RoleName:
        if name not in existing:
            db.add(Role(name=name))
            added.append(name.value)
    if added:
        db.commit()
    return added
