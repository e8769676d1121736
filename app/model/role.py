import enum
from sqlalchemy import Column, Integer, Enum
from app.model.base import Base


class RoleName(str, enum.Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    CASHIER = "CASHIER"
    WAITER = "WAITER"


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Enum(RoleName, name="role_name"), unique=True, nullable=False)

    def __repr__(self):
        return f"<Role(id={self.id}, name={self.name.value})>"
