from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logger import setup_logger
from app.model.base import Base
from app.model.role import RoleName
from app.model.user_schema import UserCreate
from app.repository.role import ensure_roles
from app.repository.user import get_user_by_name
from app.service.user_service import UserService

# registers every table on Base.metadata
import app.model.role  # noqa: F401
import app.model.store  # noqa: F401
import app.model.user  # noqa: F401

logger = setup_logger(__name__)


def create_tables(engine):
    Base.metadata.create_all(bind=engine)


def bootstrap_admin(db: Session):
    if not (settings.ADMIN_USERNAME and settings.ADMIN_PASSWORD and settings.ADMIN_EMAIL):
        return None
    if get_user_by_name(db, username=settings.ADMIN_USERNAME):
        return None

    admin = UserService(db).create_user(UserCreate(
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        password=settings.ADMIN_PASSWORD,
        role=RoleName.ADMIN.value,
    ))
    logger.info("Bootstrapped admin user %s", admin.username)
    return admin


def init_db(engine, db: Session):
    create_tables(engine)
    added = ensure_roles(db)
    if added:
        logger.info("Seeded roles: %s", ", ".join(added))
    bootstrap_admin(db)
