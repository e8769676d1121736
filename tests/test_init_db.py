from app.core.config import settings
from app.db.init_db import bootstrap_admin, init_db
from app.db.session import engine
from app.model.role import Role, RoleName
from app.repository.role import ensure_roles
from app.repository.user import get_user_by_name


def test_roles_are_seeded_once(db):
    assert {role.name for role in db.query(Role).all()} == set(RoleName)
    assert ensure_roles(db) == []


def test_bootstrap_admin(db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_USERNAME", "root")
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "root@x.com")
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "rootpass")

    init_db(engine, db)

    root = get_user_by_name(db, username="root")
    assert root.role_names == {"ADMIN"}
    # second start-up finds the user and leaves it alone
    assert bootstrap_admin(db) is None


def test_bootstrap_admin_skipped_without_settings(db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_USERNAME", None)

    assert bootstrap_admin(db) is None
