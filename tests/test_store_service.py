import pytest
from sqlalchemy import func, select

from app.core.exceptions import StoreNotFound
from app.model.store_schema import StoreUpdate
from app.model.user import User, user_roles


def test_store_crud(store_service, make_store):
    assert store_service.list_stores() == []

    store = make_store("Downtown", 10.5, 20.25)
    assert store.id is not None
    assert store_service.get_store(store.id) == store

    updated = store_service.update_store(store.id, StoreUpdate(name="Uptown", latitude=-1.0, longitude=2.0))
    assert (updated.name, updated.latitude, updated.longitude) == ("Uptown", -1.0, 2.0)

    stores = store_service.list_stores()
    assert len(stores) == 1
    assert stores[0].name == "Uptown"


def test_store_names_need_not_be_unique(store_service, make_store):
    make_store("Twin")
    make_store("Twin")

    assert len(store_service.list_stores()) == 2


def test_missing_store(store_service):
    with pytest.raises(StoreNotFound):
        store_service.get_store(1)
    with pytest.raises(StoreNotFound):
        store_service.update_store(1, StoreUpdate(name="x", latitude=0, longitude=0))
    with pytest.raises(StoreNotFound):
        store_service.delete_store(1)
    with pytest.raises(StoreNotFound):
        store_service.list_store_users(1)


def test_list_store_users(store_service, make_store, make_user):
    store = make_store()
    other = make_store("Other")
    make_user("alice", store_id=store.id)
    make_user("bob", store_id=other.id)
    make_user("carol")

    users = store_service.list_store_users(store.id)

    assert [user.username for user in users] == ["alice"]


def test_delete_store_removes_its_users(db, store_service, user_service, make_store, make_user):
    store = make_store()
    make_user("alice", store_id=store.id)
    make_user("bob", store_id=store.id)
    make_user("carol")

    store_service.delete_store(store.id)

    assert store_service.list_stores() == []
    assert [user.username for user in user_service.list_users()] == ["carol"]
    assert db.query(User).count() == 1
    assert db.execute(select(func.count()).select_from(user_roles)).scalar() == 1
