import pytest

from admin_auth.models.user import User
from admin_auth.services.users import (
    InMemoryUserStore,
    SqlAlchemyUserStore,
    UserAlreadyExistsError,
)


@pytest.fixture(params=["sqlalchemy", "memory"])
def store(request, db_session):
    if request.param == "sqlalchemy":
        return SqlAlchemyUserStore(db_session)
    return InMemoryUserStore()


def _user(email="Grace@Example.com"):
    return User(first_name="Grace", last_name="Hopper", email=email, password_hash="$2b$04$digest")


def test_create_assigns_nonzero_id(store):
    user = store.create(_user())
    assert user.id and user.id > 0
    assert user.email == "grace@example.com"


def test_find_by_email_is_case_insensitive(store):
    created = store.create(_user())
    found = store.find_by_email("  GRACE@example.com ")
    assert found is not None
    assert found.id == created.id


def test_find_by_id(store):
    created = store.create(_user())
    assert store.find_by_id(created.id).email == "grace@example.com"
    assert store.find_by_id(created.id + 100) is None


def test_missing_email_returns_none(store):
    assert store.find_by_email("nobody@example.com") is None


def test_duplicate_email_raises(store):
    store.create(_user())
    with pytest.raises(UserAlreadyExistsError):
        store.create(_user(email="grace@example.com"))


def test_sqlalchemy_store_recovers_after_duplicate(db_session):
    store = SqlAlchemyUserStore(db_session)
    store.create(_user())
    with pytest.raises(UserAlreadyExistsError):
        store.create(_user())
    # Session was rolled back and is usable again.
    other = store.create(_user(email="other@example.com"))
    assert other.id > 0


def test_memory_store_ids_increase():
    store = InMemoryUserStore()
    a = store.create(_user("a@example.com"))
    b = store.create(_user("b@example.com"))
    assert (a.id, b.id) == (1, 2)
    assert len(store) == 2
