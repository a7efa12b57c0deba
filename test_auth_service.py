import pytest

from tasktracker.exceptions import DuplicateUserError, InvalidCredentialsError, InvalidTokenError, UserNotFoundError
from tasktracker.models.user import User, UserRole
from tasktracker.services.auth_service import AuthService
from tasktracker.stores.user_store import UserStore


@pytest.fixture()
def auth(db, settings):
    return AuthService(UserStore(db), settings)


def test_register_stores_only_a_hash(auth, db):
    result = auth.register("Ann", "ann@example.com", "plaintext-pw", UserRole.EMPLOYEE)

    stored = db.query(User).filter(User.email == "ann@example.com").one()
    assert stored.hashed_password != "plaintext-pw"
    assert "hashed_password" not in result["user"]
    assert result["user"]["role"] == UserRole.EMPLOYEE


def test_register_duplicate(auth, db):
    auth.register("Ann", "ann@example.com", "secret1", UserRole.EMPLOYEE)
    with pytest.raises(DuplicateUserError):
        auth.register("Ann Again", " Ann@Example.com ", "secret2", UserRole.ADMIN)
    assert db.query(User).count() == 1


def test_login_failures_are_indistinguishable(auth):
    auth.register("Ann", "ann@example.com", "secret1", UserRole.EMPLOYEE)

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        auth.login("ann@example.com", "secret2")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        auth.login("bob@example.com", "secret1")
    assert str(wrong_password.value) == str(unknown_user.value)


def test_token_round_trip(auth):
    session = auth.register("Boss", "boss@example.com", "secret1", UserRole.ADMIN)
    identity = auth.authenticate(session["token"])

    assert identity.id == session["user"]["id"]
    assert identity.email == "boss@example.com"
    assert identity.is_admin

    with pytest.raises(InvalidTokenError):
        auth.authenticate(session["token"] + "x")


def test_get_current_user(auth):
    session = auth.register("Ann", "ann@example.com", "secret1", UserRole.EMPLOYEE)
    assert auth.get_current_user(session["user"]["id"]).name == "Ann"
    with pytest.raises(UserNotFoundError):
        auth.get_current_user(404)
