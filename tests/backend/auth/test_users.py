import pytest

from backend.auth.security import hash_password, verify_password
from backend.auth.users import (
    EmailAlreadyRegistered,
    authenticate_user,
    bootstrap_admin,
    get_active_user,
    get_user_by_email,
)
from backend.models.user import User


def test_hash_password_never_stores_plaintext() -> None:
    hashed = hash_password('secret123')

    assert hashed != 'secret123'
    assert verify_password('secret123', hashed)
    assert not verify_password('wrong-password', hashed)


@pytest.mark.parametrize(('password', 'hashed'), [('', 'x'), ('secret123', ''), ('secret123', 'not-a-hash')])
def test_verify_password_fails_closed(password: str, hashed: str) -> None:
    assert verify_password(password, hashed) is False


def test_create_user_normalizes_email_and_defaults_flags(make_user) -> None:
    user = make_user(email='  Player@Example.COM ')

    assert user.email == 'player@example.com'
    assert user.is_admin is False
    assert user.is_banned is False
    assert len(user.id) == 32


def test_create_user_rejects_case_folded_duplicate(db, make_user) -> None:
    make_user(email='player@example.com')

    with pytest.raises(EmailAlreadyRegistered):
        make_user(email='PLAYER@example.com')

    assert db.query(User).count() == 1


def test_authenticate_user_checks_password(db, make_user) -> None:
    user = make_user(password='secret123')

    assert authenticate_user(db, 'Player@example.com', 'secret123').id == user.id
    assert authenticate_user(db, 'player@example.com', 'nope-nope') is None
    assert authenticate_user(db, 'missing@example.com', 'secret123') is None


def test_get_active_user_excludes_banned_users(db, make_user) -> None:
    user = make_user()
    user.is_banned = True
    db.commit()

    assert get_active_user(db, user.id) is None


def test_bootstrap_admin_creates_then_promotes(db, make_user) -> None:
    admin = bootstrap_admin(db, email='admin@example.com', password='adminpass', name='Admin')
    assert admin.is_admin is True

    existing = make_user(email='member@example.com')
    promoted = bootstrap_admin(db, email='member@example.com', password='ignored1', name='Ignored')

    assert promoted.id == existing.id
    assert get_user_by_email(db, 'member@example.com').is_admin is True
    assert db.query(User).count() == 2


def test_bootstrap_admin_skips_blank_credentials(db) -> None:
    assert bootstrap_admin(db, email='', password='adminpass', name='Admin') is None
    assert bootstrap_admin(db, email='admin@example.com', password='', name='Admin') is None
    assert db.query(User).count() == 0
