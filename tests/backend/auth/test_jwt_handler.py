from datetime import datetime, timedelta, timezone

import jwt
import pytest

from backend.auth import jwt_handler
from backend.core import config


def test_verify_access_token_returns_encoded_identity() -> None:
    token = jwt_handler.create_access_token(user_id='a' * 32, is_admin=True)

    identity = jwt_handler.verify_access_token(token)

    assert identity == jwt_handler.TokenIdentity(user_id='a' * 32, is_admin=True)


def test_create_access_token_defaults_to_seven_day_expiry() -> None:
    token = jwt_handler.create_access_token(user_id='user-1')

    payload = jwt_handler.decode_access_token(token)

    assert payload['exp'] - payload['iat'] == 7 * 24 * 60 * 60
    assert payload['is_admin'] is False


def test_verify_access_token_rejects_expired_token() -> None:
    token = jwt_handler.create_access_token(user_id='user-1', expires_minutes=-1)

    with pytest.raises(jwt_handler.InvalidToken, match='expired'):
        jwt_handler.verify_access_token(token)


def test_verify_access_token_rejects_foreign_signature() -> None:
    token = jwt.encode(
        {'sub': 'user-1', 'exp': datetime.now(timezone.utc) + timedelta(hours=1)},
        'another-secret-that-is-long-enough-0123456789',
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(jwt_handler.InvalidToken):
        jwt_handler.verify_access_token(token)


def test_verify_access_token_rejects_tampered_payload() -> None:
    token = jwt_handler.create_access_token(user_id='user-1', is_admin=False)
    forged = jwt_handler.create_access_token(user_id='user-1', is_admin=True)
    header, _, signature = token.split('.')
    _, forged_payload, _ = forged.split('.')

    with pytest.raises(jwt_handler.InvalidToken):
        jwt_handler.verify_access_token(f'{header}.{forged_payload}.{signature}')


@pytest.mark.parametrize('token', ['', 'not-a-token', 'a.b.c'])
def test_verify_access_token_rejects_malformed_tokens(token: str) -> None:
    with pytest.raises(jwt_handler.InvalidToken):
        jwt_handler.verify_access_token(token)


def test_verify_access_token_requires_subject() -> None:
    token = jwt.encode(
        {'exp': datetime.now(timezone.utc) + timedelta(hours=1)},
        config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(jwt_handler.InvalidToken):
        jwt_handler.verify_access_token(token)
