from passlib.context import CryptContext

_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("Password cannot be blank.")
    return _pwd.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    if not password or not hashed_password:
        return False
    try:
        return _pwd.verify(password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognized or corrupt hash.
        return False
