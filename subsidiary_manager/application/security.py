"""Password hashing and session identifiers."""

import secrets

import bcrypt


def hash_password(password: str) -> str:
    """Salted bcrypt hash, stored in place of the plaintext."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def generate_password(length: int = 20) -> str:
    return secrets.token_urlsafe(length)[:length]
