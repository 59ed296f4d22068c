"""Password hashing helpers"""

import bcrypt
from loan_origination.config import settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash with a fresh per-record bcrypt salt"""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Compare a plaintext password against a stored bcrypt hash"""
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
