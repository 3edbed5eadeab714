from functools import lru_cache

import bcrypt as bcrypt_lib

from src.config import settings


def hash_password(password: str) -> str:
    """Hash password using bcrypt."""
    return bcrypt_lib.hashpw(
        password.encode(), bcrypt_lib.gensalt(rounds=settings.bcrypt_rounds)
    ).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against hash. Missing or malformed hashes never verify."""
    if not password_hash:
        return False
    try:
        return bcrypt_lib.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("adops-portal-dummy-password")


def burn_verification(password: str) -> None:
    """Spend one bcrypt comparison when there is no stored hash to check against."""
    verify_password(password, _dummy_hash())
