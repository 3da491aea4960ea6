"""Argon2id password hashing.

Only the hash is ever stored; the API has no login flow, so
``verify_password`` is used to check stored hashes rather than to
authenticate requests.
"""

from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from src.webhook_api.core.config import get_settings


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Hasher configured from the Argon2 cost settings, built on first use."""
    settings = get_settings()
    return PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


def hash_password(password: str) -> str:
    return get_password_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """False for a wrong password or a malformed hash."""
    try:
        return get_password_hasher().verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False
