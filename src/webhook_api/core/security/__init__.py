"""Security utilities - password hashing and identifiers."""

from src.webhook_api.core.security.crypto import hash_password
from src.webhook_api.core.security.identifiers import (
    is_valid_object_id,
    new_object_id,
    validate_object_id,
)

__all__ = [
    # Crypto
    "hash_password",
    # Identifiers
    "is_valid_object_id",
    "new_object_id",
    "validate_object_id",
]
