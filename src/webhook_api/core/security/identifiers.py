"""Entity identifiers.

Identifiers are 24 lowercase hex characters: a 4-byte big-endian creation
timestamp followed by 8 random bytes, so ids sort roughly by creation time.
"""

import re
import secrets
import time
from typing import Final

from src.webhook_api.core.errors import BadRequestError

OBJECT_ID_LENGTH: Final[int] = 24
_OBJECT_ID_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9a-f]{24}")


def new_object_id() -> str:
    """Generate a new identifier."""
    timestamp = int(time.time()) & 0xFFFFFFFF
    return timestamp.to_bytes(4, "big").hex() + secrets.token_hex(8)


def is_valid_object_id(value: str | None) -> bool:
    return value is not None and bool(_OBJECT_ID_PATTERN.fullmatch(value))


def validate_object_id(value: str | None, label: str = "id") -> str:
    """Return the identifier unchanged or raise BadRequestError.

    Raises:
        BadRequestError: If the value is not 24 lowercase hex characters.
    """
    if not is_valid_object_id(value):
        raise BadRequestError(f"Invalid {label} format: {value!r}")
    return value  # type: ignore[return-value]
