from enum import Enum
from typing import Any

from pydantic import BaseModel


def apply_update(entity: Any, update: BaseModel) -> list[str]:
    """Copy the present, non-null fields of ``update`` onto ``entity``.

    An explicit null is treated the same as an absent field.

    Returns:
        Names of the fields that were applied
    """
    applied = []
    for name, value in update.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(entity, name, value.value if isinstance(value, Enum) else value)
        applied.append(name)
    return applied
