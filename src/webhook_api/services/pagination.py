"""Translation of 1-based request paging into repository page requests."""

from src.webhook_api.core.config import get_settings
from src.webhook_api.core.errors import BadRequestError
from src.webhook_api.repositories.query import PageRequest


def to_page_request(page: int, size: int) -> PageRequest:
    """Validate 1-based ``page`` and ``size`` and convert to a zero-based request.

    Raises:
        BadRequestError: If page or size is out of range.
    """
    max_page_size = get_settings().max_page_size
    if page < 1:
        raise BadRequestError("Page must be at least 1")
    if size < 1:
        raise BadRequestError("Page size must be at least 1")
    if size > max_page_size:
        raise BadRequestError(f"Page size must not exceed {max_page_size}")
    return PageRequest(page=page - 1, size=size)
