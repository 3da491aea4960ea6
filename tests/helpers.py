"""Shared test helpers."""

from fastapi import Request

from src.webhook_api.core.config import get_settings

PRINCIPAL_HEADER = "X-User-Id"


class HeaderPrincipalResolver:
    """Resolves the caller from a request header, falling back to the placeholder."""

    def resolve(self, request: Request) -> str:
        return request.headers.get(PRINCIPAL_HEADER, get_settings().placeholder_user_id)


def as_user(user_id: str) -> dict[str, str]:
    """Headers that make a request act as ``user_id``."""
    return {PRINCIPAL_HEADER: user_id}
