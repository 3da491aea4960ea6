"""Resolution of the calling principal.

There is no authentication boundary yet: the default resolver returns the
configured placeholder user id. Swap the resolver via
``app.dependency_overrides[get_principal_resolver]`` to plug in real auth.
"""

from typing import Annotated, Protocol

from fastapi import Depends, Request

from src.webhook_api.core.config import get_settings
from src.webhook_api.core.logging import bind_principal_context


class PrincipalResolver(Protocol):
    def resolve(self, request: Request) -> str: ...


class PlaceholderPrincipalResolver:
    """Always resolves to the same fixed user id."""

    def __init__(self, user_id: str):
        self.user_id = user_id

    def resolve(self, request: Request) -> str:
        return self.user_id


def get_principal_resolver() -> PrincipalResolver:
    return PlaceholderPrincipalResolver(get_settings().placeholder_user_id)


async def get_current_user_id(
    request: Request,
    resolver: Annotated[PrincipalResolver, Depends(get_principal_resolver)],
) -> str:
    """Resolve the caller id and bind it to the log context."""
    user_id = resolver.resolve(request)
    bind_principal_context(user_id)
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
