from fastapi import APIRouter

from src.webhook_api.api.v1 import invitations, projects, users

api_router = APIRouter(prefix="/api")
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(invitations.router)
