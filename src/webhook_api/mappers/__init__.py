"""Conversion between entities and wire schemas."""

from src.webhook_api.mappers.base import apply_update

__all__ = ["apply_update"]
