"""Project invitation factory for test data generation."""

from datetime import timedelta

from polyfactory import Use

from src.webhook_api.models import InvitationStatus, ProjectInvitation
from tests.factories.base import BaseFactory, generate_object_id, utc_now


class ProjectInvitationFactory(BaseFactory):
    """Factory for generating ProjectInvitation test data.

    ``project_id``, ``inviter_id`` and ``invitee_id`` must be set explicitly.
    """

    __model__ = ProjectInvitation

    id = Use(generate_object_id)
    project_id = None
    inviter_id = None
    invitee_id = None
    sent_at = Use(utc_now)
    expires_at = Use(lambda: utc_now() + timedelta(days=7))
    status = InvitationStatus.PENDING.value
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
    created_by = None
    updated_by = None

    @classmethod
    def overdue(cls, **kwargs):
        """A PENDING invitation whose expiry has passed."""
        return cls.build(
            sent_at=utc_now() - timedelta(days=8),
            expires_at=utc_now() - timedelta(days=1),
            **kwargs,
        )
