"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Platform-wide user role."""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class ProjectStatus(str, Enum):
    """Project lifecycle status.

    Any status may be set from any other by the owner.
    """

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class ProjectVisibility(str, Enum):
    PRIVATE = "PRIVATE"
    PUBLIC = "PUBLIC"


class ProjectType(str, Enum):
    """Kind of project, with a human readable display name."""

    SOFTWARE = "SOFTWARE"
    BUSINESS = "BUSINESS"
    SERVICE_DESK = "SERVICE_DESK"
    OPERATIONS = "OPERATIONS"
    MARKETING = "MARKETING"
    HR = "HR"
    FINANCE = "FINANCE"
    LEGAL = "LEGAL"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _PROJECT_TYPE_DISPLAY_NAMES[self]


_PROJECT_TYPE_DISPLAY_NAMES: dict[ProjectType, str] = {
    ProjectType.SOFTWARE: "Software Development",
    ProjectType.BUSINESS: "Business Project",
    ProjectType.SERVICE_DESK: "Service Desk",
    ProjectType.OPERATIONS: "Operations",
    ProjectType.MARKETING: "Marketing",
    ProjectType.HR: "Human Resources",
    ProjectType.FINANCE: "Finance",
    ProjectType.LEGAL: "Legal",
    ProjectType.OTHER: "Other",
}


class InvitationStatus(str, Enum):
    """Project invitation status.

    EXPIRED is only stored by the expiry sweep; a PENDING invitation past
    its expiry is treated as expired when read.
    """

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
