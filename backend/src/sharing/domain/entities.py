from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from documents.domain.entities import MemberRole


class InviteError(StrEnum):
    """Failure codes returned by the ``invite_member`` procedure."""

    USER_NOT_FOUND = "user_not_found"
    NOT_OWNER = "not_owner"
    INVALID_ROLE = "invalid_role"
    CANNOT_INVITE_OWNER = "cannot_invite_owner"


@dataclass
class Member:
    document_id: UUID
    user_id: UUID
    email: str
    role: MemberRole
    created_at: datetime | None = field(default=None)


@dataclass
class InviteResult:
    """Outcome of an invite; ``error`` holds the raw code when it is unrecognized."""

    error: InviteError | str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
