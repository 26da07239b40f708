from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from documents.domain.entities import MemberRole


class MemberResponse(BaseModel):
    user_id: UUID
    email: str
    role: MemberRole
    created_at: datetime | None = None


class ShareView(BaseModel):
    document_id: UUID
    title: str
    members: list[MemberResponse]


class InviteRequest(BaseModel):
    email: str
    role: MemberRole = MemberRole.EDITOR


class ChangeRoleRequest(BaseModel):
    role: MemberRole


class MembershipChangeResponse(BaseModel):
    status: str
    members: list[MemberResponse]


class InviteFailureResponse(BaseModel):
    error: str
    detail: str
