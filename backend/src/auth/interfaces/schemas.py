from uuid import UUID

from pydantic import BaseModel, EmailStr


class MagicLinkRequest(BaseModel):
    email: EmailStr


class StatusResponse(BaseModel):
    status: str


class UserResponse(BaseModel):
    id: UUID
    email: str
