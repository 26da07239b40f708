from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from auth.interfaces.schemas import UserResponse
from documents.domain.entities import Role, VersionEntry


class CreateDocumentRequest(BaseModel):
    title: str


class DocumentResponse(BaseModel):
    id: UUID
    title: str
    owner_user_id: UUID
    created_at: datetime | None = None


class DocumentListItem(DocumentResponse):
    is_owner: bool


class DocumentListView(BaseModel):
    user: UserResponse | None = None
    documents: list[DocumentListItem] = []
    sign_in: str | None = None
    error: str | None = None


class CreateDocumentResponse(BaseModel):
    status: str
    document: DocumentResponse


class VersionResponse(BaseModel):
    id: UUID
    content: str
    comment: str
    created_at: datetime | None = None
    created_by: UUID | None = None
    author: str | None = None
    preview: str | None = None

    @classmethod
    def from_entry(cls, entry: VersionEntry) -> "VersionResponse":
        v = entry.version
        return cls(
            id=v.id,
            content=v.content,
            comment=v.comment,
            created_at=v.created_at,
            created_by=v.created_by,
            author=entry.author,
            preview=entry.preview,
        )


class EditorView(BaseModel):
    document: DocumentResponse
    user_email: str
    role: Role
    can_edit: bool
    can_share: bool
    versions: list[VersionResponse]


class SaveVersionRequest(BaseModel):
    content: str
    comment: str = ""


class SaveVersionResponse(BaseModel):
    status: str
    content: str
    comment: str
    versions: list[VersionResponse]
