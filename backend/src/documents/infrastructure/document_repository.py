from datetime import datetime
from typing import Any
from uuid import UUID

from documents.domain.entities import Document, MemberRole
from shared.exceptions import BackendError
from shared.infrastructure.backend import BackendClient

DOCUMENT_COLUMNS = "id,title,user_id,created_at"


class BackendDocumentRepository:
    def __init__(self, client: BackendClient):
        self.client = client

    async def list_visible(self) -> list[Document]:
        rows = await self.client.select(
            "documents", DOCUMENT_COLUMNS, order="created_at", ascending=False
        )
        return [_to_entity(row) for row in rows]

    async def get_by_id(self, document_id: UUID) -> Document | None:
        row = await self.client.select_one(
            "documents", DOCUMENT_COLUMNS, filters={"id": document_id}
        )
        return _to_entity(row) if row else None

    async def create(self, document: Document) -> Document:
        row = await self.client.insert(
            "documents",
            {"title": document.title, "user_id": str(document.owner_user_id)},
        )
        return _to_entity(row)

    async def get_membership_role(
        self, document_id: UUID, user_id: UUID
    ) -> MemberRole | None:
        row = await self.client.select_one(
            "document_members",
            "role",
            filters={"document_id": document_id, "user_id": user_id},
        )
        if not row:
            return None
        return parse_member_role(row["role"])


def parse_member_role(value: str) -> MemberRole:
    try:
        return MemberRole(value)
    except ValueError:
        raise BackendError(f"Unrecognized membership role: {value!r}")


def _to_entity(row: dict[str, Any]) -> Document:
    return Document(
        id=UUID(row["id"]),
        title=row["title"],
        owner_user_id=UUID(row["user_id"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )
