from datetime import datetime
from typing import Any
from uuid import UUID

from documents.domain.entities import Version
from shared.infrastructure.backend import BackendClient

VERSION_COLUMNS = "id,document_id,content,comment,created_at,created_by"


class BackendVersionRepository:
    def __init__(self, client: BackendClient):
        self.client = client

    async def list_for_document(self, document_id: UUID) -> list[Version]:
        rows = await self.client.select(
            "versions",
            VERSION_COLUMNS,
            filters={"document_id": document_id},
            order="created_at",
            ascending=False,
        )
        return [_to_entity(row) for row in rows]

    async def get(self, document_id: UUID, version_id: UUID) -> Version | None:
        row = await self.client.select_one(
            "versions",
            VERSION_COLUMNS,
            filters={"document_id": document_id, "id": version_id},
        )
        return _to_entity(row) if row else None

    async def create(self, version: Version) -> Version:
        row = await self.client.insert(
            "versions",
            {
                "document_id": str(version.document_id),
                "content": version.content,
                "comment": version.comment,
                "created_by": str(version.created_by) if version.created_by else None,
            },
        )
        return _to_entity(row)


def _to_entity(row: dict[str, Any]) -> Version:
    return Version(
        id=UUID(row["id"]),
        document_id=UUID(row["document_id"]),
        content=row["content"],
        comment=row.get("comment") or "",
        created_by=UUID(row["created_by"]) if row.get("created_by") else None,
        created_at=datetime.fromisoformat(row["created_at"]),
    )
