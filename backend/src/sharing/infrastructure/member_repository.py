from datetime import datetime
from typing import Any
from uuid import UUID

from documents.domain.entities import MemberRole
from documents.infrastructure.document_repository import parse_member_role
from shared.infrastructure.backend import BackendClient
from sharing.domain.entities import InviteError, InviteResult, Member


class BackendMemberRepository:
    def __init__(self, client: BackendClient):
        self.client = client

    async def list_members(self, document_id: UUID) -> list[Member]:
        rows = await self.client.select(
            "member_with_email",
            "document_id,user_id,role,email,created_at",
            filters={"document_id": document_id},
            order="created_at",
            ascending=True,
        )
        return [_to_entity(row) for row in rows]

    async def emails_by_user(self, document_id: UUID) -> dict[UUID, str]:
        rows = await self.client.select(
            "member_with_email", "user_id,email", filters={"document_id": document_id}
        )
        return {UUID(row["user_id"]): row["email"] for row in rows}

    async def invite(self, document_id: UUID, email: str, role: MemberRole) -> InviteResult:
        body = await self.client.rpc(
            "invite_member",
            {"p_document_id": str(document_id), "p_email": email, "p_role": role.value},
        )
        code = body.get("error") if isinstance(body, dict) else None
        if not code:
            return InviteResult()
        try:
            return InviteResult(error=InviteError(code))
        except ValueError:
            return InviteResult(error=str(code))

    async def remove(self, document_id: UUID, user_id: UUID) -> None:
        await self.client.delete(
            "document_members", filters={"document_id": document_id, "user_id": user_id}
        )


def _to_entity(row: dict[str, Any]) -> Member:
    return Member(
        document_id=UUID(row["document_id"]),
        user_id=UUID(row["user_id"]),
        email=row["email"],
        role=parse_member_role(row["role"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )
