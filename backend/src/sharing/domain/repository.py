from typing import Protocol
from uuid import UUID

from documents.domain.entities import MemberRole
from sharing.domain.entities import InviteResult, Member


class MemberRepository(Protocol):
    async def list_members(self, document_id: UUID) -> list[Member]: ...

    async def invite(self, document_id: UUID, email: str, role: MemberRole) -> InviteResult: ...

    async def remove(self, document_id: UUID, user_id: UUID) -> None: ...
