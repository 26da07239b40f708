from typing import Protocol
from uuid import UUID

from documents.domain.entities import Document, MemberRole, Version


class DocumentRepository(Protocol):
    async def list_visible(self) -> list[Document]: ...

    async def get_by_id(self, document_id: UUID) -> Document | None: ...

    async def create(self, document: Document) -> Document: ...

    async def get_membership_role(
        self, document_id: UUID, user_id: UUID
    ) -> MemberRole | None: ...


class VersionRepository(Protocol):
    async def list_for_document(self, document_id: UUID) -> list[Version]: ...

    async def get(self, document_id: UUID, version_id: UUID) -> Version | None: ...

    async def create(self, version: Version) -> Version: ...


class MemberDirectory(Protocol):
    async def emails_by_user(self, document_id: UUID) -> dict[UUID, str]: ...
