from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import assert_never
from uuid import UUID


class Role(StrEnum):
    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"
    NONE = "none"

    @property
    def can_view(self) -> bool:
        match self:
            case Role.OWNER | Role.EDITOR | Role.VIEWER:
                return True
            case Role.NONE:
                return False
            case _:
                assert_never(self)

    @property
    def can_edit(self) -> bool:
        match self:
            case Role.OWNER | Role.EDITOR:
                return True
            case Role.VIEWER | Role.NONE:
                return False
            case _:
                assert_never(self)

    @property
    def can_manage_members(self) -> bool:
        match self:
            case Role.OWNER:
                return True
            case Role.EDITOR | Role.VIEWER | Role.NONE:
                return False
            case _:
                assert_never(self)


class MemberRole(StrEnum):
    """Roles that can be granted through a membership row."""

    EDITOR = "editor"
    VIEWER = "viewer"

    def as_role(self) -> Role:
        return Role(self.value)


@dataclass
class Document:
    title: str
    owner_user_id: UUID
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)


@dataclass
class DocumentAccess:
    document: Document
    role: Role


@dataclass
class Version:
    document_id: UUID
    content: str
    comment: str = ""
    created_by: UUID | None = None
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)


@dataclass
class VersionEntry:
    """A version as shown in the history, with a display label for its author."""

    version: Version
    author: str
    preview: str
