"""Best-effort author labels for the version history.

Only current members resolve to an email. Anyone else (the owner, a
removed member) falls back to a shortened id.
"""

from uuid import UUID

from documents.domain.entities import Version, VersionEntry

UNKNOWN_AUTHOR = "unknown"
ID_PREFIX_LENGTH = 8
PREVIEW_LENGTH = 60
ELLIPSIS = "…"


def author_label(created_by: UUID | None, emails: dict[UUID, str]) -> str:
    if created_by is None:
        return UNKNOWN_AUTHOR
    return emails.get(created_by) or str(created_by)[:ID_PREFIX_LENGTH] + ELLIPSIS


def preview(content: str) -> str:
    if len(content) <= PREVIEW_LENGTH:
        return content
    return content[:PREVIEW_LENGTH] + ELLIPSIS


def attribute_authors(versions: list[Version], emails: dict[UUID, str]) -> list[VersionEntry]:
    return [
        VersionEntry(
            version=v,
            author=author_label(v.created_by, emails),
            preview=preview(v.content),
        )
        for v in versions
    ]
