from uuid import UUID

from documents.application.attribution import attribute_authors
from documents.domain.entities import (
    Document,
    DocumentAccess,
    Role,
    Version,
    VersionEntry,
)
from documents.domain.repository import (
    DocumentRepository,
    MemberDirectory,
    VersionRepository,
)
from shared.exceptions import (
    AuthorizationError,
    BackendError,
    NotFoundError,
    ValidationError,
)
from shared.logging import get_logger

logger = get_logger(__name__)


async def list_documents(repo: DocumentRepository) -> list[Document]:
    return await repo.list_visible()


async def create_document(repo: DocumentRepository, title: str, owner_id: UUID) -> Document:
    title = title.strip()
    if not title:
        raise ValidationError("Title must not be empty")

    doc = await repo.create(Document(title=title, owner_user_id=owner_id))
    logger.info("User %s created document %s", owner_id, doc.id)
    return doc


async def resolve_access(
    repo: DocumentRepository, document_id: UUID, user_id: UUID
) -> DocumentAccess:
    """Work out the caller's role on a document, straight from the backend.

    A document the backend will not return is indistinguishable from one
    that does not exist; both raise NotFoundError.
    """
    doc = await repo.get_by_id(document_id)
    if not doc:
        raise NotFoundError("Document", str(document_id))

    if doc.owner_user_id == user_id:
        return DocumentAccess(document=doc, role=Role.OWNER)

    member_role = await repo.get_membership_role(document_id, user_id)
    role = member_role.as_role() if member_role else Role.NONE
    return DocumentAccess(document=doc, role=role)


async def require_view_access(
    repo: DocumentRepository, document_id: UUID, user_id: UUID
) -> DocumentAccess:
    access = await resolve_access(repo, document_id, user_id)
    if not access.role.can_view:
        raise AuthorizationError("You do not have access to this document")
    return access


async def list_version_history(
    versions: VersionRepository, members: MemberDirectory, document_id: UUID
) -> list[VersionEntry]:
    history = await versions.list_for_document(document_id)

    try:
        emails = await members.emails_by_user(document_id)
    except BackendError as exc:
        logger.warning("Author lookup failed for document %s: %s", document_id, exc.message)
        emails = {}

    return attribute_authors(history, emails)


async def get_version(
    repo: DocumentRepository,
    versions: VersionRepository,
    document_id: UUID,
    version_id: UUID,
    user_id: UUID,
) -> Version:
    await require_view_access(repo, document_id, user_id)
    version = await versions.get(document_id, version_id)
    if not version:
        raise NotFoundError("Version", str(version_id))
    return version


async def save_version(
    repo: DocumentRepository,
    versions: VersionRepository,
    document_id: UUID,
    user_id: UUID,
    content: str,
    comment: str = "",
) -> Version:
    content = content.strip()
    if not content:
        raise ValidationError("Content must not be empty")

    access = await resolve_access(repo, document_id, user_id)
    if not access.role.can_edit:
        raise AuthorizationError("Only the owner or an editor can save versions")

    version = await versions.create(
        Version(
            document_id=document_id,
            content=content,
            comment=comment.strip(),
            created_by=user_id,
        )
    )
    logger.info("User %s saved version %s of document %s", user_id, version.id, document_id)
    return version
