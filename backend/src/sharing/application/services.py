from uuid import UUID

from documents.application.services import resolve_access
from documents.domain.entities import Document, MemberRole
from documents.domain.repository import DocumentRepository
from shared.exceptions import AuthorizationError, NotFoundError, ValidationError
from shared.logging import get_logger, mask_email
from sharing.domain.entities import InviteResult, Member
from sharing.domain.repository import MemberRepository

logger = get_logger(__name__)


async def require_owner(repo: DocumentRepository, document_id: UUID, user_id: UUID) -> Document:
    access = await resolve_access(repo, document_id, user_id)
    if not access.role.can_manage_members:
        raise AuthorizationError("Only the document owner can manage members")
    return access.document


async def list_members(
    repo: DocumentRepository, members: MemberRepository, document_id: UUID, user_id: UUID
) -> tuple[Document, list[Member]]:
    doc = await require_owner(repo, document_id, user_id)
    return doc, await members.list_members(document_id)


async def invite_member(
    repo: DocumentRepository,
    members: MemberRepository,
    document_id: UUID,
    user_id: UUID,
    email: str,
    role: MemberRole,
) -> InviteResult:
    """Grant or update a membership by email.

    Calling it again for someone who is already a member replaces their
    role, so the same call serves both inviting and changing roles.
    """
    email = email.strip()
    if not email:
        raise ValidationError("Email must not be empty")

    await require_owner(repo, document_id, user_id)
    result = await members.invite(document_id, email, role)
    if result.ok:
        logger.info("Document %s: %s is now %s", document_id, mask_email(email), role.value)
    else:
        logger.info(
            "Document %s: invite of %s refused (%s)", document_id, mask_email(email), result.error
        )
    return result


async def change_member_role(
    repo: DocumentRepository,
    members: MemberRepository,
    document_id: UUID,
    user_id: UUID,
    member_user_id: UUID,
    role: MemberRole,
) -> InviteResult:
    await require_owner(repo, document_id, user_id)

    current = await members.list_members(document_id)
    member = next((m for m in current if m.user_id == member_user_id), None)
    if not member:
        raise NotFoundError("Member", str(member_user_id))

    return await members.invite(document_id, member.email, role)


async def remove_member(
    repo: DocumentRepository,
    members: MemberRepository,
    document_id: UUID,
    user_id: UUID,
    member_user_id: UUID,
) -> None:
    await require_owner(repo, document_id, user_id)
    await members.remove(document_id, member_user_id)
    logger.info("Document %s: removed member %s", document_id, member_user_id)
