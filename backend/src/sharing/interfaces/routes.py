from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from auth.domain.entities import Session
from documents.infrastructure.document_repository import BackendDocumentRepository
from shared.dependencies import get_backend, get_current_session
from shared.infrastructure.backend import BackendClient
from sharing.application.messages import describe_invite_error
from sharing.application.services import (
    change_member_role,
    invite_member,
    list_members,
    remove_member,
)
from sharing.domain.entities import InviteError, InviteResult, Member
from sharing.infrastructure.member_repository import BackendMemberRepository
from sharing.interfaces.schemas import (
    ChangeRoleRequest,
    InviteFailureResponse,
    InviteRequest,
    MemberResponse,
    MembershipChangeResponse,
    ShareView,
)

router = APIRouter(prefix="/doc/{document_id}/share", tags=["sharing"])

INVITE_ERROR_STATUS = {
    InviteError.USER_NOT_FOUND: 404,
    InviteError.NOT_OWNER: 403,
    InviteError.INVALID_ROLE: 422,
    InviteError.CANNOT_INVITE_OWNER: 409,
}


def _members(members: list[Member]) -> list[MemberResponse]:
    return [
        MemberResponse(user_id=m.user_id, email=m.email, role=m.role, created_at=m.created_at)
        for m in members
    ]


def _invite_failure(result: InviteResult, prefix: str = "") -> JSONResponse:
    body = InviteFailureResponse(
        error=str(result.error), detail=prefix + describe_invite_error(result.error)
    )
    return JSONResponse(
        status_code=INVITE_ERROR_STATUS.get(result.error, 502),
        content=body.model_dump(),
    )


@router.get("", response_model=ShareView)
async def share_view(
    document_id: UUID,
    session: Session = Depends(get_current_session),
    backend: BackendClient = Depends(get_backend),
):
    doc, members = await list_members(
        BackendDocumentRepository(backend),
        BackendMemberRepository(backend),
        document_id=document_id,
        user_id=session.user.id,
    )
    return ShareView(document_id=doc.id, title=doc.title, members=_members(members))


@router.post(
    "/members",
    response_model=MembershipChangeResponse,
    responses={404: {"model": InviteFailureResponse}, 409: {"model": InviteFailureResponse}},
)
async def invite(
    document_id: UUID,
    body: InviteRequest,
    session: Session = Depends(get_current_session),
    backend: BackendClient = Depends(get_backend),
):
    members = BackendMemberRepository(backend)
    result = await invite_member(
        BackendDocumentRepository(backend),
        members,
        document_id=document_id,
        user_id=session.user.id,
        email=body.email,
        role=body.role,
    )
    if not result.ok:
        return _invite_failure(result)
    return MembershipChangeResponse(
        status="Member added or updated",
        members=_members(await members.list_members(document_id)),
    )


@router.patch("/members/{member_user_id}", response_model=MembershipChangeResponse)
async def change_role(
    document_id: UUID,
    member_user_id: UUID,
    body: ChangeRoleRequest,
    session: Session = Depends(get_current_session),
    backend: BackendClient = Depends(get_backend),
):
    members = BackendMemberRepository(backend)
    result = await change_member_role(
        BackendDocumentRepository(backend),
        members,
        document_id=document_id,
        user_id=session.user.id,
        member_user_id=member_user_id,
        role=body.role,
    )
    if not result.ok:
        return _invite_failure(result, prefix="Role update failed: ")
    return MembershipChangeResponse(
        status="Role updated",
        members=_members(await members.list_members(document_id)),
    )


@router.delete("/members/{member_user_id}", response_model=MembershipChangeResponse)
async def remove(
    document_id: UUID,
    member_user_id: UUID,
    session: Session = Depends(get_current_session),
    backend: BackendClient = Depends(get_backend),
):
    members = BackendMemberRepository(backend)
    await remove_member(
        BackendDocumentRepository(backend),
        members,
        document_id=document_id,
        user_id=session.user.id,
        member_user_id=member_user_id,
    )
    return MembershipChangeResponse(
        status="Member removed",
        members=_members(await members.list_members(document_id)),
    )
