from uuid import UUID

from fastapi import APIRouter, Depends
from httpx import AsyncClient

from auth.domain.entities import Session
from auth.interfaces.schemas import UserResponse
from documents.application.services import (
    create_document,
    get_version,
    list_documents,
    list_version_history,
    require_view_access,
    save_version,
)
from documents.infrastructure.document_repository import BackendDocumentRepository
from documents.infrastructure.version_repository import BackendVersionRepository
from documents.interfaces.schemas import (
    CreateDocumentRequest,
    CreateDocumentResponse,
    DocumentListItem,
    DocumentListView,
    DocumentResponse,
    EditorView,
    SaveVersionRequest,
    SaveVersionResponse,
    VersionResponse,
)
from shared.config import settings
from shared.dependencies import (
    get_backend,
    get_current_session,
    get_http,
    get_optional_session,
)
from shared.infrastructure.backend import BackendClient
from sharing.infrastructure.member_repository import BackendMemberRepository

router = APIRouter(tags=["documents"])


@router.get("/supabase-test", response_model=DocumentListView)
async def document_list(
    error: str | None = None,
    session: Session | None = Depends(get_optional_session),
    http: AsyncClient = Depends(get_http),
):
    if session is None:
        return DocumentListView(sign_in="/api/auth/magic-link", error=error)

    backend = BackendClient(http, settings.SUPABASE_ANON_KEY, access_token=session.access_token)
    docs = await list_documents(BackendDocumentRepository(backend))
    return DocumentListView(
        user=UserResponse(id=session.user.id, email=session.user.email),
        documents=[
            DocumentListItem(
                id=d.id,
                title=d.title,
                owner_user_id=d.owner_user_id,
                created_at=d.created_at,
                is_owner=d.owner_user_id == session.user.id,
            )
            for d in docs
        ],
        error=error,
    )


@router.post("/supabase-test/documents", response_model=CreateDocumentResponse, status_code=201)
async def create(
    body: CreateDocumentRequest,
    session: Session = Depends(get_current_session),
    backend: BackendClient = Depends(get_backend),
):
    repo = BackendDocumentRepository(backend)
    doc = await create_document(repo, title=body.title, owner_id=session.user.id)
    return CreateDocumentResponse(
        status="Document created",
        document=DocumentResponse.model_validate(doc, from_attributes=True),
    )


@router.get("/doc/{document_id}", response_model=EditorView)
async def editor(
    document_id: UUID,
    session: Session = Depends(get_current_session),
    backend: BackendClient = Depends(get_backend),
):
    repo = BackendDocumentRepository(backend)
    access = await require_view_access(repo, document_id, session.user.id)
    history = await list_version_history(
        BackendVersionRepository(backend), BackendMemberRepository(backend), document_id
    )
    return EditorView(
        document=DocumentResponse.model_validate(access.document, from_attributes=True),
        user_email=session.user.email,
        role=access.role,
        can_edit=access.role.can_edit,
        can_share=access.role.can_manage_members,
        versions=[VersionResponse.from_entry(e) for e in history],
    )


@router.post("/doc/{document_id}/versions", response_model=SaveVersionResponse, status_code=201)
async def save(
    document_id: UUID,
    body: SaveVersionRequest,
    session: Session = Depends(get_current_session),
    backend: BackendClient = Depends(get_backend),
):
    versions = BackendVersionRepository(backend)
    await save_version(
        BackendDocumentRepository(backend),
        versions,
        document_id=document_id,
        user_id=session.user.id,
        content=body.content,
        comment=body.comment,
    )
    history = await list_version_history(versions, BackendMemberRepository(backend), document_id)
    return SaveVersionResponse(
        status="Version saved",
        content=body.content,
        comment="",
        versions=[VersionResponse.from_entry(e) for e in history],
    )


@router.get("/doc/{document_id}/versions/{version_id}", response_model=VersionResponse)
async def load_version(
    document_id: UUID,
    version_id: UUID,
    session: Session = Depends(get_current_session),
    backend: BackendClient = Depends(get_backend),
):
    version = await get_version(
        BackendDocumentRepository(backend),
        BackendVersionRepository(backend),
        document_id=document_id,
        version_id=version_id,
        user_id=session.user.id,
    )
    return VersionResponse(
        id=version.id,
        content=version.content,
        comment=version.comment,
        created_at=version.created_at,
        created_by=version.created_by,
    )
