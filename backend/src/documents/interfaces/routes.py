from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.domain.entities import User
from documents.application.services import (
    create_document,
    delete_document,
    get_document,
    list_documents,
    update_document,
)
from documents.infrastructure.composed_document_reader import DbComposedDocumentReader
from documents.infrastructure.document_repository import DbDocumentRepository
from documents.interfaces.schemas import (
    ComposedDocumentResponse,
    CreateDocumentRequest,
    DocumentResponse,
    UpdateDocumentRequest,
)
from shared.dependencies import get_current_user, get_db

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post("/", response_model=DocumentResponse, status_code=201)
async def create(
    body: CreateDocumentRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    repo = DbDocumentRepository(db)
    return await create_document(
        repo, owner=current_user.username, name=body.name, is_template=body.is_template
    )


@router.get("/", response_model=list[DocumentResponse])
async def list_all(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    repo = DbDocumentRepository(db)
    return await list_documents(repo, owner=current_user.username)


@router.get("/{document_id}", response_model=ComposedDocumentResponse)
async def get_one(
    document_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_document(
        DbDocumentRepository(db),
        DbComposedDocumentReader(db),
        owner=current_user.username,
        document_id=document_id,
    )


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update(
    document_id: int,
    body: UpdateDocumentRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    repo = DbDocumentRepository(db)
    return await update_document(
        repo,
        owner=current_user.username,
        document_id=document_id,
        props=body.model_dump(exclude_unset=True),
    )


@router.delete("/{document_id}", status_code=204)
async def delete(
    document_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    repo = DbDocumentRepository(db)
    await delete_document(repo, owner=current_user.username, document_id=document_id)
