from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from auth.domain.entities import User
from composition.application.services import (
    create_relationship_to_existing,
    create_section_item,
    delete_relationship,
    get_items_in_document,
    update_container_positions,
)
from composition.application.text_snippet_services import (
    attach_text_snippet,
    create_text_snippet,
    delete_text_snippet,
    detach_text_snippet,
    get_text_snippets,
    get_text_snippets_in_document,
    update_text_snippet,
    update_text_snippet_positions,
)
from composition.interfaces.schemas import (
    AttachTextSnippetRequest,
    CreateTextSnippetRequest,
    DocumentXEducationResponse,
    DocumentXExperienceResponse,
    DocumentXSectionResponse,
    DocumentXSkillResponse,
    EducationCreatedResponse,
    ExperienceCreatedResponse,
    ExperienceXTextSnippetResponse,
    PositionsRequest,
    SkillCreatedResponse,
    TextSnippetCreatedResponse,
    UpdateTextSnippetRequest,
)
from content.infrastructure.item_repository import DbSectionItemRepository, ItemKind
from content.infrastructure.kinds import EDUCATIONS, EXPERIENCES, SECTIONS, SKILLS
from content.infrastructure.text_snippet_repository import DbTextSnippetRepository
from content.interfaces.schemas import (
    CreateEducationRequest,
    CreateExperienceRequest,
    CreateSkillRequest,
    EducationResponse,
    ExperienceResponse,
    SectionResponse,
    SkillResponse,
    TextSnippetResponse,
)
from documents.infrastructure.document_repository import DbDocumentRepository
from relationships.infrastructure.kinds import (
    DOCUMENT_EDUCATIONS,
    DOCUMENT_EXPERIENCES,
    DOCUMENT_SECTIONS,
    DOCUMENT_SKILLS,
    EXPERIENCE_TEXT_SNIPPETS,
)
from relationships.infrastructure.relationship_repository import (
    DbRelationshipRepository,
    RelationshipKind,
)
from shared.dependencies import get_current_user, get_db

router = APIRouter(prefix="/api", tags=["composition"])


def _add_document_item_routes(
    segment: str,
    item_kind: ItemKind,
    link_kind: RelationshipKind,
    item_response: type[BaseModel],
    link_response: type[BaseModel],
    create_request: type[BaseModel] | None = None,
    created_response: type[BaseModel] | None = None,
) -> None:
    """Register the routes that put one item type into documents."""
    base = f"/documents/{{document_id}}/{segment}"
    item_key = item_kind.label
    link_key = f"document_x_{item_kind.label}"

    def repos(db: AsyncSession):
        return (
            DbDocumentRepository(db),
            DbSectionItemRepository(db, item_kind),
            DbRelationshipRepository(db, link_kind),
        )

    async def list_in_document(
        document_id: int,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await get_items_in_document(
            *repos(db), owner=current_user.username, document_id=document_id
        )

    async def attach(
        document_id: int,
        item_id: int,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await create_relationship_to_existing(
            *repos(db), owner=current_user.username, document_id=document_id, item_id=item_id
        )

    async def detach(
        document_id: int,
        item_id: int,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        documents, _, links = repos(db)
        await delete_relationship(
            documents,
            links,
            owner=current_user.username,
            document_id=document_id,
            item_id=item_id,
        )

    router.add_api_route(
        base, list_in_document, methods=["GET"], response_model=list[item_response]
    )
    router.add_api_route(
        f"{base}/{{item_id}}",
        attach,
        methods=["POST"],
        response_model=link_response,
        status_code=201,
    )
    router.add_api_route(f"{base}/{{item_id}}", detach, methods=["DELETE"], status_code=204)

    if link_kind.positioned:

        async def reorder(
            document_id: int,
            body: PositionsRequest,
            current_user: User = Depends(get_current_user),
            db: AsyncSession = Depends(get_db),
        ):
            return await update_container_positions(
                *repos(db),
                owner=current_user.username,
                document_id=document_id,
                ordered_item_ids=body.ids,
            )

        router.add_api_route(base, reorder, methods=["PUT"], response_model=list[item_response])

    if create_request is not None:

        async def create(
            document_id: int,
            body: create_request,  # type: ignore[valid-type]
            current_user: User = Depends(get_current_user),
            db: AsyncSession = Depends(get_db),
        ):
            item, link = await create_section_item(
                *repos(db),
                owner=current_user.username,
                document_id=document_id,
                props=body.model_dump(),
                snippets=DbTextSnippetRepository(db),
            )
            return {item_key: item, link_key: link}

        router.add_api_route(
            base, create, methods=["POST"], response_model=created_response, status_code=201
        )


_add_document_item_routes(
    "sections", SECTIONS, DOCUMENT_SECTIONS, SectionResponse, DocumentXSectionResponse
)
_add_document_item_routes(
    "educations",
    EDUCATIONS,
    DOCUMENT_EDUCATIONS,
    EducationResponse,
    DocumentXEducationResponse,
    CreateEducationRequest,
    EducationCreatedResponse,
)
_add_document_item_routes(
    "experiences",
    EXPERIENCES,
    DOCUMENT_EXPERIENCES,
    ExperienceResponse,
    DocumentXExperienceResponse,
    CreateExperienceRequest,
    ExperienceCreatedResponse,
)
_add_document_item_routes(
    "skills",
    SKILLS,
    DOCUMENT_SKILLS,
    SkillResponse,
    DocumentXSkillResponse,
    CreateSkillRequest,
    SkillCreatedResponse,
)


BULLETS = "/documents/{document_id}/experiences/{experience_id}/text-snippets"


@router.post(BULLETS, response_model=TextSnippetCreatedResponse, status_code=201)
async def create_bullet(
    document_id: int,
    experience_id: int,
    body: CreateTextSnippetRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    snippet, link = await create_text_snippet(
        DbDocumentRepository(db),
        DbSectionItemRepository(db, EXPERIENCES),
        DbRelationshipRepository(db, DOCUMENT_EXPERIENCES),
        DbRelationshipRepository(db, EXPERIENCE_TEXT_SNIPPETS),
        DbTextSnippetRepository(db),
        owner=current_user.username,
        document_id=document_id,
        experience_id=experience_id,
        props=body.model_dump(),
    )
    return {"text_snippet": snippet, "experience_x_text_snippet": link}


@router.get(BULLETS, response_model=list[TextSnippetResponse])
async def list_bullets(
    document_id: int,
    experience_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_text_snippets_in_document(
        DbDocumentRepository(db),
        DbTextSnippetRepository(db),
        owner=current_user.username,
        document_id=document_id,
        experience_id=experience_id,
    )


@router.put(BULLETS, response_model=list[TextSnippetResponse])
async def reorder_bullets(
    document_id: int,
    experience_id: int,
    body: PositionsRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await update_text_snippet_positions(
        DbDocumentRepository(db),
        DbRelationshipRepository(db, DOCUMENT_EXPERIENCES),
        DbRelationshipRepository(db, EXPERIENCE_TEXT_SNIPPETS),
        DbTextSnippetRepository(db),
        owner=current_user.username,
        document_id=document_id,
        experience_id=experience_id,
        text_snippet_ids=body.ids,
    )


@router.post(
    BULLETS + "/{text_snippet_id}",
    response_model=ExperienceXTextSnippetResponse,
    status_code=201,
)
async def attach_bullet(
    document_id: int,
    experience_id: int,
    text_snippet_id: int,
    body: AttachTextSnippetRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await attach_text_snippet(
        DbDocumentRepository(db),
        DbSectionItemRepository(db, EXPERIENCES),
        DbRelationshipRepository(db, DOCUMENT_EXPERIENCES),
        DbRelationshipRepository(db, EXPERIENCE_TEXT_SNIPPETS),
        DbTextSnippetRepository(db),
        owner=current_user.username,
        document_id=document_id,
        experience_id=experience_id,
        text_snippet_id=text_snippet_id,
        text_snippet_version=body.version,
    )


@router.delete(BULLETS + "/{text_snippet_id}", status_code=204)
async def detach_bullet(
    document_id: int,
    experience_id: int,
    text_snippet_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await detach_text_snippet(
        DbDocumentRepository(db),
        DbRelationshipRepository(db, DOCUMENT_EXPERIENCES),
        DbRelationshipRepository(db, EXPERIENCE_TEXT_SNIPPETS),
        owner=current_user.username,
        document_id=document_id,
        experience_id=experience_id,
        text_snippet_id=text_snippet_id,
    )


@router.get(
    "/experiences/{experience_id}/text-snippets", response_model=list[TextSnippetResponse]
)
async def experience_snippets(
    experience_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_text_snippets(
        DbSectionItemRepository(db, EXPERIENCES),
        DbTextSnippetRepository(db),
        owner=current_user.username,
        experience_id=experience_id,
    )


@router.patch("/text-snippets/{text_snippet_id}", response_model=TextSnippetResponse)
async def update_snippet(
    text_snippet_id: int,
    body: UpdateTextSnippetRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await update_text_snippet(
        db,
        DbTextSnippetRepository(db),
        owner=current_user.username,
        text_snippet_id=text_snippet_id,
        text_snippet_version=body.version,
        props=body.model_dump(exclude={"version"}, exclude_none=True),
    )


@router.delete("/text-snippets/{text_snippet_id}", status_code=204)
async def delete_snippet(
    text_snippet_id: int,
    version: datetime,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await delete_text_snippet(
        DbTextSnippetRepository(db),
        owner=current_user.username,
        text_snippet_id=text_snippet_id,
        text_snippet_version=version,
    )
