from datetime import datetime

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from auth.domain.entities import User
from content.application.services import (
    delete_item,
    get_contact_info,
    get_item,
    get_text_snippet,
    list_items,
    list_sections,
    list_text_snippets,
    save_contact_info,
    update_item,
)
from content.infrastructure.contact_info_repository import DbContactInfoRepository
from content.infrastructure.item_repository import DbSectionItemRepository, ItemKind
from content.infrastructure.kinds import EDUCATIONS, EXPERIENCES, SECTIONS, SKILLS
from content.infrastructure.text_snippet_repository import DbTextSnippetRepository
from content.interfaces.schemas import (
    ContactInfoRequest,
    ContactInfoResponse,
    EducationResponse,
    ExperienceResponse,
    SectionResponse,
    SkillResponse,
    TextSnippetResponse,
    UpdateEducationRequest,
    UpdateExperienceRequest,
    UpdateSkillRequest,
)
from shared.dependencies import get_current_user, get_db
from shared.exceptions import NotFoundError

router = APIRouter(prefix="/api", tags=["content"])


def _add_item_routes(
    path: str,
    kind: ItemKind,
    response_model: type[BaseModel],
    update_model: type[BaseModel],
) -> None:
    """Register list/get/update/delete routes for one owned item type."""

    async def list_all(
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await list_items(DbSectionItemRepository(db, kind), owner=current_user.username)

    async def get_one(
        item_id: int,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await get_item(
            DbSectionItemRepository(db, kind), owner=current_user.username, item_id=item_id
        )

    async def update(
        item_id: int,
        body: update_model,  # type: ignore[valid-type]
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await update_item(
            DbSectionItemRepository(db, kind),
            owner=current_user.username,
            item_id=item_id,
            props=body.model_dump(exclude_unset=True),
            snippets=DbTextSnippetRepository(db),
        )

    async def delete(
        item_id: int,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        await delete_item(
            DbSectionItemRepository(db, kind), owner=current_user.username, item_id=item_id
        )

    router.add_api_route(f"/{path}", list_all, methods=["GET"], response_model=list[response_model])
    router.add_api_route(
        f"/{path}/{{item_id}}", get_one, methods=["GET"], response_model=response_model
    )
    router.add_api_route(
        f"/{path}/{{item_id}}", update, methods=["PATCH"], response_model=response_model
    )
    router.add_api_route(f"/{path}/{{item_id}}", delete, methods=["DELETE"], status_code=204)


_add_item_routes("educations", EDUCATIONS, EducationResponse, UpdateEducationRequest)
_add_item_routes("experiences", EXPERIENCES, ExperienceResponse, UpdateExperienceRequest)
_add_item_routes("skills", SKILLS, SkillResponse, UpdateSkillRequest)


@router.get("/sections", response_model=list[SectionResponse])
async def sections(db: AsyncSession = Depends(get_db)):
    return await list_sections(DbSectionItemRepository(db, SECTIONS))


@router.get("/text-snippets", response_model=list[TextSnippetResponse])
async def text_snippets(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_text_snippets(DbTextSnippetRepository(db), owner=current_user.username)


@router.get("/contact-info", response_model=ContactInfoResponse)
async def read_contact_info(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    info = await get_contact_info(DbContactInfoRepository(db), current_user.username)
    if info is None:
        raise NotFoundError("Contact info", current_user.username)
    return info


@router.put("/contact-info", response_model=ContactInfoResponse)
async def write_contact_info(
    body: ContactInfoRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    created, info = await save_contact_info(
        DbContactInfoRepository(db),
        current_user.username,
        body.model_dump(exclude_unset=True),
    )
    response.status_code = 201 if created else 200
    return info


@router.get("/text-snippets/{text_snippet_id}", response_model=TextSnippetResponse)
async def text_snippet(
    text_snippet_id: int,
    version: datetime,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_text_snippet(
        DbTextSnippetRepository(db),
        owner=current_user.username,
        id=text_snippet_id,
        version=version,
    )
