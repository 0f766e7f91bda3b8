"""Read path for a fully composed document.

This bypasses the relationship engine and reads the store directly: one
query per layer, every collection already in display order.
"""

import logging
from itertools import groupby

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from content.domain.entities import TextSnippet
from content.infrastructure.contact_info_repository import DbContactInfoRepository
from content.infrastructure.item_repository import DbSectionItemRepository
from content.infrastructure.kinds import EDUCATIONS, SECTIONS
from content.infrastructure.models import ExperienceModel, TextSnippetModel
from documents.domain.entities import ComposedDocument, ComposedExperience
from documents.infrastructure.document_repository import DbDocumentRepository
from relationships.infrastructure.kinds import DOCUMENT_EDUCATIONS, DOCUMENT_SECTIONS
from relationships.infrastructure.models import (
    DocumentExperienceModel,
    ExperienceTextSnippetModel,
)

logger = logging.getLogger(__name__)


class DbComposedDocumentReader:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def read(self, document_id: int) -> ComposedDocument:
        logger.debug("composed_document.read(id = %s)", document_id)

        document = await DbDocumentRepository(self.session).get_by_id(document_id)
        if document is None:
            return ComposedDocument()

        sections = DbSectionItemRepository(self.session, SECTIONS)
        educations = DbSectionItemRepository(self.session, EDUCATIONS)

        return ComposedDocument(
            id=document.id,
            name=document.name,
            owner=document.owner,
            created_on=document.created_on,
            last_updated=document.last_updated,
            is_master=document.is_master,
            is_template=document.is_template,
            is_locked=document.is_locked,
            contact_info=await DbContactInfoRepository(self.session).get(document.owner),
            sections=await sections.get_all_in_container(DOCUMENT_SECTIONS, document.id),
            educations=await educations.get_all_in_container(DOCUMENT_EDUCATIONS, document.id),
            experiences=await self._read_experiences(document.id),
        )

    async def _read_experiences(self, document_id: int) -> list[ComposedExperience]:
        result = await self.session.execute(
            select(DocumentExperienceModel.id, ExperienceModel)
            .join(ExperienceModel, DocumentExperienceModel.experience_id == ExperienceModel.id)
            .where(DocumentExperienceModel.document_id == document_id)
            .order_by(DocumentExperienceModel.position)
            .execution_options(populate_existing=True)
        )
        rows = result.all()
        if not rows:
            return []

        bullets = await self._read_bullets([dxe_id for dxe_id, _ in rows])
        return [
            ComposedExperience(
                id=experience.id,
                title=experience.title,
                organization=experience.organization,
                location=experience.location,
                start_date=experience.start_date,
                end_date=experience.end_date,
                bullets=bullets.get(dxe_id, []),
            )
            for dxe_id, experience in rows
        ]

    async def _read_bullets(
        self, document_x_experience_ids: list[int]
    ) -> dict[int, list[TextSnippet]]:
        result = await self.session.execute(
            select(ExperienceTextSnippetModel.document_x_experience_id, TextSnippetModel)
            .join(
                TextSnippetModel,
                (ExperienceTextSnippetModel.text_snippet_id == TextSnippetModel.id)
                & (ExperienceTextSnippetModel.text_snippet_version == TextSnippetModel.version),
            )
            .where(
                ExperienceTextSnippetModel.document_x_experience_id.in_(document_x_experience_ids)
            )
            .order_by(
                ExperienceTextSnippetModel.document_x_experience_id,
                ExperienceTextSnippetModel.position,
            )
            .execution_options(populate_existing=True)
        )
        return {
            dxe_id: [
                TextSnippet(
                    id=snippet.id,
                    version=snippet.version,
                    owner=snippet.owner,
                    parent=snippet.parent,
                    type=snippet.type,
                    content=snippet.content,
                )
                for _, snippet in group
            ]
            for dxe_id, group in groupby(result.all(), key=lambda row: row[0])
        }
