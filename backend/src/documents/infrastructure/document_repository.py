import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from documents.domain.entities import Document
from documents.infrastructure.models import DocumentModel
from shared.exceptions import ConflictError, NotFoundError, ServerError
from shared.infrastructure.database import StoreViolation, classify_integrity_error

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "is_template", "is_locked")


class DbDocumentRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, document_id: int) -> Document | None:
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.id == document_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list_by_owner(self, owner: str) -> list[Document]:
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.owner == owner)
            .order_by(DocumentModel.id)
            .execution_options(populate_existing=True)
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def get_master(self, owner: str) -> Document | None:
        result = await self.session.execute(
            select(DocumentModel).where(
                DocumentModel.owner == owner, DocumentModel.is_master.is_(True)
            )
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def create(self, document: Document) -> Document:
        model = DocumentModel(
            name=document.name,
            owner=document.owner,
            is_master=document.is_master,
            is_template=document.is_template,
            is_locked=document.is_locked,
        )
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as err:
            await self.session.rollback()
            violation = classify_integrity_error(err)
            logger.error(
                "documents.create(name = %r, owner = %r): %s violation",
                document.name,
                document.owner,
                violation,
            )
            if violation is StoreViolation.UNIQUE:
                raise ConflictError(f"Document named {document.name!r} already exists")
            if violation is StoreViolation.FOREIGN_KEY:
                raise NotFoundError("User", document.owner)
            raise

        await self.session.refresh(model)
        return _to_entity(model)

    async def update(self, document_id: int, props: dict[str, Any]) -> Document:
        values = {k: v for k, v in props.items() if k in UPDATABLE_FIELDS}
        values["last_updated"] = datetime.now(timezone.utc)

        try:
            result = await self.session.execute(
                update(DocumentModel).where(DocumentModel.id == document_id).values(**values)
            )
            if result.rowcount == 0:
                await self.session.rollback()
                raise ServerError(f"Document with ID {document_id} was not found.")
            await self.session.commit()
        except IntegrityError as err:
            await self.session.rollback()
            if classify_integrity_error(err) is StoreViolation.UNIQUE:
                raise ConflictError(f"Document named {values.get('name')!r} already exists")
            raise

        return await self.get_by_id(document_id)

    async def delete(self, document_id: int) -> int:
        result = await self.session.execute(
            delete(DocumentModel).where(DocumentModel.id == document_id)
        )
        await self.session.commit()

        logger.info("documents.delete(id = %s): %s documents deleted", document_id, result.rowcount)
        return result.rowcount


def _to_entity(model: DocumentModel) -> Document:
    return Document(
        id=model.id,
        name=model.name,
        owner=model.owner,
        is_master=model.is_master,
        is_template=model.is_template,
        is_locked=model.is_locked,
        created_on=model.created_on,
        last_updated=model.last_updated,
    )
