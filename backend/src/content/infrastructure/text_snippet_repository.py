"""Versioned text snippets.

Snippet rows are never modified in place. ``update`` copies the source row
into a new version, and the previous version stays readable until it is
explicitly deleted.
"""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from content.domain.entities import TextSnippet
from content.infrastructure.models import TextSnippetIdModel, TextSnippetModel
from relationships.infrastructure.models import (
    DocumentExperienceModel,
    ExperienceTextSnippetModel,
)
from shared.exceptions import NotFoundError, ServerError
from shared.infrastructure.database import StoreViolation, classify_integrity_error

logger = logging.getLogger(__name__)


def _new_version(after: datetime | None = None) -> datetime:
    """A millisecond-precision timestamp, later than ``after`` when given."""
    now = datetime.now(timezone.utc)
    version = now.replace(microsecond=now.microsecond // 1000 * 1000)
    if after is not None:
        if after.tzinfo is None:
            after = after.replace(tzinfo=timezone.utc)
        version = max(version, after + timedelta(milliseconds=1))
    return version


class DbTextSnippetRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, owner: str, type: str, content: str) -> TextSnippet:
        log_prefix = f"text_snippets.add(owner = {owner}, type = {type})"
        logger.debug(log_prefix)

        try:
            identity = TextSnippetIdModel(owner=owner)
            self.session.add(identity)
            await self.session.flush()

            model = TextSnippetModel(
                id=identity.id,
                version=_new_version(),
                owner=owner,
                parent=None,
                type=type,
                content=content,
            )
            self.session.add(model)
            await self.session.commit()
        except IntegrityError as err:
            await self.session.rollback()
            violation = classify_integrity_error(err)
            logger.error("%s: %s violation", log_prefix, violation)
            if violation is StoreViolation.FOREIGN_KEY:
                raise NotFoundError(message=f"Owner {owner} of text snippet was not found.")
            raise

        await self.session.refresh(model)
        return _to_entity(model)

    async def get(self, id: int, version: datetime) -> TextSnippet:
        model = await self._get_model(id, version)
        if model is None:
            logger.error("text_snippets.get(id = %s, version = %s): not found", id, version)
            raise NotFoundError(
                message=f"Can not find text snippet with ID {id} and version {version}."
            )
        return _to_entity(model)

    async def get_all(self, owner: str) -> list[TextSnippet]:
        logger.debug("text_snippets.get_all(owner = %s)", owner)

        result = await self.session.execute(
            select(TextSnippetModel)
            .where(TextSnippetModel.owner == owner)
            .order_by(TextSnippetModel.id, TextSnippetModel.version)
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def get_all_for_experience(self, owner: str, experience_id: int) -> list[TextSnippet]:
        """Every snippet version attached to the experience in any document."""
        logger.debug(
            "text_snippets.get_all_for_experience(owner = %s, experience_id = %s)",
            owner,
            experience_id,
        )

        result = await self.session.execute(
            _attached_snippets()
            .where(
                TextSnippetModel.owner == owner,
                DocumentExperienceModel.experience_id == experience_id,
            )
            .distinct()
            .order_by(TextSnippetModel.id, TextSnippetModel.version)
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def get_all_for_experience_in_document(
        self, owner: str, document_id: int, experience_id: int
    ) -> list[TextSnippet]:
        """Snippets of one experience within one document, in bullet order."""
        logger.debug(
            "text_snippets.get_all_for_experience_in_document("
            "owner = %s, document_id = %s, experience_id = %s)",
            owner,
            document_id,
            experience_id,
        )

        result = await self.session.execute(
            _attached_snippets()
            .where(
                TextSnippetModel.owner == owner,
                DocumentExperienceModel.document_id == document_id,
                DocumentExperienceModel.experience_id == experience_id,
            )
            .order_by(ExperienceTextSnippetModel.position)
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def update(
        self, snippet: TextSnippet, type: str | None = None, content: str | None = None
    ) -> TextSnippet:
        """Create a new version of ``snippet``.

        Empty values keep what the source version has. Raises ``ServerError``
        when the source version no longer exists.
        """
        log_prefix = f"text_snippets.update(id = {snippet.id}, version = {snippet.version})"
        logger.debug(log_prefix)

        source = await self._get_model(snippet.id, snippet.version)
        if source is None:
            logger.error("%s: source version no longer exists", log_prefix)
            raise ServerError(
                f"Text snippet with ID {snippet.id} and version {snippet.version} was not found."
            )

        latest = await self.session.execute(
            select(func.max(TextSnippetModel.version)).where(TextSnippetModel.id == source.id)
        )
        new_version = _new_version(after=latest.scalar_one())
        logger.debug("%s: new version %s", log_prefix, new_version)

        model = TextSnippetModel(
            id=source.id,
            version=new_version,
            owner=source.owner,
            parent=source.version,
            type=type or source.type,
            content=content or source.content,
        )
        self.session.add(model)
        await self.session.commit()

        await self.session.refresh(model)
        return _to_entity(model)

    async def delete(self, snippet: TextSnippet) -> int:
        """Remove exactly one version. Other versions of the snippet are kept."""
        log_prefix = f"text_snippets.delete(id = {snippet.id}, version = {snippet.version})"
        logger.debug(log_prefix)

        result = await self.session.execute(
            delete(TextSnippetModel).where(
                TextSnippetModel.id == snippet.id,
                TextSnippetModel.version == snippet.version,
            )
        )
        await self.session.commit()

        logger.info("%s: %s text_snippets entries deleted", log_prefix, result.rowcount)
        return result.rowcount

    async def _get_model(self, id: int, version: datetime) -> TextSnippetModel | None:
        logger.debug("text_snippets.get(id = %s, version = %s)", id, version)
        result = await self.session.execute(
            select(TextSnippetModel)
            .where(TextSnippetModel.id == id, TextSnippetModel.version == version)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()


def _attached_snippets():
    return (
        select(TextSnippetModel)
        .join(
            ExperienceTextSnippetModel,
            (ExperienceTextSnippetModel.text_snippet_id == TextSnippetModel.id)
            & (ExperienceTextSnippetModel.text_snippet_version == TextSnippetModel.version),
        )
        .join(
            DocumentExperienceModel,
            ExperienceTextSnippetModel.document_x_experience_id == DocumentExperienceModel.id,
        )
    )


def _to_entity(model: TextSnippetModel) -> TextSnippet:
    return TextSnippet(
        id=model.id,
        version=model.version,
        owner=model.owner,
        parent=model.parent,
        type=model.type,
        content=model.content,
    )
