"""Generic storage for positioned many-to-many relationships.

Every document/content pairing (and experience/text snippet pairing) has the
same shape: a container id, a content id and usually a position. Instead of
one repository per table, a single ``DbRelationshipRepository`` is configured
with a ``RelationshipKind`` describing the table and its key columns.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import (
    AppError,
    BadRequestError,
    DuplicateEntryError,
    NotFoundError,
    ServerError,
)
from shared.infrastructure.database import StoreViolation, classify_integrity_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationshipKind:
    """Describes one relationship table.

    ``container_key`` and ``content_key`` are the attribute names shared by the
    ORM model and the entity dataclass; any further entity fields (such as a
    snippet version) are copied through untouched.
    """

    model: type
    entity: type
    container_key: str
    content_key: str
    container_label: str
    content_label: str
    positioned: bool = True

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    @property
    def container_column(self):
        return getattr(self.model, self.container_key)

    @property
    def content_column(self):
        return getattr(self.model, self.content_key)


class DbRelationshipRepository:
    def __init__(self, session: AsyncSession, kind: RelationshipKind):
        self.session = session
        self.kind = kind

    async def add(self, props: dict[str, Any], not_found_message: str | None = None):
        """Insert one relationship row.

        A missing container or content surfaces as ``NotFoundError``; an
        existing relationship (or taken position) as ``DuplicateEntryError``.
        """
        kind = self.kind
        log_prefix = f"{kind.table_name}.add({props})"
        logger.debug(log_prefix)

        model = kind.model(**_column_values(kind, props))
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as err:
            await self.session.rollback()
            violation = classify_integrity_error(err)
            logger.error("%s: %s violation", log_prefix, violation)

            if violation is StoreViolation.FOREIGN_KEY:
                raise NotFoundError(
                    message=not_found_message
                    or (
                        f"{kind.container_label} or {kind.content_label} was not found.  "
                        f"{kind.container_label} ID: {props.get(kind.container_key)}, "
                        f"{kind.content_label} ID: {props.get(kind.content_key)}."
                    )
                )
            if violation is StoreViolation.UNIQUE:
                raise DuplicateEntryError(
                    f"{kind.content_label.capitalize()} is already attached to "
                    f"{kind.container_label.lower()}."
                )
            if violation is StoreViolation.CHECK:
                raise BadRequestError("Position can not be less than 0.")
            raise

        await self.session.refresh(model)
        return _to_entity(kind, model)

    async def get_all(self, container_id: int) -> list:
        """All rows in a container, in display order."""
        kind = self.kind
        logger.debug("%s.get_all(%s = %s)", kind.table_name, kind.container_key, container_id)

        if kind.positioned:
            order_by = (kind.model.position, kind.content_column)
        else:
            order_by = (kind.content_column,)
        result = await self.session.execute(
            select(kind.model)
            .where(kind.container_column == container_id)
            .order_by(*order_by)
            .execution_options(populate_existing=True)
        )
        return [_to_entity(kind, m) for m in result.scalars().all()]

    async def get(self, container_id: int, content_id: int, not_found_message: str | None = None):
        kind = self.kind
        log_prefix = (
            f"{kind.table_name}.get({kind.container_key} = {container_id}, "
            f"{kind.content_key} = {content_id})"
        )
        logger.debug(log_prefix)

        result = await self.session.execute(
            select(kind.model)
            .where(
                kind.container_column == container_id,
                kind.content_column == content_id,
            )
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        if model is None:
            logger.error("%s: relationship not found", log_prefix)
            raise NotFoundError(
                message=not_found_message
                or (
                    f"Can not find {kind.container_label.lower()}-{kind.content_label} relation "
                    f"with {kind.container_label.lower()} ID {container_id} and "
                    f"{kind.content_label} ID {content_id}."
                )
            )
        return _to_entity(kind, model)

    async def count(self, container_id: int) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(self.kind.model)
            .where(self.kind.container_column == container_id)
        )
        return result.scalar_one()

    async def update(self, link, position: int):
        """Move a single row to ``position`` and return the refreshed entity."""
        kind = self.kind
        self._require_positioned()
        container_id = getattr(link, kind.container_key)
        content_id = getattr(link, kind.content_key)
        log_prefix = (
            f"{kind.table_name}.update({kind.container_key} = {container_id}, "
            f"{kind.content_key} = {content_id}, position = {position})"
        )
        logger.debug(log_prefix)

        if position < 0:
            logger.error("%s: negative position", log_prefix)
            raise BadRequestError("Position can not be less than 0.")

        try:
            result = await self.session.execute(
                update(kind.model)
                .where(
                    kind.container_column == container_id,
                    kind.content_column == content_id,
                )
                .values(position=position)
                .returning(kind.model)
            )
            model = result.scalar_one_or_none()
            if model is None:
                await self.session.rollback()
                logger.error("%s: relationship no longer exists", log_prefix)
                raise ServerError(
                    f"{kind.container_label}-{kind.content_label} relation with "
                    f"{kind.container_label.lower()} ID {container_id} and "
                    f"{kind.content_label} ID {content_id} was not found."
                )
            updated = _to_entity(kind, model)
            await self.session.commit()
        except IntegrityError as err:
            await self.session.rollback()
            if classify_integrity_error(err) is StoreViolation.UNIQUE:
                raise DuplicateEntryError(f"Position {position} is already taken.")
            raise

        return updated

    async def update_all_positions(self, container_id: int, content_ids: list[int]) -> list:
        """Reorder every row of a container to match ``content_ids``.

        The supplied ids must cover the whole container. The new position of
        each row is its index in ``content_ids`` and the returned entities keep
        that order. The writes are all-or-nothing.
        """
        kind = self.kind
        self._require_positioned()
        log_prefix = (
            f"{kind.table_name}.update_all_positions({kind.container_key} = {container_id}, "
            f"{kind.content_key}s = {content_ids})"
        )
        logger.debug(log_prefix)

        existing = await self.count(container_id)
        if existing != len(content_ids):
            logger.error(
                "%s: number of ids to reposition does not match the container, which has %s",
                log_prefix,
                existing,
            )
            raise ServerError("Number of things to reposition must be total number in container.")

        results = []
        try:
            for position, content_id in enumerate(content_ids):
                result = await self.session.execute(
                    update(kind.model)
                    .where(
                        kind.container_column == container_id,
                        kind.content_column == content_id,
                    )
                    .values(position=position)
                    .returning(kind.model)
                )
                model = result.scalar_one_or_none()
                if model is None:
                    raise ServerError(
                        f"{kind.content_label.capitalize()} ID {content_id} is not in "
                        f"{kind.container_label.lower()} {container_id}."
                    )
                results.append(_to_entity(kind, model))

            await self.session.commit()
        except AppError:
            await self.session.rollback()
            logger.error("%s: reposition aborted", log_prefix)
            raise
        except SQLAlchemyError as err:
            await self.session.rollback()
            logger.error("%s: %s", log_prefix, err)
            raise ServerError("Error when updating positions in database.") from err

        return results

    async def delete(self, container_id: int, content_id: int) -> int:
        """Remove one relationship. Missing rows are not an error."""
        kind = self.kind
        log_prefix = (
            f"{kind.table_name}.delete({kind.container_key} = {container_id}, "
            f"{kind.content_key} = {content_id})"
        )
        logger.debug(log_prefix)

        result = await self.session.execute(
            delete(kind.model).where(
                kind.container_column == container_id,
                kind.content_column == content_id,
            )
        )
        await self.session.commit()

        logger.info("%s: %s %s entries deleted", log_prefix, result.rowcount, kind.table_name)
        return result.rowcount

    def _require_positioned(self) -> None:
        if not self.kind.positioned:
            raise BadRequestError(
                f"{self.kind.content_label.capitalize()}s in a "
                f"{self.kind.container_label.lower()} have no position."
            )


def _column_values(kind: RelationshipKind, props: dict[str, Any]) -> dict[str, Any]:
    allowed = {f.name for f in fields(kind.entity)}
    return {key: value for key, value in props.items() if key in allowed}


def _to_entity(kind: RelationshipKind, model):
    return kind.entity(**{f.name: getattr(model, f.name) for f in fields(kind.entity)})
