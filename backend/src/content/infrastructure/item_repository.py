"""Storage for section items: educations, experiences, skills and sections.

The item tables differ only in their columns, so one repository class serves
all of them, configured by an ``ItemKind``.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from relationships.infrastructure.relationship_repository import RelationshipKind
from shared.exceptions import DuplicateEntryError, NotFoundError, ServerError
from shared.infrastructure.database import StoreViolation, classify_integrity_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemKind:
    label: str
    model: type
    entity: type
    owned: bool = True
    updatable: tuple[str, ...] = ()

    @property
    def table_name(self) -> str:
        return self.model.__tablename__


class DbSectionItemRepository:
    def __init__(self, session: AsyncSession, kind: ItemKind):
        self.session = session
        self.kind = kind

    async def add(self, props: dict[str, Any]):
        kind = self.kind
        log_prefix = f"{kind.table_name}.add({props})"
        logger.debug(log_prefix)

        allowed = {f.name for f in fields(kind.entity)} - {"id"}
        model = kind.model(**{k: v for k, v in props.items() if k in allowed})
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as err:
            await self.session.rollback()
            violation = classify_integrity_error(err)
            logger.error("%s: %s violation", log_prefix, violation)
            if violation is StoreViolation.UNIQUE:
                raise DuplicateEntryError(f"{kind.label.capitalize()} already exists.")
            if violation is StoreViolation.FOREIGN_KEY:
                raise NotFoundError(message=f"Owner of {kind.label} was not found.")
            raise

        await self.session.refresh(model)
        return _to_entity(kind, model)

    async def get(self, item_id: int):
        kind = self.kind
        logger.debug("%s.get(id = %s)", kind.table_name, item_id)

        result = await self.session.execute(
            select(kind.model)
            .where(kind.model.id == item_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        if model is None:
            logger.error("%s.get(id = %s): not found", kind.table_name, item_id)
            raise NotFoundError(message=f"Can not find {kind.label} with ID {item_id}.")
        return _to_entity(kind, model)

    async def get_all(self, owner: str | None = None) -> list:
        kind = self.kind
        logger.debug("%s.get_all(owner = %s)", kind.table_name, owner)

        stmt = select(kind.model).order_by(kind.model.id)
        if kind.owned and owner is not None:
            stmt = stmt.where(kind.model.owner == owner)
        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return [_to_entity(kind, m) for m in result.scalars().all()]

    async def get_all_in_container(self, link_kind: RelationshipKind, container_id: int) -> list:
        """Items attached to a container, in the container's order."""
        kind = self.kind
        logger.debug(
            "%s.get_all_in_container(%s = %s)",
            kind.table_name,
            link_kind.container_key,
            container_id,
        )

        order_by = link_kind.model.position if link_kind.positioned else kind.model.id
        result = await self.session.execute(
            select(kind.model)
            .join(link_kind.model, link_kind.content_column == kind.model.id)
            .where(link_kind.container_column == container_id)
            .order_by(order_by)
            .execution_options(populate_existing=True)
        )
        return [_to_entity(kind, m) for m in result.scalars().all()]

    async def update(self, item, props: dict[str, Any]):
        """Write the updatable subset of ``props``. Unknown keys are ignored."""
        kind = self.kind
        log_prefix = f"{kind.table_name}.update(id = {item.id}, props = {props})"
        logger.debug(log_prefix)

        values = {k: v for k, v in props.items() if k in kind.updatable}
        if not values:
            return item

        try:
            result = await self.session.execute(
                update(kind.model)
                .where(kind.model.id == item.id)
                .values(**values)
                .returning(kind.model)
            )
            model = result.scalar_one_or_none()
            if model is None:
                await self.session.rollback()
                logger.error("%s: %s no longer exists", log_prefix, kind.label)
                raise ServerError(f"{kind.label.capitalize()} with ID {item.id} was not found.")
            updated = _to_entity(kind, model)
            await self.session.commit()
        except IntegrityError as err:
            await self.session.rollback()
            if classify_integrity_error(err) is StoreViolation.UNIQUE:
                raise DuplicateEntryError(f"{kind.label.capitalize()} already exists.")
            raise

        return updated

    async def delete(self, item) -> int:
        kind = self.kind
        log_prefix = f"{kind.table_name}.delete(id = {item.id})"
        logger.debug(log_prefix)

        result = await self.session.execute(delete(kind.model).where(kind.model.id == item.id))
        await self.session.commit()

        logger.info("%s: %s %s entries deleted", log_prefix, result.rowcount, kind.table_name)
        return result.rowcount


def _to_entity(kind: ItemKind, model):
    return kind.entity(**{f.name: getattr(model, f.name) for f in fields(kind.entity)})
