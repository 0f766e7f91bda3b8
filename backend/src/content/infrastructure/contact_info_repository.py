import logging
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from content.domain.entities import ContactInfo
from content.infrastructure.models import ContactInfoModel
from shared.exceptions import ConflictError, NotFoundError
from shared.infrastructure.database import StoreViolation, classify_integrity_error

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("full_name", "location", "email", "phone", "linkedin", "github")


class DbContactInfoRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, username: str) -> ContactInfo | None:
        result = await self.session.execute(
            select(ContactInfoModel)
            .where(ContactInfoModel.username == username)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def add(self, info: ContactInfo) -> ContactInfo:
        model = ContactInfoModel(
            username=info.username,
            full_name=info.full_name,
            location=info.location,
            email=info.email,
            phone=info.phone,
            linkedin=info.linkedin,
            github=info.github,
        )
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as err:
            await self.session.rollback()
            violation = classify_integrity_error(err)
            if violation is StoreViolation.UNIQUE:
                raise ConflictError("Contact info already exists")
            if violation is StoreViolation.FOREIGN_KEY:
                raise NotFoundError("User", info.username)
            raise

        await self.session.refresh(model)
        return _to_entity(model)

    async def update(self, username: str, props: dict[str, Any]) -> ContactInfo:
        values = {k: v for k, v in props.items() if k in UPDATABLE_FIELDS}
        if values:
            await self.session.execute(
                update(ContactInfoModel)
                .where(ContactInfoModel.username == username)
                .values(**values)
            )
            await self.session.commit()

        info = await self.get(username)
        if info is None:
            raise NotFoundError("Contact info", username)
        return info


def _to_entity(model: ContactInfoModel) -> ContactInfo:
    return ContactInfo(
        username=model.username,
        full_name=model.full_name,
        location=model.location,
        email=model.email,
        phone=model.phone,
        linkedin=model.linkedin,
        github=model.github,
    )
