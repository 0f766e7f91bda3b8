import logging
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from relationships.infrastructure.models import ExperienceTextSnippetModel

logger = logging.getLogger(__name__)


async def replace_text_snippet(
    session: AsyncSession,
    text_snippet_id: int,
    old_version: datetime,
    new_version: datetime,
) -> int:
    """Point every experience bullet at ``old_version`` to ``new_version``.

    Positions are left alone. Returns the number of rows moved, which may be 0.
    """
    log_prefix = (
        f"replace_text_snippet(text_snippet_id = {text_snippet_id}, "
        f"old_version = {old_version.isoformat()}, new_version = {new_version.isoformat()})"
    )
    logger.debug(log_prefix)

    result = await session.execute(
        update(ExperienceTextSnippetModel)
        .where(
            ExperienceTextSnippetModel.text_snippet_id == text_snippet_id,
            ExperienceTextSnippetModel.text_snippet_version == old_version,
        )
        .values(text_snippet_version=new_version)
        .execution_options(synchronize_session="fetch")
    )
    await session.commit()

    logger.info("%s: %s relationships repointed", log_prefix, result.rowcount)
    return result.rowcount
