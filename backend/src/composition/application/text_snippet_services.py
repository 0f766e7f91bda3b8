"""Bullet points: text snippets placed inside an experience of a document.

A snippet is attached to a documents_x_experiences row rather than to the
experience itself, so the same experience can carry different bullets in
different documents.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from content.domain.entities import TextSnippet
from content.domain.repository import SectionItemRepository, TextSnippetRepository
from documents.application.services import get_owned_document
from documents.domain.repository import DocumentRepository
from relationships.infrastructure.relationship_repository import DbRelationshipRepository
from relationships.infrastructure.repointing import replace_text_snippet
from shared.exceptions import AuthorizationError, BadRequestError, DuplicateEntryError
from shared.ownership import ensure_owner, last_position

logger = logging.getLogger(__name__)


async def create_text_snippet(
    documents: DocumentRepository,
    experiences: SectionItemRepository,
    experience_links: DbRelationshipRepository,
    snippet_links: DbRelationshipRepository,
    snippets: TextSnippetRepository,
    owner: str,
    document_id: int,
    experience_id: int,
    props: dict[str, Any],
):
    """Create a snippet and add it as the last bullet of an experience.

    Only allowed in the master document.
    """
    document = await get_owned_document(documents, owner, document_id)
    if not document.is_master:
        logger.error(
            "User %r attempted to add a text snippet to non-master document %s",
            owner,
            document_id,
        )
        raise AuthorizationError("Text snippet can only be added to the master resume.")

    ensure_owner(await experiences.get(experience_id), owner, "experience")
    container_id = await _document_x_experience_id(experience_links, document_id, experience_id)

    snippet = await snippets.add(owner=owner, type=props["type"], content=props["content"])
    link = await snippet_links.add(
        {
            "document_x_experience_id": container_id,
            "text_snippet_id": snippet.id,
            "text_snippet_version": snippet.version,
            "position": last_position(await snippet_links.get_all(container_id)) + 1,
        }
    )
    return snippet, link


async def attach_text_snippet(
    documents: DocumentRepository,
    experiences: SectionItemRepository,
    experience_links: DbRelationshipRepository,
    snippet_links: DbRelationshipRepository,
    snippets: TextSnippetRepository,
    owner: str,
    document_id: int,
    experience_id: int,
    text_snippet_id: int,
    text_snippet_version: datetime,
):
    await get_owned_document(documents, owner, document_id)
    ensure_owner(await experiences.get(experience_id), owner, "experience")
    snippet = ensure_owner(
        await snippets.get(text_snippet_id, text_snippet_version), owner, "text snippet"
    )
    container_id = await _document_x_experience_id(experience_links, document_id, experience_id)

    try:
        return await snippet_links.add(
            {
                "document_x_experience_id": container_id,
                "text_snippet_id": snippet.id,
                "text_snippet_version": snippet.version,
                "position": last_position(await snippet_links.get_all(container_id)) + 1,
            }
        )
    except DuplicateEntryError:
        logger.error(
            "Text snippet %s is already in experience %s of document %s",
            text_snippet_id,
            experience_id,
            document_id,
        )
        raise BadRequestError("Can not add text snippet to experience, as it already exists.")


async def get_text_snippets(
    experiences: SectionItemRepository,
    snippets: TextSnippetRepository,
    owner: str,
    experience_id: int,
) -> list[TextSnippet]:
    """Every snippet version used by the experience across the owner's documents."""
    ensure_owner(await experiences.get(experience_id), owner, "experience")
    return await snippets.get_all_for_experience(owner, experience_id)


async def get_text_snippets_in_document(
    documents: DocumentRepository,
    snippets: TextSnippetRepository,
    owner: str,
    document_id: int,
    experience_id: int,
) -> list[TextSnippet]:
    await get_owned_document(documents, owner, document_id)
    return await snippets.get_all_for_experience_in_document(owner, document_id, experience_id)


async def update_text_snippet(
    session: AsyncSession,
    snippets: TextSnippetRepository,
    owner: str,
    text_snippet_id: int,
    text_snippet_version: datetime,
    props: dict[str, Any],
) -> TextSnippet:
    """Save a new version of a snippet and move every bullet onto it."""
    snippet = ensure_owner(
        await snippets.get(text_snippet_id, text_snippet_version), owner, "text snippet"
    )

    updated = await snippets.update(snippet, type=props.get("type"), content=props.get("content"))
    await replace_text_snippet(session, snippet.id, snippet.version, updated.version)
    return updated


async def update_text_snippet_positions(
    documents: DocumentRepository,
    experience_links: DbRelationshipRepository,
    snippet_links: DbRelationshipRepository,
    snippets: TextSnippetRepository,
    owner: str,
    document_id: int,
    experience_id: int,
    text_snippet_ids: list[int],
) -> list[TextSnippet]:
    # Experiences can only be linked into their owner's documents, so owning
    # the document is enough.
    await get_owned_document(documents, owner, document_id)
    container_id = await _document_x_experience_id(experience_links, document_id, experience_id)

    current = await snippet_links.get_all(container_id)
    current_ids = {link.text_snippet_id for link in current}
    if len(current) != len(text_snippet_ids) or current_ids != set(text_snippet_ids):
        logger.error(
            "Provided text snippet IDs %s do not exactly match those in experience %s "
            "of document %s",
            text_snippet_ids,
            experience_id,
            document_id,
        )
        raise BadRequestError(
            "All text snippets, and only those, need to be included "
            "when updating their positions in an experience in a document."
        )

    await snippet_links.update_all_positions(container_id, text_snippet_ids)
    return await snippets.get_all_for_experience_in_document(owner, document_id, experience_id)


async def detach_text_snippet(
    documents: DocumentRepository,
    experience_links: DbRelationshipRepository,
    snippet_links: DbRelationshipRepository,
    owner: str,
    document_id: int,
    experience_id: int,
    text_snippet_id: int,
) -> None:
    await get_owned_document(documents, owner, document_id)
    container_id = await _document_x_experience_id(experience_links, document_id, experience_id)
    await snippet_links.delete(container_id, text_snippet_id)


async def delete_text_snippet(
    snippets: TextSnippetRepository,
    owner: str,
    text_snippet_id: int,
    text_snippet_version: datetime,
) -> None:
    """Delete one version of a snippet. Bullets using that version go with it."""
    snippet = ensure_owner(
        await snippets.get(text_snippet_id, text_snippet_version), owner, "text snippet"
    )
    await snippets.delete(snippet)


async def _document_x_experience_id(
    experience_links: DbRelationshipRepository, document_id: int, experience_id: int
) -> int:
    link = await experience_links.get(
        document_id,
        experience_id,
        not_found_message=(
            f"Can not find experience with ID {experience_id} in document {document_id}."
        ),
    )
    return link.id
