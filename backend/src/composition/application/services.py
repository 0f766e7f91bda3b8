"""Attach section items to documents and keep them in order.

Every function works for any item type: the item repository decides which
table holds the items and the relationship repository which table links them
to documents.
"""

import logging
from typing import Any

from content.application.services import ensure_text_snippet_reference
from content.domain.repository import SectionItemRepository, TextSnippetRepository
from documents.application.services import get_owned_document
from documents.domain.repository import DocumentRepository
from relationships.infrastructure.relationship_repository import DbRelationshipRepository
from shared.exceptions import AuthorizationError, BadRequestError, DuplicateEntryError
from shared.ownership import blank_to_none, ensure_owner, last_position

logger = logging.getLogger(__name__)


async def create_section_item(
    documents: DocumentRepository,
    items: SectionItemRepository,
    links: DbRelationshipRepository,
    owner: str,
    document_id: int,
    props: dict[str, Any],
    snippets: TextSnippetRepository | None = None,
) -> tuple[Any, Any]:
    """Create an item and place it last in the master document.

    Items can only be created through the master document; other documents
    attach existing items instead.
    """
    label = items.kind.label
    document = await get_owned_document(documents, owner, document_id)
    if not document.is_master:
        logger.error(
            "User %r attempted to add a new %s to non-master document %s",
            owner,
            label,
            document_id,
        )
        raise AuthorizationError(f"{label.capitalize()}s can only be added to the master resume.")

    props = blank_to_none(props)
    await ensure_text_snippet_reference(snippets, owner, props)

    item = await items.add({**props, "owner": owner})
    link = await links.add(await _link_props(links, document_id, item.id))

    logger.info("Added %s %s to document %s", label, item.id, document_id)
    return item, link


async def create_relationship_to_existing(
    documents: DocumentRepository,
    items: SectionItemRepository,
    links: DbRelationshipRepository,
    owner: str,
    document_id: int,
    item_id: int,
):
    """Attach an existing item to the end of any document the owner controls."""
    label = items.kind.label
    item = await items.get(item_id)
    if items.kind.owned:
        ensure_owner(item, owner, label)
    await get_owned_document(documents, owner, document_id)

    try:
        return await links.add(await _link_props(links, document_id, item_id))
    except DuplicateEntryError:
        logger.error("%s %s is already in document %s", label, item_id, document_id)
        raise BadRequestError(f"Can not add {label} to document, as it already exists.")


async def get_items_in_document(
    documents: DocumentRepository,
    items: SectionItemRepository,
    links: DbRelationshipRepository,
    owner: str,
    document_id: int,
) -> list:
    await get_owned_document(documents, owner, document_id)
    return await items.get_all_in_container(links.kind, document_id)


async def update_container_positions(
    documents: DocumentRepository,
    items: SectionItemRepository,
    links: DbRelationshipRepository,
    owner: str,
    document_id: int,
    ordered_item_ids: list[int],
) -> list:
    """Reorder a document's items and return them in their new order.

    ``ordered_item_ids`` must name every attached item exactly once.
    """
    label = items.kind.label
    await get_owned_document(documents, owner, document_id)

    current = await links.get_all(document_id)
    current_ids = {getattr(link, links.kind.content_key) for link in current}
    if len(current) != len(ordered_item_ids) or current_ids != set(ordered_item_ids):
        logger.error(
            "Provided %s IDs %s do not exactly match those in document %s",
            label,
            ordered_item_ids,
            document_id,
        )
        raise BadRequestError(
            f"All {label}s, and only those, need to be included "
            "when updating their positions in a document."
        )

    await links.update_all_positions(document_id, ordered_item_ids)
    return await items.get_all_in_container(links.kind, document_id)


async def delete_relationship(
    documents: DocumentRepository,
    links: DbRelationshipRepository,
    owner: str,
    document_id: int,
    item_id: int,
) -> None:
    await get_owned_document(documents, owner, document_id)
    await links.delete(document_id, item_id)


async def _link_props(
    links: DbRelationshipRepository, container_id: int, content_id: int
) -> dict[str, Any]:
    kind = links.kind
    props = {kind.container_key: container_id, kind.content_key: content_id}
    if kind.positioned:
        props["position"] = last_position(await links.get_all(container_id)) + 1
    return props
