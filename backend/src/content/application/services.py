import logging
from datetime import datetime
from typing import Any

from content.domain.entities import ContactInfo, Section
from content.domain.repository import (
    ContactInfoRepository,
    SectionItemRepository,
    TextSnippetRepository,
)
from shared.exceptions import BadRequestError
from shared.ownership import blank_to_none, ensure_owner

logger = logging.getLogger(__name__)


async def list_items(items: SectionItemRepository, owner: str) -> list:
    return await items.get_all(owner)


async def get_item(items: SectionItemRepository, owner: str, item_id: int):
    item = await items.get(item_id)
    return ensure_owner(item, owner, items.kind.label)


async def update_item(
    items: SectionItemRepository,
    owner: str,
    item_id: int,
    props: dict[str, Any],
    snippets: TextSnippetRepository | None = None,
):
    """Update an owned item. Empty strings clear optional fields."""
    item = await get_item(items, owner, item_id)
    props = blank_to_none(props)
    await ensure_text_snippet_reference(snippets, owner, props)
    return await items.update(item, props)


async def delete_item(items: SectionItemRepository, owner: str, item_id: int) -> None:
    item = await get_item(items, owner, item_id)
    await items.delete(item)


async def list_sections(sections: SectionItemRepository) -> list[Section]:
    return await sections.get_all()


async def ensure_default_sections(
    sections: SectionItemRepository, names: list[str]
) -> list[Section]:
    """Add any of ``names`` missing from the section catalog."""
    existing = {section.section_name for section in await sections.get_all()}
    created = []
    for name in names:
        if name not in existing:
            created.append(await sections.add({"section_name": name}))
            existing.add(name)

    if created:
        logger.info("Seeded sections %s", [section.section_name for section in created])
    return created


async def save_contact_info(
    repo: ContactInfoRepository, username: str, props: dict[str, Any]
) -> tuple[bool, ContactInfo]:
    """Create or update a user's contact info.

    Returns whether a new entry was created along with the stored info.
    """
    props = blank_to_none(props)

    if await repo.get(username) is not None:
        if "full_name" in props and not props["full_name"]:
            raise BadRequestError("Full name can not be empty.")
        return False, await repo.update(username, props)

    if not props.get("full_name"):
        logger.error("Missing full name for new contact info of %r", username)
        raise BadRequestError(
            "Full name is required when saving contact info for the first time."
        )

    info = ContactInfo(
        username=username,
        full_name=props["full_name"],
        location=props.get("location"),
        email=props.get("email"),
        phone=props.get("phone"),
        linkedin=props.get("linkedin"),
        github=props.get("github"),
    )
    return True, await repo.add(info)


async def get_contact_info(repo: ContactInfoRepository, username: str) -> ContactInfo | None:
    return await repo.get(username)


async def list_text_snippets(repo: TextSnippetRepository, owner: str) -> list:
    return await repo.get_all(owner)


async def get_text_snippet(repo: TextSnippetRepository, owner: str, id: int, version: datetime):
    snippet = await repo.get(id, version)
    return ensure_owner(snippet, owner, "text snippet")


async def ensure_text_snippet_reference(
    snippets: TextSnippetRepository | None, owner: str, props: dict[str, Any]
) -> None:
    """Check that a text snippet named in ``props`` exists and belongs to ``owner``.

    Skills may point at one snippet version; both halves of the key are
    needed to do so.
    """
    text_snippet_id = props.get("text_snippet_id")
    text_snippet_version = props.get("text_snippet_version")
    if text_snippet_id is None and text_snippet_version is None:
        return
    if text_snippet_id is None or text_snippet_version is None:
        raise BadRequestError("Text snippet ID and version must be given together.")
    if snippets is None:
        raise BadRequestError("Text snippets can not be referenced here.")

    ensure_owner(
        await snippets.get(text_snippet_id, text_snippet_version), owner, "text snippet"
    )
