import logging
from typing import Any

from documents.domain.entities import ComposedDocument, Document
from documents.domain.repository import ComposedDocumentReader, DocumentRepository
from shared.config import settings
from shared.exceptions import AuthorizationError, BadRequestError, NotFoundError
from shared.ownership import ensure_owner

logger = logging.getLogger(__name__)


async def create_master_document(repo: DocumentRepository, owner: str) -> Document:
    doc = Document(
        name=settings.MASTER_DOCUMENT_NAME,
        owner=owner,
        is_master=True,
        is_template=False,
    )
    return await repo.create(doc)


async def create_document(
    repo: DocumentRepository,
    owner: str,
    name: str,
    is_template: bool = False,
) -> Document:
    doc = Document(name=name, owner=owner, is_master=False, is_template=is_template)
    return await repo.create(doc)


async def list_documents(repo: DocumentRepository, owner: str) -> list[Document]:
    return await repo.list_by_owner(owner)


async def get_owned_document(repo: DocumentRepository, owner: str, document_id: int) -> Document:
    """Fetch a document and check that ``owner`` owns it."""
    doc = await repo.get_by_id(document_id)
    if not doc:
        logger.error("Document %s not found for user %r", document_id, owner)
        raise NotFoundError(message=f"Can not find document with ID {document_id}.")
    return ensure_owner(doc, owner, "document")


async def get_document(
    repo: DocumentRepository,
    reader: ComposedDocumentReader,
    owner: str,
    document_id: int,
) -> ComposedDocument:
    await get_owned_document(repo, owner, document_id)
    return await reader.read(document_id)


async def update_document(
    repo: DocumentRepository,
    owner: str,
    document_id: int,
    props: dict[str, Any],
) -> Document:
    """Apply ``props`` to a document. Master documents only accept a new name."""
    doc = await get_owned_document(repo, owner, document_id)

    if doc.is_master and (not props.get("name") or len(props) > 1):
        logger.error(
            "User %r attempted to update master document %s with %s",
            owner,
            document_id,
            sorted(props),
        )
        raise BadRequestError("Only document name can be updated for master resumes.")

    return await repo.update(document_id, props)


async def delete_document(repo: DocumentRepository, owner: str, document_id: int) -> None:
    """Delete a non-master document. A missing document is not an error."""
    doc = await repo.get_by_id(document_id)
    if not doc:
        return

    ensure_owner(doc, owner, "document")
    if doc.is_master:
        raise AuthorizationError("Can not delete master resume.")

    await repo.delete(document_id)
