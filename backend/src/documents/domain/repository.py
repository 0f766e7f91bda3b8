from typing import Any, Protocol

from documents.domain.entities import ComposedDocument, Document


class DocumentRepository(Protocol):
    async def get_by_id(self, document_id: int) -> Document | None: ...

    async def list_by_owner(self, owner: str) -> list[Document]: ...

    async def get_master(self, owner: str) -> Document | None: ...

    async def create(self, document: Document) -> Document: ...

    async def update(self, document_id: int, props: dict[str, Any]) -> Document: ...

    async def delete(self, document_id: int) -> int: ...


class ComposedDocumentReader(Protocol):
    async def read(self, document_id: int) -> ComposedDocument: ...
