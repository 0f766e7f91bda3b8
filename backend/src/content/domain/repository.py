from datetime import datetime
from typing import Any, Protocol

from content.domain.entities import ContactInfo, TextSnippet


class SectionItemRepository(Protocol):
    kind: Any

    async def add(self, props: dict[str, Any]) -> Any: ...

    async def get(self, item_id: int) -> Any: ...

    async def get_all(self, owner: str | None = None) -> list[Any]: ...

    async def get_all_in_container(self, link_kind: Any, container_id: int) -> list[Any]: ...

    async def update(self, item: Any, props: dict[str, Any]) -> Any: ...

    async def delete(self, item: Any) -> int: ...


class TextSnippetRepository(Protocol):
    async def add(self, owner: str, type: str, content: str) -> TextSnippet: ...

    async def get(self, id: int, version: datetime) -> TextSnippet: ...

    async def get_all(self, owner: str) -> list[TextSnippet]: ...

    async def get_all_for_experience(self, owner: str, experience_id: int) -> list[TextSnippet]: ...

    async def get_all_for_experience_in_document(
        self, owner: str, document_id: int, experience_id: int
    ) -> list[TextSnippet]: ...

    async def update(
        self, snippet: TextSnippet, type: str | None = None, content: str | None = None
    ) -> TextSnippet: ...

    async def delete(self, snippet: TextSnippet) -> int: ...


class ContactInfoRepository(Protocol):
    async def get(self, username: str) -> ContactInfo | None: ...

    async def add(self, info: ContactInfo) -> ContactInfo: ...

    async def update(self, username: str, props: dict[str, Any]) -> ContactInfo: ...
