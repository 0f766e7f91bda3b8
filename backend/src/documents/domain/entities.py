from dataclasses import dataclass, field
from datetime import date, datetime

from content.domain.entities import ContactInfo, Education, Section, TextSnippet


@dataclass
class Document:
    name: str
    owner: str
    is_master: bool = False
    is_template: bool = False
    is_locked: bool = False
    id: int | None = field(default=None)
    created_on: datetime | None = field(default=None)
    last_updated: datetime | None = field(default=None)


@dataclass
class ComposedExperience:
    id: int
    title: str
    organization: str
    location: str
    start_date: date
    end_date: date | None = None
    bullets: list[TextSnippet] = field(default_factory=list)


@dataclass
class ComposedDocument:
    """A document with all of its content, ready for rendering.

    For an unknown document every scalar is None and every collection is empty.
    """

    id: int | None = None
    name: str | None = None
    owner: str | None = None
    created_on: datetime | None = None
    last_updated: datetime | None = None
    is_master: bool | None = None
    is_template: bool | None = None
    is_locked: bool | None = None
    contact_info: ContactInfo | None = None
    sections: list[Section] = field(default_factory=list)
    educations: list[Education] = field(default_factory=list)
    experiences: list[ComposedExperience] = field(default_factory=list)
