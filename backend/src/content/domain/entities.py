from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass
class Education:
    owner: str
    school: str
    location: str
    start_date: date
    end_date: date
    degree: str
    gpa: str | None = None
    awards_and_honors: str | None = None
    activities: str | None = None
    id: int | None = field(default=None)


@dataclass
class Experience:
    owner: str
    title: str
    organization: str
    location: str
    start_date: date
    end_date: date | None = None
    id: int | None = field(default=None)


@dataclass
class Skill:
    owner: str
    name: str
    text_snippet_id: int | None = None
    text_snippet_version: datetime | None = None
    id: int | None = field(default=None)


@dataclass
class Section:
    """A heading from the shared catalog, such as "Work Experience"."""

    section_name: str
    id: int | None = field(default=None)


@dataclass
class ContactInfo:
    username: str
    full_name: str
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None


@dataclass
class TextSnippet:
    """One immutable version of a piece of text.

    ``(id, version)`` identifies the row. Editing a snippet creates a new
    version whose ``parent`` is the version it was derived from.
    """

    id: int
    version: datetime
    owner: str
    type: str
    content: str
    parent: datetime | None = None
