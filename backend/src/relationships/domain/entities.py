from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class DocumentXSection:
    document_id: int
    section_id: int
    position: int


@dataclass
class DocumentXEducation:
    document_id: int
    education_id: int
    position: int


@dataclass
class DocumentXExperience:
    document_id: int
    experience_id: int
    position: int
    id: int | None = field(default=None)


@dataclass
class DocumentXSkill:
    document_id: int
    skill_id: int


@dataclass
class ExperienceXTextSnippet:
    """A text snippet version placed inside one experience of one document."""

    document_x_experience_id: int
    text_snippet_id: int
    text_snippet_version: datetime
    position: int
