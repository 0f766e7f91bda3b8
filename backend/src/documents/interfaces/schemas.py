from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator


class CreateDocumentRequest(BaseModel):
    name: str = Field(min_length=1, max_length=500)
    is_template: bool = False


class UpdateDocumentRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=500)
    is_template: bool | None = None
    is_locked: bool | None = None

    @field_validator("name", "is_template", "is_locked")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("can not be null")
        return value


class DocumentResponse(BaseModel):
    id: int
    name: str
    owner: str
    is_master: bool
    is_template: bool
    is_locked: bool
    created_on: datetime | None = None
    last_updated: datetime | None = None


class ContactInfoResponse(BaseModel):
    username: str
    full_name: str
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None


class SectionResponse(BaseModel):
    id: int
    section_name: str


class EducationResponse(BaseModel):
    id: int
    owner: str
    school: str
    location: str
    start_date: date
    end_date: date
    degree: str
    gpa: str | None = None
    awards_and_honors: str | None = None
    activities: str | None = None


class TextSnippetResponse(BaseModel):
    id: int
    version: datetime
    owner: str
    parent: datetime | None = None
    type: str
    content: str


class ComposedExperienceResponse(BaseModel):
    id: int
    title: str
    organization: str
    location: str
    start_date: date
    end_date: date | None = None
    bullets: list[TextSnippetResponse] = []


class ComposedDocumentResponse(BaseModel):
    id: int | None = None
    name: str | None = None
    owner: str | None = None
    created_on: datetime | None = None
    last_updated: datetime | None = None
    is_master: bool | None = None
    is_template: bool | None = None
    is_locked: bool | None = None
    contact_info: ContactInfoResponse | None = None
    sections: list[SectionResponse] = []
    educations: list[EducationResponse] = []
    experiences: list[ComposedExperienceResponse] = []
