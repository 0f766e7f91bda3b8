from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator


class CreateEducationRequest(BaseModel):
    school: str = Field(min_length=1)
    location: str = Field(min_length=1)
    start_date: date
    end_date: date
    degree: str = Field(min_length=1)
    gpa: str | None = None
    awards_and_honors: str | None = None
    activities: str | None = None


class UpdateEducationRequest(BaseModel):
    school: str | None = Field(default=None, min_length=1)
    location: str | None = Field(default=None, min_length=1)
    start_date: date | None = None
    end_date: date | None = None
    degree: str | None = Field(default=None, min_length=1)
    gpa: str | None = None
    awards_and_honors: str | None = None
    activities: str | None = None

    @field_validator("school", "location", "start_date", "end_date", "degree")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("can not be null")
        return value


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


class CreateExperienceRequest(BaseModel):
    title: str = Field(min_length=1)
    organization: str = Field(min_length=1)
    location: str = Field(min_length=1)
    start_date: date
    end_date: date | None = None


class UpdateExperienceRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    organization: str | None = Field(default=None, min_length=1)
    location: str | None = Field(default=None, min_length=1)
    start_date: date | None = None
    end_date: date | None = None

    @field_validator("title", "organization", "location", "start_date")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("can not be null")
        return value


class ExperienceResponse(BaseModel):
    id: int
    owner: str
    title: str
    organization: str
    location: str
    start_date: date
    end_date: date | None = None


class CreateSkillRequest(BaseModel):
    name: str = Field(min_length=1)
    text_snippet_id: int | None = None
    text_snippet_version: datetime | None = None


class UpdateSkillRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    text_snippet_id: int | None = None
    text_snippet_version: datetime | None = None

    @field_validator("name")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("can not be null")
        return value


class SkillResponse(BaseModel):
    id: int
    owner: str
    name: str
    text_snippet_id: int | None = None
    text_snippet_version: datetime | None = None


class SectionResponse(BaseModel):
    id: int
    section_name: str


class ContactInfoRequest(BaseModel):
    full_name: str | None = None
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None


class ContactInfoResponse(BaseModel):
    username: str
    full_name: str
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None


class TextSnippetResponse(BaseModel):
    id: int
    version: datetime
    owner: str
    parent: datetime | None = None
    type: str
    content: str
