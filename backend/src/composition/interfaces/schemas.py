from datetime import datetime

from pydantic import BaseModel, Field

from content.interfaces.schemas import (
    EducationResponse,
    ExperienceResponse,
    SkillResponse,
    TextSnippetResponse,
)


class PositionsRequest(BaseModel):
    """IDs of every item in the container, in their new order."""

    ids: list[int]


class DocumentXSectionResponse(BaseModel):
    document_id: int
    section_id: int
    position: int


class DocumentXEducationResponse(BaseModel):
    document_id: int
    education_id: int
    position: int


class DocumentXExperienceResponse(BaseModel):
    id: int
    document_id: int
    experience_id: int
    position: int


class DocumentXSkillResponse(BaseModel):
    document_id: int
    skill_id: int


class ExperienceXTextSnippetResponse(BaseModel):
    document_x_experience_id: int
    text_snippet_id: int
    text_snippet_version: datetime
    position: int


class EducationCreatedResponse(BaseModel):
    education: EducationResponse
    document_x_education: DocumentXEducationResponse


class ExperienceCreatedResponse(BaseModel):
    experience: ExperienceResponse
    document_x_experience: DocumentXExperienceResponse


class SkillCreatedResponse(BaseModel):
    skill: SkillResponse
    document_x_skill: DocumentXSkillResponse


class CreateTextSnippetRequest(BaseModel):
    type: str = Field(min_length=1)
    content: str = Field(min_length=1)


class TextSnippetCreatedResponse(BaseModel):
    text_snippet: TextSnippetResponse
    experience_x_text_snippet: ExperienceXTextSnippetResponse


class AttachTextSnippetRequest(BaseModel):
    version: datetime


class UpdateTextSnippetRequest(BaseModel):
    version: datetime
    type: str | None = None
    content: str | None = None
