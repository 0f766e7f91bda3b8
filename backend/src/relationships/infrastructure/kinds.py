from relationships.domain.entities import (
    DocumentXEducation,
    DocumentXExperience,
    DocumentXSection,
    DocumentXSkill,
    ExperienceXTextSnippet,
)
from relationships.infrastructure.models import (
    DocumentEducationModel,
    DocumentExperienceModel,
    DocumentSectionModel,
    DocumentSkillModel,
    ExperienceTextSnippetModel,
)
from relationships.infrastructure.relationship_repository import RelationshipKind

DOCUMENT_SECTIONS = RelationshipKind(
    model=DocumentSectionModel,
    entity=DocumentXSection,
    container_key="document_id",
    content_key="section_id",
    container_label="Document",
    content_label="section",
)

DOCUMENT_EDUCATIONS = RelationshipKind(
    model=DocumentEducationModel,
    entity=DocumentXEducation,
    container_key="document_id",
    content_key="education_id",
    container_label="Document",
    content_label="education",
)

DOCUMENT_EXPERIENCES = RelationshipKind(
    model=DocumentExperienceModel,
    entity=DocumentXExperience,
    container_key="document_id",
    content_key="experience_id",
    container_label="Document",
    content_label="experience",
)

DOCUMENT_SKILLS = RelationshipKind(
    model=DocumentSkillModel,
    entity=DocumentXSkill,
    container_key="document_id",
    content_key="skill_id",
    container_label="Document",
    content_label="skill",
    positioned=False,
)

EXPERIENCE_TEXT_SNIPPETS = RelationshipKind(
    model=ExperienceTextSnippetModel,
    entity=ExperienceXTextSnippet,
    container_key="document_x_experience_id",
    content_key="text_snippet_id",
    container_label="Experience",
    content_label="text snippet",
)
