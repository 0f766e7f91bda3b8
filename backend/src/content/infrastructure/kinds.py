from content.domain.entities import Education, Experience, Section, Skill
from content.infrastructure.item_repository import ItemKind
from content.infrastructure.models import (
    EducationModel,
    ExperienceModel,
    SectionModel,
    SkillModel,
)

EDUCATIONS = ItemKind(
    label="education",
    model=EducationModel,
    entity=Education,
    updatable=(
        "school",
        "location",
        "start_date",
        "end_date",
        "degree",
        "gpa",
        "awards_and_honors",
        "activities",
    ),
)

EXPERIENCES = ItemKind(
    label="experience",
    model=ExperienceModel,
    entity=Experience,
    updatable=("title", "organization", "location", "start_date", "end_date"),
)

SKILLS = ItemKind(
    label="skill",
    model=SkillModel,
    entity=Skill,
    updatable=("name", "text_snippet_id", "text_snippet_version"),
)

SECTIONS = ItemKind(
    label="section",
    model=SectionModel,
    entity=Section,
    owned=False,
)
