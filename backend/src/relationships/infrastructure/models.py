from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database import Base


def _position_constraints(table: str, container: str) -> tuple:
    # Reordering moves rows through each other's positions one UPDATE at a
    # time, so uniqueness can only be checked at commit. SQLite has no
    # deferrable unique constraints, so it goes without.
    return (
        CheckConstraint("position >= 0", name=f"ck_{table}_position"),
        UniqueConstraint(
            container,
            "position",
            name=f"uq_{table}_position",
            deferrable=True,
            initially="DEFERRED",
        ).ddl_if(dialect="postgresql"),
    )


class DocumentSectionModel(Base):
    __tablename__ = "documents_x_sections"
    __table_args__ = _position_constraints("documents_x_sections", "document_id")

    document_id: Mapped[int] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True
    )
    section_id: Mapped[int] = mapped_column(
        ForeignKey("sections.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)


class DocumentEducationModel(Base):
    __tablename__ = "documents_x_educations"
    __table_args__ = _position_constraints("documents_x_educations", "document_id")

    document_id: Mapped[int] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True
    )
    education_id: Mapped[int] = mapped_column(
        ForeignKey("educations.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)


class DocumentExperienceModel(Base):
    __tablename__ = "documents_x_experiences"
    __table_args__ = (
        UniqueConstraint("document_id", "experience_id", name="uq_documents_x_experiences"),
        *_position_constraints("documents_x_experiences", "document_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    document_id: Mapped[int] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE"), nullable=False
    )
    experience_id: Mapped[int] = mapped_column(
        ForeignKey("experiences.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)


class DocumentSkillModel(Base):
    __tablename__ = "documents_x_skills"

    document_id: Mapped[int] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True
    )
    skill_id: Mapped[int] = mapped_column(
        ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True
    )


class ExperienceTextSnippetModel(Base):
    __tablename__ = "experiences_x_text_snippets"
    __table_args__ = (
        ForeignKeyConstraint(
            ["text_snippet_id", "text_snippet_version"],
            ["text_snippets.id", "text_snippets.version"],
            ondelete="CASCADE",
        ),
        *_position_constraints("experiences_x_text_snippets", "document_x_experience_id"),
    )

    document_x_experience_id: Mapped[int] = mapped_column(
        ForeignKey("documents_x_experiences.id", ondelete="CASCADE"), primary_key=True
    )
    text_snippet_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    text_snippet_version: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
