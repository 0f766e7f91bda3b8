from datetime import date, datetime

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database import Base


def _owner_column() -> Mapped[str]:
    return mapped_column(
        String(100), ForeignKey("users.username", ondelete="CASCADE"), nullable=False
    )


class EducationModel(Base):
    __tablename__ = "educations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner: Mapped[str] = _owner_column()
    school: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    degree: Mapped[str] = mapped_column(Text, nullable=False)
    gpa: Mapped[str | None] = mapped_column(Text)
    awards_and_honors: Mapped[str | None] = mapped_column(Text)
    activities: Mapped[str | None] = mapped_column(Text)


class ExperienceModel(Base):
    __tablename__ = "experiences"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner: Mapped[str] = _owner_column()
    title: Mapped[str] = mapped_column(Text, nullable=False)
    organization: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date)


class SkillModel(Base):
    __tablename__ = "skills"
    __table_args__ = (
        UniqueConstraint("owner", "name", name="uq_skills_owner_name"),
        ForeignKeyConstraint(
            ["text_snippet_id", "text_snippet_version"],
            ["text_snippets.id", "text_snippets.version"],
            ondelete="SET NULL",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner: Mapped[str] = _owner_column()
    name: Mapped[str] = mapped_column(Text, nullable=False)
    text_snippet_id: Mapped[int | None] = mapped_column(Integer)
    text_snippet_version: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class SectionModel(Base):
    __tablename__ = "sections"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    section_name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)


class ContactInfoModel(Base):
    __tablename__ = "contact_info"

    username: Mapped[str] = mapped_column(
        String(100), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True
    )
    full_name: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str | None] = mapped_column(Text)
    phone: Mapped[str | None] = mapped_column(Text)
    linkedin: Mapped[str | None] = mapped_column(Text)
    github: Mapped[str | None] = mapped_column(Text)


class TextSnippetIdModel(Base):
    """Issues snippet identities; every version of a snippet shares one row here."""

    __tablename__ = "text_snippet_ids"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner: Mapped[str] = _owner_column()


class TextSnippetModel(Base):
    __tablename__ = "text_snippets"

    id: Mapped[int] = mapped_column(
        ForeignKey("text_snippet_ids.id", ondelete="CASCADE"),
        primary_key=True,
        autoincrement=False,
    )
    version: Mapped[datetime] = mapped_column(DateTime(timezone=True), primary_key=True)
    owner: Mapped[str] = _owner_column()
    # Not a foreign key: removing a version leaves its children pointing at it.
    parent: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    type: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
