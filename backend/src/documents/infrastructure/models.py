from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from shared.infrastructure.database import Base


class DocumentModel(Base):
    __tablename__ = "documents"
    __table_args__ = (UniqueConstraint("name", "owner", name="uq_documents_name_owner"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    owner: Mapped[str] = mapped_column(
        String(100), ForeignKey("users.username", ondelete="CASCADE"), nullable=False
    )
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    last_updated: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    is_master: Mapped[bool] = mapped_column(Boolean, nullable=False)
    is_template: Mapped[bool] = mapped_column(Boolean, nullable=False)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())
