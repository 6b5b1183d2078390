from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, ForeignKey, JSON, func
from kinkatsu.db import Base
from kinkatsu.models.user import new_id

class BodyPart(str, Enum):
    CHEST = "CHEST"
    BACK = "BACK"
    LEGS = "LEGS"
    ABS = "ABS"
    ARMS = "ARMS"
    SHOULDERS = "SHOULDERS"
    FOREARMS = "FOREARMS"
    CALVES = "CALVES"
    OTHER = "OTHER"

class Exercise(Base):
    __tablename__ = "exercises"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    # list of BodyPart values, submission order, no duplicates
    body_parts: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_by: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
