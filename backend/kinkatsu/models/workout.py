from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, DateTime, Numeric, String, Text, UniqueConstraint, func
from kinkatsu.db import Base
from kinkatsu.models.user import new_id

class Workout(Base):
    __tablename__ = "workouts"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_workouts_user_id_date"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    # UTC midnight of the calendar day, see kinkatsu.dates
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    body_weight: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)
    day_rpe: Mapped[float | None] = mapped_column(Numeric(3, 1, asdecimal=False), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("User", back_populates="workouts")
    items = relationship(
        "WorkoutItem",
        back_populates="workout",
        order_by="WorkoutItem.order_index",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

class WorkoutItem(Base):
    __tablename__ = "workout_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    workout_id: Mapped[str] = mapped_column(ForeignKey("workouts.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[str] = mapped_column(ForeignKey("exercises.id"), index=True)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)

    workout = relationship("Workout", back_populates="items")
    exercise = relationship("Exercise", lazy="joined")
    sets = relationship(
        "WorkoutSet",
        back_populates="item",
        order_by="WorkoutSet.set_index",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

class WorkoutSet(Base):
    __tablename__ = "workout_sets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    workout_item_id: Mapped[str] = mapped_column(
        ForeignKey("workout_items.id", ondelete="CASCADE"), index=True
    )
    set_index: Mapped[int] = mapped_column(Integer, nullable=False)
    weight_kg: Mapped[float] = mapped_column(Numeric(6, 2, asdecimal=False), nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    rpe: Mapped[float | None] = mapped_column(Numeric(3, 1, asdecimal=False), nullable=True)

    item = relationship("WorkoutItem", back_populates="sets")
