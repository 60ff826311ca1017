"""SQLAlchemy models for the registrar store."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from typing import Any

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
)


def format_offering(code: str, credit_hours: int) -> str:
    """Format a course for display, e.g. ``MATH101 (3)``."""
    return f"{code} ({credit_hours})"


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class CourseOffering(Base):
    """Course offering - read-only catalog entry."""

    __tablename__ = "course_offerings"
    __table_args__ = (CheckConstraint("credit_hours > 0", name="ck_offering_credit_hours"),)

    code: Mapped[str] = mapped_column("course_code", String(50), primary_key=True)
    credit_hours: Mapped[int] = mapped_column(Integer, nullable=False)

    def __init__(self, code: str, credit_hours: int, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.code = code
        self.credit_hours = credit_hours

    def __str__(self) -> str:
        return format_offering(self.code, self.credit_hours)

    def __repr__(self) -> str:
        return f"<CourseOffering(code={self.code!r}, credit_hours={self.credit_hours!r})>"


class Registration(Base):
    """Registration model - a learner's append-only course registration.

    credit_hours is a snapshot of the offering's value at registration time,
    not a live reference.
    """

    __tablename__ = "learner_registration"
    __table_args__ = (
        UniqueConstraint("learner_id", "course_code", name="uq_learner_course"),
    )

    registration_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    learner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    course_code: Mapped[str] = mapped_column(
        String(50), ForeignKey("course_offerings.course_code"), nullable=False
    )
    credit_hours: Mapped[int] = mapped_column(Integer, nullable=False)
    registered_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    def __init__(
        self,
        learner_id: str,
        course_code: str,
        credit_hours: int,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.learner_id = learner_id
        self.course_code = course_code
        self.credit_hours = credit_hours

    @classmethod
    def snapshot(cls, learner_id: str, offering: CourseOffering) -> Registration:
        """Build an unsaved registration copying the offering's credit hours."""
        return cls(
            learner_id=learner_id,
            course_code=offering.code,
            credit_hours=offering.credit_hours,
        )

    def __str__(self) -> str:
        return format_offering(self.course_code, self.credit_hours)

    def __repr__(self) -> str:
        return (
            f"<Registration(registration_id={self.registration_id!r}, "
            f"learner_id={self.learner_id!r}, course_code={self.course_code!r})>"
        )
