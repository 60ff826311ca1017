"""Exceptions for the Registration module."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Reason a registration attempt was rejected."""

    MISSING_LEARNER_ID = "MissingLearnerId"
    UNKNOWN_COURSE = "UnknownCourse"
    DUPLICATE_REGISTRATION = "DuplicateRegistration"
    CREDIT_CAP_EXCEEDED = "CreditCapExceeded"
    STORE_UNAVAILABLE = "StoreUnavailable"


class RegistrationError(Exception):
    """Base exception for rejected registration attempts.

    Attributes:
        learner_id: The learner the attempt was made for.
        course_code: The requested course, if any.
        current_total: The learner's credit total when rejected, if known.
    """

    error_kind: ErrorKind

    def __init__(
        self,
        message: str,
        learner_id: str | None = None,
        course_code: str | None = None,
        current_total: int | None = None,
    ) -> None:
        super().__init__(message)
        self.learner_id = learner_id
        self.course_code = course_code
        self.current_total = current_total


class MissingLearnerIdError(RegistrationError):
    """No learner ID was supplied."""

    error_kind = ErrorKind.MISSING_LEARNER_ID


class UnknownCourseError(RegistrationError):
    """Requested course is not in the catalog."""

    error_kind = ErrorKind.UNKNOWN_COURSE


class DuplicateRegistrationError(RegistrationError):
    """Learner is already registered for the course."""

    error_kind = ErrorKind.DUPLICATE_REGISTRATION


class CreditCapExceededError(RegistrationError):
    """Registration would push the learner over the credit cap.

    Attributes:
        credit_hours: Credit hours of the requested course.
        credit_cap: The cap that would be exceeded.
    """

    error_kind = ErrorKind.CREDIT_CAP_EXCEEDED

    def __init__(
        self,
        message: str,
        learner_id: str | None = None,
        course_code: str | None = None,
        current_total: int | None = None,
        credit_hours: int = 0,
        credit_cap: int = 0,
    ) -> None:
        super().__init__(message, learner_id, course_code, current_total)
        self.credit_hours = credit_hours
        self.credit_cap = credit_cap
