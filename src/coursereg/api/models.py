"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Course models


class CourseCreate(BaseModel):
    """Request model for adding a course offering to the catalog."""

    code: str = Field(..., min_length=1, max_length=50, pattern=r"^[\w\-\.]+$")
    credit_hours: int = Field(..., gt=0, le=99)


class CourseResponse(BaseModel):
    """Response model for a course offering."""

    model_config = ConfigDict(from_attributes=True)

    code: str
    credit_hours: int
    is_registered: bool = False
    display: str


def course_to_response(offering: Any) -> CourseResponse:
    """Convert a CourseOffering or OfferingView to CourseResponse."""
    return CourseResponse(
        code=offering.code,
        credit_hours=offering.credit_hours,
        is_registered=getattr(offering, "is_registered", False),
        display=str(getattr(offering, "display", offering)),
    )


# Registration models


class RegistrationRequest(BaseModel):
    """Request model for a registration attempt.

    learner_id has no minimum length here; an empty ID is rejected by the
    registration service with a MissingLearnerId result.
    """

    learner_id: str = Field(default="", max_length=255)
    course_code: str = Field(..., max_length=50)


class RegistrationResponse(BaseModel):
    """Response model for a persisted registration."""

    model_config = ConfigDict(from_attributes=True)

    registration_id: int
    learner_id: str
    course_code: str
    credit_hours: int
    registered_at: datetime


def registration_to_response(registration: Any) -> RegistrationResponse:
    """Convert a Registration model to RegistrationResponse."""
    return RegistrationResponse.model_validate(registration)


class RegistrationResultResponse(BaseModel):
    """Response model for the outcome of a registration attempt."""

    accepted: bool
    new_total: int | None = None
    error_kind: str | None = None
    registration: RegistrationResponse | None = None


def result_to_response(result: Any) -> RegistrationResultResponse:
    """Convert a RegistrationResult to RegistrationResultResponse."""
    return RegistrationResultResponse(
        accepted=result.accepted,
        new_total=result.new_total,
        error_kind=result.error_kind.value if result.error_kind else None,
        registration=(
            registration_to_response(result.registration) if result.registration else None
        ),
    )


def rejection_content(error_kind: str, message: str, current_total: int | None) -> dict[str, Any]:
    """Body for a rejected registration attempt."""
    return APIResponse[RegistrationResultResponse](
        data=RegistrationResultResponse(
            accepted=False, new_total=current_total, error_kind=error_kind
        ),
        error=message,
    ).model_dump()


# Learner models


class LearnerRegistrationsResponse(BaseModel):
    """Response model for a learner's registrations and credit total."""

    learner_id: str
    total_credit_hours: int
    credit_cap: int
    registrations: list[RegistrationResponse]


class CreditTotalResponse(BaseModel):
    """Response model for a learner's credit total."""

    learner_id: str
    total_credit_hours: int
