"""Data models for the Registration module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from coursereg.store.models import format_offering

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coursereg.registration.exceptions import ErrorKind
    from coursereg.store import Registration


def sum_credit_hours(registrations: Iterable[Registration]) -> int:
    """Total credit hours across registrations."""
    return sum(r.credit_hours for r in registrations)


@dataclass
class RegistrationResult:
    """Outcome of a registration attempt.

    Attributes:
        accepted: Whether the registration was recorded.
        new_total: Learner's credit total after the attempt, if known.
        registration: The created record when accepted.
        error_kind: Why the attempt was rejected.
    """

    accepted: bool
    new_total: int | None
    registration: Registration | None = None
    error_kind: ErrorKind | None = None


@dataclass(frozen=True)
class OfferingView:
    """A catalog entry as seen by one learner."""

    code: str
    credit_hours: int
    is_registered: bool = False

    @property
    def display(self) -> str:
        return format_offering(self.code, self.credit_hours)


class Severity(StrEnum):
    """How a session message should be presented."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class SessionMessage:
    """User-facing feedback from a learner session action."""

    text: str
    severity: Severity
    total_credit_hours: int | None = None
