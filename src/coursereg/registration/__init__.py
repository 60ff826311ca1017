"""Registration package - Admission rule, credit totals and learner sessions."""

from coursereg.registration.exceptions import (
    CreditCapExceededError,
    DuplicateRegistrationError,
    ErrorKind,
    MissingLearnerIdError,
    RegistrationError,
    UnknownCourseError,
)
from coursereg.registration.models import (
    OfferingView,
    RegistrationResult,
    SessionMessage,
    Severity,
    sum_credit_hours,
)
from coursereg.registration.service import (
    CatalogStore,
    RegistrationService,
    RegistrationStore,
)
from coursereg.registration.session import LearnerSession

__all__ = [
    "CatalogStore",
    "CreditCapExceededError",
    "DuplicateRegistrationError",
    "ErrorKind",
    "LearnerSession",
    "MissingLearnerIdError",
    "OfferingView",
    "RegistrationError",
    "RegistrationResult",
    "RegistrationService",
    "RegistrationStore",
    "SessionMessage",
    "Severity",
    "UnknownCourseError",
    "sum_credit_hours",
]
