"""LearnerSession - Sign-in state and user-facing registration feedback."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from coursereg.logging import for_learner
from coursereg.registration.exceptions import RegistrationError
from coursereg.registration.models import SessionMessage, Severity
from coursereg.store import StoreUnavailableError

if TYPE_CHECKING:
    from coursereg.registration.service import RegistrationService

logger = logging.getLogger(__name__)

STORE_UNAVAILABLE_MESSAGE = "Registration is temporarily unavailable. Please try again."


class LearnerSession:
    """One sign-in session for the registration surface.

    The learner ID is set by sign_in and must be present before register
    is attempted. Results are turned into messages ready for display.
    """

    def __init__(self, service: RegistrationService) -> None:
        self.service = service
        self.learner_id: str | None = None

    @property
    def signed_in(self) -> bool:
        return self.learner_id is not None

    def sign_in(self, learner_id: str | None) -> SessionMessage:
        """Record the learner for this session and report their current total."""
        if learner_id is None or not learner_id.strip():
            logger.warning("Failed to enter a Learner ID.")
            return SessionMessage("Please enter a Learner ID.", Severity.WARNING)

        try:
            total = self.service.total_credit_hours(learner_id)
        except StoreUnavailableError:
            return SessionMessage(STORE_UNAVAILABLE_MESSAGE, Severity.ERROR)

        self.learner_id = learner_id
        text = f"Signed in with Learner ID: {learner_id}"
        for_learner(logger, learner_id).info("Signed in (total=%d)", total)
        return SessionMessage(text, Severity.SUCCESS, total_credit_hours=total)

    def sign_out(self) -> None:
        self.learner_id = None

    def register(self, course_code: str) -> SessionMessage:
        """Attempt to register the signed-in learner for a course."""
        if self.learner_id is None:
            logger.warning("Failed to sign in with Learner ID.")
            return SessionMessage("Please sign in to continue.", Severity.WARNING)

        try:
            result = self.service.attempt_registration(self.learner_id, course_code)
        except RegistrationError as e:
            return SessionMessage(str(e), Severity.ERROR, total_credit_hours=e.current_total)
        except StoreUnavailableError:
            return SessionMessage(STORE_UNAVAILABLE_MESSAGE, Severity.ERROR)

        return SessionMessage(
            f"Successfully registered for {result.registration}!",
            Severity.SUCCESS,
            total_credit_hours=result.new_total,
        )
