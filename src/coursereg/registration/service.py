"""RegistrationService - Admission rule for course registrations."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from coursereg.config import DEFAULT_CREDIT_CAP
from coursereg.logging import for_learner
from coursereg.registration.exceptions import (
    CreditCapExceededError,
    DuplicateRegistrationError,
    MissingLearnerIdError,
    UnknownCourseError,
)
from coursereg.registration.models import OfferingView, RegistrationResult, sum_credit_hours
from coursereg.store import OfferingNotFoundError, Registration, RegistrationExistsError

if TYPE_CHECKING:
    from coursereg.store import CourseOffering

logger = logging.getLogger(__name__)

AcceptedListener = Callable[[Registration, int], None]


class CatalogStore(Protocol):
    """Interface for read access to course offerings."""

    def list_offerings(self) -> list[CourseOffering]:
        """All offerings ordered by code."""
        ...

    def get_offering(self, code: str) -> CourseOffering:
        """One offering; raises OfferingNotFoundError if absent."""
        ...


class RegistrationStore(Protocol):
    """Interface for the append-only registration records."""

    def list_for_learner(self, learner_id: str) -> list[Registration]:
        """A learner's registrations, empty if none."""
        ...

    def append(self, registration: Registration) -> Registration:
        """Persist a registration and assign its ID."""
        ...


@dataclass
class _LearnerLock:
    """A learner's lock and the number of callers holding or waiting on it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


def _require_learner(learner_id: str | None, course_code: str | None = None) -> str:
    if learner_id is None or not learner_id.strip():
        logger.warning("Rejected request without a learner ID (course=%s)", course_code)
        raise MissingLearnerIdError(
            "Please enter a Learner ID.", learner_id=learner_id, course_code=course_code
        )
    return learner_id


class RegistrationService:
    """Validates and records registration attempts.

    The read-check-write sequence for one learner runs under that learner's
    lock, so concurrent attempts see a consistent snapshot. Different
    learners never contend for the same lock. A learner's entry in the lock
    table lives only while some caller holds or waits on it.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        registrations: RegistrationStore,
        credit_cap: int = DEFAULT_CREDIT_CAP,
        on_accepted: AcceptedListener | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            catalog: Store providing course offerings.
            registrations: Store holding registration records.
            credit_cap: Maximum total credit hours per learner.
            on_accepted: Called with (registration, new_total) after an
                accepted registration has been persisted.
        """
        self.catalog = catalog
        self.registrations = registrations
        self.credit_cap = credit_cap
        self._on_accepted = on_accepted
        self._locks: dict[str, _LearnerLock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _learner_lock(self, learner_id: str) -> Iterator[None]:
        """Hold the learner's lock, dropping its table entry when unused."""
        with self._locks_guard:
            entry = self._locks.get(learner_id)
            if entry is None:
                entry = self._locks[learner_id] = _LearnerLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[learner_id]

    def attempt_registration(self, learner_id: str | None, course_code: str) -> RegistrationResult:
        """Register a learner for a course if the admission rule allows it.

        Args:
            learner_id: The signed-in learner's identifier.
            course_code: Code of the requested course offering.

        Returns:
            An accepted RegistrationResult with the new total and record.

        Raises:
            MissingLearnerIdError: If learner_id is empty.
            UnknownCourseError: If course_code is not in the catalog.
            DuplicateRegistrationError: If the learner already holds the course.
            CreditCapExceededError: If the course would push the total over the cap.
            StoreUnavailableError: If either store cannot be reached.
        """
        learner_id = _require_learner(learner_id, course_code)
        log = for_learner(logger, learner_id)

        with self._learner_lock(learner_id):
            existing = self.registrations.list_for_learner(learner_id)
            current_total = sum_credit_hours(existing)

            try:
                offering = self.catalog.get_offering(course_code)
            except OfferingNotFoundError as e:
                log.warning("Requested unknown course %s", course_code)
                raise UnknownCourseError(
                    f"Unknown course: {course_code}.",
                    learner_id=learner_id,
                    course_code=course_code,
                    current_total=current_total,
                ) from e

            if any(r.course_code == offering.code for r in existing):
                log.warning("Failed to register duplicate class: %s", offering)
                raise DuplicateRegistrationError(
                    f"Failed to register duplicate class: {offering}.",
                    learner_id=learner_id,
                    course_code=offering.code,
                    current_total=current_total,
                )

            if current_total + offering.credit_hours > self.credit_cap:
                log.warning(
                    "Failed to register for %s: total %d + %d exceeds cap %d",
                    offering,
                    current_total,
                    offering.credit_hours,
                    self.credit_cap,
                )
                raise CreditCapExceededError(
                    f"Failed to register for {offering}, "
                    f"only {self.credit_cap} credits are allowed.",
                    learner_id=learner_id,
                    course_code=offering.code,
                    current_total=current_total,
                    credit_hours=offering.credit_hours,
                    credit_cap=self.credit_cap,
                )

            try:
                created = self.registrations.append(Registration.snapshot(learner_id, offering))
            except RegistrationExistsError as e:
                # Another writer inserted the same pair outside this process
                log.warning("Store already holds %s", offering)
                raise DuplicateRegistrationError(
                    f"Failed to register duplicate class: {offering}.",
                    learner_id=learner_id,
                    course_code=offering.code,
                    current_total=current_total,
                ) from e

            new_total = current_total + offering.credit_hours
            log.info(
                "Registered for %s (registration_id=%s, total=%d/%d)",
                offering,
                created.registration_id,
                new_total,
                self.credit_cap,
            )
            self._notify_accepted(created, new_total)

        return RegistrationResult(accepted=True, new_total=new_total, registration=created)

    def _notify_accepted(self, registration: Registration, new_total: int) -> None:
        if self._on_accepted is None:
            return
        try:
            self._on_accepted(registration, new_total)
        except Exception:
            for_learner(logger, registration.learner_id).exception(
                "Accepted-registration listener failed for %s", registration.registration_id
            )

    def total_credit_hours(self, learner_id: str | None) -> int:
        """Sum of credit hours over a learner's registrations (0 if none).

        Raises:
            MissingLearnerIdError: If learner_id is empty.
            StoreUnavailableError: If the registration store cannot be reached.
        """
        learner_id = _require_learner(learner_id)
        return sum_credit_hours(self.registrations.list_for_learner(learner_id))

    def list_registrations(self, learner_id: str | None) -> list[Registration]:
        """A learner's registrations in creation order."""
        learner_id = _require_learner(learner_id)
        return self.registrations.list_for_learner(learner_id)

    def list_offerings(self, learner_id: str | None = None) -> list[OfferingView]:
        """The catalog, flagging offerings the learner is registered for.

        Args:
            learner_id: Learner to flag registrations for; None or empty
                returns every offering unflagged.
        """
        offerings = self.catalog.list_offerings()
        registered: set[str] = set()
        if learner_id:
            registered = {r.course_code for r in self.registrations.list_for_learner(learner_id)}
        return [
            OfferingView(
                code=o.code,
                credit_hours=o.credit_hours,
                is_registered=o.code in registered,
            )
            for o in offerings
        ]

    # --- Async wrappers: run blocking store work on a worker thread ---

    async def attempt_registration_async(
        self, learner_id: str | None, course_code: str
    ) -> RegistrationResult:
        """Async form of attempt_registration."""
        return await asyncio.to_thread(self.attempt_registration, learner_id, course_code)

    async def total_credit_hours_async(self, learner_id: str | None) -> int:
        """Async form of total_credit_hours."""
        return await asyncio.to_thread(self.total_credit_hours, learner_id)

    async def list_registrations_async(self, learner_id: str | None) -> list[Registration]:
        """Async form of list_registrations."""
        return await asyncio.to_thread(self.list_registrations, learner_id)

    async def list_offerings_async(self, learner_id: str | None = None) -> list[OfferingView]:
        """Async form of list_offerings."""
        return await asyncio.to_thread(self.list_offerings, learner_id)
