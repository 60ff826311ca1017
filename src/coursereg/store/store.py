"""RegistrarStore - SQLAlchemy-backed catalog and registration storage."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager, nullcontext
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError

from coursereg.store.database import Database
from coursereg.store.exceptions import (
    OfferingExistsError,
    OfferingNotFoundError,
    RegistrationExistsError,
    StoreUnavailableError,
)
from coursereg.store.models import CourseOffering, Registration

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@contextmanager
def _store_access(action: str) -> Iterator[None]:
    """Translate connectivity failures into StoreUnavailableError."""
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logger.error("Store unavailable while trying to %s: %s", action, e)
        raise StoreUnavailableError(f"Store unavailable while trying to {action}") from e


class RegistrarStore:
    """Main API for catalog and registration storage.

    Serves as both the catalog store (course offerings, read-only for
    registration) and the append-only registration store.

    An in-memory database lives on a single connection, so sessions on it
    are serialized store-wide. File and URL databases give each session its
    own pooled connection and need no such lock.
    """

    def __init__(self, db_path: str = "coursereg.db", db_url: str | None = None) -> None:
        """Initialize the store, creating tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
            db_url: Full SQLAlchemy URL (overrides db_path)

        Raises:
            StoreUnavailableError: If the database cannot be reached
        """
        self._db = Database(db_path, db_url=db_url)
        self._connection_lock = threading.Lock() if self._db.is_memory else None
        with _store_access("create tables"), self._exclusive():
            self._db.create_tables()

    @property
    def database(self) -> Database:
        """The underlying connection manager."""
        return self._db

    def close(self) -> None:
        """Close the database connection."""
        with self._exclusive():
            self._db.close()

    def _exclusive(self) -> threading.Lock | nullcontext[None]:
        return self._connection_lock if self._connection_lock is not None else nullcontext()

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        """Open a session for one store operation and close it afterwards."""
        with _store_access(action), self._exclusive():
            session = self._db.get_session()
            try:
                yield session
            finally:
                session.close()

    # --- Catalog Operations ---

    def create_offering(self, code: str, credit_hours: int) -> CourseOffering:
        """Add a course offering to the catalog.

        Args:
            code: Unique course code, e.g. "MATH101"
            credit_hours: Positive number of credit hours

        Returns:
            The created CourseOffering

        Raises:
            ValueError: If code is empty or credit_hours is not positive
            OfferingExistsError: If an offering with this code exists
            StoreUnavailableError: If the database cannot be reached
        """
        if not code:
            raise ValueError("Course code must not be empty")
        if credit_hours <= 0:
            raise ValueError(f"Credit hours must be positive, got {credit_hours}")

        with self._session("create offering") as session:
            offering = CourseOffering(code=code, credit_hours=credit_hours)
            session.add(offering)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise OfferingExistsError(f"Course offering '{code}' already exists") from e
            return offering

    def list_offerings(self) -> list[CourseOffering]:
        """List all course offerings.

        Returns:
            All offerings, ordered by code ascending

        Raises:
            StoreUnavailableError: If the database cannot be reached
        """
        with self._session("list offerings") as session:
            stmt = select(CourseOffering).order_by(CourseOffering.code)
            return list(session.execute(stmt).scalars().all())

    def get_offering(self, code: str) -> CourseOffering:
        """Get a course offering by code.

        Raises:
            OfferingNotFoundError: If no offering has this code
            StoreUnavailableError: If the database cannot be reached
        """
        with self._session("get offering") as session:
            offering = session.get(CourseOffering, code)
        if offering is None:
            raise OfferingNotFoundError(f"Course offering '{code}' not found")
        return offering

    # --- Registration Operations ---

    def list_for_learner(self, learner_id: str) -> list[Registration]:
        """List a learner's registrations.

        Args:
            learner_id: The learner's identifier

        Returns:
            Registrations ordered by registration_id; empty if none exist

        Raises:
            StoreUnavailableError: If the database cannot be reached
        """
        with self._session("list registrations") as session:
            stmt = (
                select(Registration)
                .where(Registration.learner_id == learner_id)
                .order_by(Registration.registration_id)
            )
            return list(session.execute(stmt).scalars().all())

    def append(self, registration: Registration) -> Registration:
        """Persist a new registration and assign its registration_id.

        Args:
            registration: Unsaved registration record

        Returns:
            The persisted registration

        Raises:
            RegistrationExistsError: If the learner already holds this course
            StoreUnavailableError: If the database cannot be reached
        """
        with self._session("append registration") as session:
            session.add(registration)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                if "UNIQUE" in str(e) or "uq_learner_course" in str(e):
                    raise RegistrationExistsError(
                        f"Learner '{registration.learner_id}' is already registered "
                        f"for '{registration.course_code}'"
                    ) from e
                raise
            session.refresh(registration)
            return registration
