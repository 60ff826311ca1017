"""Registrar Store - Persistent storage for the course catalog and registrations."""

from coursereg.store.exceptions import (
    OfferingExistsError,
    OfferingNotFoundError,
    RegistrationExistsError,
    StoreError,
    StoreUnavailableError,
)
from coursereg.store.models import CourseOffering, Registration, format_offering
from coursereg.store.store import RegistrarStore

__all__ = [
    "CourseOffering",
    "OfferingExistsError",
    "OfferingNotFoundError",
    "RegistrarStore",
    "Registration",
    "RegistrationExistsError",
    "StoreError",
    "StoreUnavailableError",
    "format_offering",
]
