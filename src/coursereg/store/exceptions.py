"""Custom exceptions for the registrar store."""


class StoreError(Exception):
    """Base exception for store errors."""


class StoreUnavailableError(StoreError):
    """The backing database could not be reached."""


class OfferingNotFoundError(StoreError):
    """Course offering with given code does not exist."""


class OfferingExistsError(StoreError):
    """Course offering with given code already exists."""


class RegistrationExistsError(StoreError):
    """Learner already holds a registration for this course."""
