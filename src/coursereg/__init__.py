"""coursereg - Course registration with a credit-hour cap."""

__version__ = "0.1.0"
