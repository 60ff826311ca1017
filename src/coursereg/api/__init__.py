"""REST API for coursereg."""

from coursereg.api.app import create_app
from coursereg.api.models import (
    APIResponse,
    CourseCreate,
    CourseResponse,
    RegistrationRequest,
    RegistrationResultResponse,
)

__all__ = [
    "APIResponse",
    "CourseCreate",
    "CourseResponse",
    "RegistrationRequest",
    "RegistrationResultResponse",
    "create_app",
]
