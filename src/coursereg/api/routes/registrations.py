"""Registration attempt endpoint."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from coursereg.api.dependencies import EventManagerDep, ServiceDep
from coursereg.api.models import (
    APIResponse,
    RegistrationRequest,
    RegistrationResultResponse,
    rejection_content,
    result_to_response,
)
from coursereg.registration import ErrorKind, RegistrationError
from coursereg.registration.session import STORE_UNAVAILABLE_MESSAGE
from coursereg.store import StoreUnavailableError

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.post(
    "",
    response_model=APIResponse[RegistrationResultResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_registration(
    request: RegistrationRequest,
    service: ServiceDep,
    event_manager: EventManagerDep,
) -> APIResponse[RegistrationResultResponse] | JSONResponse:
    """Attempt to register a learner for a course.

    Rejections are raised to the app's exception handlers, which render
    them as results with accepted=false and an error_kind.
    """
    try:
        result = await service.attempt_registration_async(request.learner_id, request.course_code)
    except RegistrationError as e:
        event_manager.emit_registration_rejected(
            request.learner_id or None, request.course_code, e.error_kind.value, str(e)
        )
        raise
    except StoreUnavailableError:
        event_manager.emit_registration_rejected(
            request.learner_id or None,
            request.course_code,
            ErrorKind.STORE_UNAVAILABLE.value,
            STORE_UNAVAILABLE_MESSAGE,
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=rejection_content(
                ErrorKind.STORE_UNAVAILABLE.value, STORE_UNAVAILABLE_MESSAGE, None
            ),
        )
    return APIResponse(data=result_to_response(result))
