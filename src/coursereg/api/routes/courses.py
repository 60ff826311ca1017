"""Course catalog endpoints."""

from fastapi import APIRouter, Query, status

from coursereg.api.dependencies import ServiceDep, StoreDep
from coursereg.api.models import (
    APIResponse,
    CourseCreate,
    CourseResponse,
    course_to_response,
)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=APIResponse[list[CourseResponse]])
async def list_courses(
    service: ServiceDep,
    learner_id: str | None = Query(
        default=None, description="Flag offerings this learner is registered for"
    ),
) -> APIResponse[list[CourseResponse]]:
    """List course offerings ordered by code."""
    offerings = await service.list_offerings_async(learner_id)
    return APIResponse(data=[course_to_response(o) for o in offerings])


@router.post(
    "",
    response_model=APIResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_course(course: CourseCreate, store: StoreDep) -> APIResponse[CourseResponse]:
    """Add a course offering to the catalog."""
    created = store.create_offering(code=course.code, credit_hours=course.credit_hours)
    return APIResponse(data=course_to_response(created))
