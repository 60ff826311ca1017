"""Learner registration and credit total endpoints."""

from fastapi import APIRouter

from coursereg.api.dependencies import ServiceDep
from coursereg.api.models import (
    APIResponse,
    CreditTotalResponse,
    LearnerRegistrationsResponse,
    registration_to_response,
)
from coursereg.registration import sum_credit_hours

router = APIRouter(prefix="/learners", tags=["learners"])


@router.get(
    "/{learner_id}/registrations",
    response_model=APIResponse[LearnerRegistrationsResponse],
)
async def list_learner_registrations(
    learner_id: str, service: ServiceDep
) -> APIResponse[LearnerRegistrationsResponse]:
    """List a learner's registrations with their credit total."""
    registrations = await service.list_registrations_async(learner_id)
    return APIResponse(
        data=LearnerRegistrationsResponse(
            learner_id=learner_id,
            total_credit_hours=sum_credit_hours(registrations),
            credit_cap=service.credit_cap,
            registrations=[registration_to_response(r) for r in registrations],
        )
    )


@router.get("/{learner_id}/total", response_model=APIResponse[CreditTotalResponse])
async def get_credit_total(learner_id: str, service: ServiceDep) -> APIResponse[CreditTotalResponse]:
    """Get a learner's total registered credit hours."""
    total = await service.total_credit_hours_async(learner_id)
    return APIResponse(data=CreditTotalResponse(learner_id=learner_id, total_credit_hours=total))
