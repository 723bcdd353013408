from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from airclaims.api.deps import get_eligibility_service, get_policy
from airclaims.common.enums import WizardStep
from airclaims.common.exceptions import BookingLookupError
from airclaims.common.logging import get_logger
from airclaims.core.cases.intake import build_case_summary, ensure_ready_for_intake
from airclaims.core.cases.schemas import CaseSummary
from airclaims.core.eligibility.schemas import (
    CaseRecord,
    EligibilityPolicy,
    EligibilityVerdict,
    ValidationVerdict,
)
from airclaims.core.eligibility.service import EligibilityService
from airclaims.tasks.celery_app import app as celery_app

router = APIRouter(prefix="/disputes", tags=["Disputes"])

logger = get_logger("api.disputes")

JOB_FAILED_MESSAGE = "The eligibility check could not be completed. Please resubmit the case."


# ---------- Schemas ----------


class EligibilityJobResponse(BaseModel):
    task_id: str


class EligibilityJobStatus(BaseModel):
    task_id: str
    state: str
    verdict: EligibilityVerdict | None = None
    detail: str | None = None


def _today() -> date:
    return datetime.now(timezone.utc).date()


async def _check_or_502(service: EligibilityService, case: CaseRecord) -> EligibilityVerdict:
    try:
        return await service.check_eligibility(case, today=_today())
    except BookingLookupError as e:
        logger.warning("Eligibility check deferred for booking %s: %s", case.booking_reference, e.reason)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=BookingLookupError.USER_MESSAGE
        ) from e


# ---------- Endpoints ----------


@router.post("/validate", response_model=ValidationVerdict)
async def validate_form(
    body: CaseRecord,
    service: EligibilityService = Depends(get_eligibility_service),
):
    return service.validate_all(body, today=_today())


@router.post("/validate/{step}", response_model=ValidationVerdict)
async def validate_wizard_step(
    step: WizardStep,
    body: CaseRecord,
    service: EligibilityService = Depends(get_eligibility_service),
):
    return await service.validate_step(step, body, today=_today())


@router.post("/eligibility", response_model=EligibilityVerdict)
async def check_eligibility(
    body: CaseRecord,
    service: EligibilityService = Depends(get_eligibility_service),
):
    return await _check_or_502(service, body)


@router.post("/eligibility/jobs", response_model=EligibilityJobResponse, status_code=202)
async def enqueue_eligibility_check(body: CaseRecord):
    from airclaims.tasks.eligibility_tasks import check_case_eligibility

    result = check_case_eligibility.delay(body.model_dump(mode="json"), _today().isoformat())
    logger.info("Queued eligibility check %s for booking %s", result.id, body.booking_reference)
    return EligibilityJobResponse(task_id=result.id)


@router.get("/eligibility/jobs/{task_id}", response_model=EligibilityJobStatus)
async def get_eligibility_check(task_id: str):
    result = celery_app.AsyncResult(task_id)
    state = result.state

    if state == "SUCCESS":
        return EligibilityJobStatus(
            task_id=task_id,
            state=state,
            verdict=EligibilityVerdict.model_validate(result.result),
        )
    if state == "FAILURE":
        if isinstance(result.result, BookingLookupError):
            detail = BookingLookupError.USER_MESSAGE
        else:
            logger.error("Eligibility check %s failed: %r", task_id, result.result)
            detail = JOB_FAILED_MESSAGE
        return EligibilityJobStatus(task_id=task_id, state=state, detail=detail)
    return EligibilityJobStatus(task_id=task_id, state=state)


@router.post("/summary", response_model=CaseSummary, status_code=201)
async def open_case(
    body: CaseRecord,
    service: EligibilityService = Depends(get_eligibility_service),
    policy: EligibilityPolicy = Depends(get_policy),
):
    now = datetime.now(timezone.utc)
    ensure_ready_for_intake(body, today=now.date(), policy=policy)
    verdict = await _check_or_502(service, body)
    return build_case_summary(body, verdict, now=now, policy=policy)
