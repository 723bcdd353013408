import asyncio
from datetime import date

from airclaims.common.logging import get_logger
from airclaims.tasks.celery_app import app

logger = get_logger("tasks.eligibility")


def _run_async(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@app.task(name="airclaims.tasks.eligibility_tasks.check_case_eligibility")
def check_case_eligibility(case_data: dict, today: str) -> dict:
    """Background eligibility check; the task's AsyncResult is the caller's handle."""
    booking_reference = case_data.get("booking_reference") or "-"
    logger.info("Checking eligibility for booking %s", booking_reference)

    async def _check():
        from airclaims.config import settings
        from airclaims.core.eligibility.schemas import CaseRecord, EligibilityPolicy
        from airclaims.core.eligibility.service import EligibilityService
        from airclaims.integrations.booking import ReservationClient

        service = EligibilityService(
            booking_lookup=ReservationClient(),
            policy=EligibilityPolicy.from_settings(),
            lookup_timeout=settings.BOOKING_TIMEOUT_SECONDS,
        )
        try:
            verdict = await service.check_eligibility(
                CaseRecord.model_validate(case_data), today=date.fromisoformat(today)
            )
            logger.info("Eligibility for booking %s: %s", booking_reference, verdict.status.value)
            return verdict.model_dump(mode="json")
        except Exception as e:
            logger.error("Eligibility check failed for booking %s: %s", booking_reference, e)
            raise

    return _run_async(_check())
