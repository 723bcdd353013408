"""Consumer identity verification integration client.

Uses the identity-validator agent API when a real key is configured,
otherwise falls back to a rule-based mock that scores the four contact
fields. The result is advisory: callers surface it as warnings only.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from typing import Any

import httpx

from airclaims.common.exceptions import ExternalServiceError
from airclaims.config import settings
from airclaims.core.eligibility.schemas import CaseRecord, IdentityCheckResult, ValidatedFields
from airclaims.integrations.base import BaseIntegration

_MOCK_PASS_THRESHOLD = 0.75


class IdentityVerifier(BaseIntegration):
    """Second opinion on the consumer's identity details."""

    @abstractmethod
    async def verify(self, case: CaseRecord) -> IdentityCheckResult:
        ...


def _score_fields(case: CaseRecord) -> ValidatedFields:
    digits = sum(ch.isdigit() for ch in case.phone)
    return ValidatedFields(
        name=len(case.consumer_name.strip()) >= 2,
        national_id=len(case.national_id) >= 8 and bool(re.fullmatch(r"[A-Za-z0-9]+", case.national_id)),
        phone=bool(re.fullmatch(r"\+?[0-9 \-()]+", case.phone)) and digits >= 10,
        email=bool(re.fullmatch(r"[^\s@]+@[^\s@]+\.[^\s@]+", case.email)),
    )


class IdentityVerificationClient(IdentityVerifier):
    """Identity validator agent client with mock fallback."""

    def __init__(
        self,
        api_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__("identity")
        self._api_url = api_url or settings.IDENTITY_API_URL
        self._api_key = api_key or settings.IDENTITY_API_KEY
        self._timeout = timeout if timeout is not None else settings.IDENTITY_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def is_mock(self) -> bool:
        return self._api_key.startswith("mock_")

    async def health_check(self) -> bool:
        if self.is_mock:
            self.logger.info("Identity validator health check: OK (mock)")
            return True
        try:
            async with httpx.AsyncClient(timeout=10, transport=self._transport) as client:
                resp = await client.get(
                    self._api_url,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                )
                return resp.status_code < 500
        except Exception as e:
            self.logger.error("Identity validator health check failed: %s", e)
            return False

    async def verify(self, case: CaseRecord) -> IdentityCheckResult:
        if self.is_mock:
            return self._mock_verify(case)

        self.logger.info("Requesting identity validation for national id ending %s", case.national_id[-4:])
        payload = {
            "input": {
                "consumerName": case.consumer_name,
                "nationalId": case.national_id,
                "phone": case.phone,
                "email": case.email,
            },
            "context": {
                "domain": "aviation_dispute",
                "jurisdiction": settings.REGULATOR_NAME.lower(),
                "requiresHighConfidence": True,
            },
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(
                    self._api_url,
                    headers={
                        "Authorization": f"Bearer {self._api_key}",
                        "Content-Type": "application/json",
                        "X-Agent-Version": "1.0",
                    },
                    json=payload,
                )
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            self.logger.error("Identity validation request failed: %s", e)
            raise ExternalServiceError("identity", str(e)) from e

        try:
            return self._from_payload(data["output"])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            self.logger.error("Malformed identity validation payload: %s", e)
            raise ExternalServiceError("identity", "malformed response") from e

    def _from_payload(self, output: Any) -> IdentityCheckResult:
        if not isinstance(output, dict):
            raise TypeError(f"expected an object, got {type(output).__name__}")
        fields = output.get("validatedFields") or {}
        if not isinstance(fields, dict):
            raise TypeError(f"validatedFields must be an object, got {type(fields).__name__}")
        result = IdentityCheckResult(
            is_valid=bool(output.get("isValid", False)),
            confidence=float(output.get("confidence", 0) or 0),
            validated_fields=ValidatedFields(
                name=bool(fields.get("name", False)),
                national_id=bool(fields.get("nationalId", False)),
                phone=bool(fields.get("phone", False)),
                email=bool(fields.get("email", False)),
            ),
            warnings=list(output.get("warnings") or []),
            errors=list(output.get("errors") or []),
            risk_score=float(output.get("riskScore", 0) or 0),
            recommendations=list(output.get("recommendations") or []),
        )
        self.logger.info(
            "Identity validated via agent (valid=%s, confidence=%.2f)", result.is_valid, result.confidence
        )
        return result

    def _mock_verify(self, case: CaseRecord) -> IdentityCheckResult:
        fields = _score_fields(case)
        passed = sum(fields.model_dump().values())
        confidence = passed / 4
        is_valid = confidence >= _MOCK_PASS_THRESHOLD

        self.logger.info("Identity validated with mock (confidence=%.2f)", confidence)
        return IdentityCheckResult(
            is_valid=is_valid,
            confidence=confidence,
            validated_fields=fields,
            warnings=["Some fields may require additional verification"] if confidence < 1 else [],
            errors=[] if is_valid else ["Identity validation failed - please check your information"],
            risk_score=1 - confidence,
            recommendations=(
                ["Identity verified successfully"]
                if is_valid
                else ["Please verify all required fields are correctly entered"]
            ),
        )
