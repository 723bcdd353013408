"""Reservation-system integration: booking reference lookup.

``BookingLookupPort`` is what the eligibility service depends on. Two
implementations ship here:

* ``StaticBookingLookup`` answers from an in-memory allow-list (tests, demos).
* ``ReservationClient`` calls the reservation REST API when a real key is
  configured, otherwise it answers from the sample bookings.

Unlike the other clients, a live ``ReservationClient`` never falls back to
mock data when the call fails: an unreachable reservation system raises
``BookingLookupError`` so that "not found" and "could not check" stay distinct.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from airclaims.common.exceptions import BookingLookupError
from airclaims.config import settings
from airclaims.core.eligibility.reference_data import SAMPLE_BOOKINGS
from airclaims.core.eligibility.schemas import BookingLookupResult, FlightDetails
from airclaims.integrations.base import BaseIntegration

_FOUND_MESSAGE = "Booking reference verified successfully"
_NOT_FOUND_MESSAGE = (
    "Booking reference not found in system. Please verify the reference number and try again."
)


class BookingLookupPort(BaseIntegration):
    """Confirms that a booking reference maps to a real ticketed flight."""

    @abstractmethod
    async def lookup(self, booking_reference: str) -> BookingLookupResult:
        ...


class StaticBookingLookup(BookingLookupPort):
    def __init__(self, bookings: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        super().__init__("booking_static")
        self._bookings = dict(SAMPLE_BOOKINGS if bookings is None else bookings)

    async def health_check(self) -> bool:
        return True

    async def lookup(self, booking_reference: str) -> BookingLookupResult:
        booking = self._bookings.get(booking_reference)
        if booking is None:
            self.logger.info("Booking %s not in allow-list", booking_reference)
            return BookingLookupResult(found=False, message=_NOT_FOUND_MESSAGE)

        return BookingLookupResult(
            found=True,
            flight_details=FlightDetails(**booking),
            message=_FOUND_MESSAGE,
        )


class ReservationClient(BookingLookupPort):
    """Reservation system client with real REST API and mock fallback."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__("reservations")
        self._base_url = (base_url or settings.BOOKING_API_URL).rstrip("/")
        self._api_key = api_key or settings.BOOKING_API_KEY
        self._timeout = timeout if timeout is not None else settings.BOOKING_TIMEOUT_SECONDS
        self._transport = transport
        self._fallback = StaticBookingLookup()

    @property
    def is_mock(self) -> bool:
        return self._api_key.startswith("mock_")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={"Authorization": f"Bearer {self._api_key}"},
        )

    async def health_check(self) -> bool:
        if self.is_mock:
            self.logger.info("Reservation system health check: OK (mock)")
            return True
        try:
            async with self._client() as client:
                resp = await client.get("/health")
                return resp.status_code == 200
        except Exception as e:
            self.logger.error("Reservation system health check failed: %s", e)
            return False

    async def lookup(self, booking_reference: str) -> BookingLookupResult:
        if self.is_mock:
            self.logger.info("Mock booking lookup: %s", booking_reference)
            return await self._fallback.lookup(booking_reference)

        self.logger.info("Looking up booking %s", booking_reference)
        try:
            async with self._client() as client:
                resp = await client.get(f"/bookings/{booking_reference}")
        except httpx.TimeoutException as e:
            self.logger.error("Booking lookup timed out for %s: %s", booking_reference, e)
            raise BookingLookupError("timed out") from e
        except httpx.HTTPError as e:
            self.logger.error("Booking lookup transport error for %s: %s", booking_reference, e)
            raise BookingLookupError(f"transport error: {e}") from e

        if resp.status_code == 404:
            return BookingLookupResult(found=False, message=_NOT_FOUND_MESSAGE)
        if resp.status_code != 200:
            self.logger.error(
                "Booking lookup for %s returned HTTP %d", booking_reference, resp.status_code
            )
            raise BookingLookupError(f"unexpected status {resp.status_code}")

        return self._parse(booking_reference, resp)

    def _parse(self, booking_reference: str, resp: httpx.Response) -> BookingLookupResult:
        try:
            data = resp.json()
            flight = data["flight"]
            return BookingLookupResult(
                found=True,
                flight_details=FlightDetails(
                    flight_number=flight["number"],
                    date=flight["date"],
                    route=f"{flight['origin']} → {flight['destination']}",
                ),
                message=_FOUND_MESSAGE,
            )
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            self.logger.error("Malformed booking payload for %s: %s", booking_reference, e)
            raise BookingLookupError("malformed response") from e
