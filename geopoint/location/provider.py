"""Providers that report the host's current geographic position."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
import structlog

from geopoint.observability.tracing import span
from geopoint.settings import LocationSettings

LOGGER = structlog.wrap_logger(logging.getLogger(__name__))


class LocationUnavailableError(RuntimeError):
    """The location service answered without usable coordinates."""


@dataclass(frozen=True, slots=True)
class Position:
    """A position fix as reported by a provider."""

    latitude: float
    longitude: float
    accuracy_m: Optional[float] = None
    source: str = "unknown"


class LocationProvider:
    """Interface for plugging device or network location services."""

    async def current_position(self) -> Position:
        """Return the current position or raise the provider's own error."""
        raise NotImplementedError


class StaticLocationProvider(LocationProvider):
    """Always reports the configured position."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self._position = Position(latitude=latitude, longitude=longitude, source="static")

    async def current_position(self) -> Position:
        return self._position


class IPLocationProvider(LocationProvider):
    """Looks up the host's approximate position from an IP geolocation service."""

    def __init__(
        self,
        *,
        endpoint: str,
        timeout: float = 10.0,
        user_agent: str = "geopoint/0.1",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self._client = client

    async def current_position(self) -> Position:
        with span(name="ip_location", url=self._endpoint):
            if self._client is not None:
                response = await self._client.get(self._endpoint, headers=self._headers, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(self._endpoint, headers=self._headers)
        LOGGER.info("location_lookup", url=self._endpoint, status=response.status_code)
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise LocationUnavailableError("location service response is not JSON") from exc
        return _parse_payload(payload)


def _parse_payload(payload: Any) -> Position:
    if not isinstance(payload, dict):
        raise LocationUnavailableError(f"location service response is a {type(payload).__name__}, not an object")
    if payload.get("error"):
        raise LocationUnavailableError(f"location service error: {payload.get('reason') or payload['error']}")
    latitude = payload.get("latitude", payload.get("lat"))
    longitude = payload.get("longitude", payload.get("lon"))
    if latitude is None or longitude is None:
        raise LocationUnavailableError("location service response has no coordinates")
    accuracy = payload.get("accuracy")
    try:
        return Position(
            latitude=float(latitude),
            longitude=float(longitude),
            accuracy_m=float(accuracy) if accuracy is not None else None,
            source="ip",
        )
    except (TypeError, ValueError) as exc:
        raise LocationUnavailableError(f"location service coordinates are not numbers: {exc}") from exc


def build_provider(settings: LocationSettings) -> LocationProvider:
    """Create the provider named by ``settings.provider``."""
    if settings.provider == "static":
        return StaticLocationProvider(settings.latitude, settings.longitude)
    return IPLocationProvider(
        endpoint=settings.endpoint,
        timeout=settings.timeout_seconds,
        user_agent=settings.user_agent,
    )
