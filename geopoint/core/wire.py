"""Encoding and decoding of the tagged ``GeoPoint`` wire record."""
from __future__ import annotations

from typing import Any, Literal, Mapping

import orjson
from pydantic import BaseModel, ConfigDict, Field

from geopoint.core.point import WIRE_TYPE_FIELD, GeoPoint


class GeoPointPayload(BaseModel):
    """Shape of the serialized record; ranges are checked by ``GeoPoint`` itself."""

    model_config = ConfigDict(strict=True, extra="forbid")

    type: Literal["GeoPoint"] = Field(alias=WIRE_TYPE_FIELD)
    latitude: float
    longitude: float


def from_wire(payload: Mapping[str, Any]) -> GeoPoint:
    """Rebuild a point from its wire record.

    Raises ``pydantic.ValidationError`` for a malformed record and
    ``GeoPointRangeError`` for out-of-range coordinates.
    """
    record = GeoPointPayload.model_validate(payload)
    return GeoPoint.from_degrees(record.latitude, record.longitude)


def dumps(point: GeoPoint) -> bytes:
    return orjson.dumps(point.to_wire())


def loads(data: str | bytes) -> GeoPoint:
    return from_wire(orjson.loads(data))
