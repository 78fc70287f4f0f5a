"""Validated latitude/longitude value type with great-circle distance helpers.

A ``GeoPoint`` accepts several input shapes::

    GeoPoint(other_point)
    GeoPoint(30, 30)
    GeoPoint([30, 30])
    GeoPoint({"latitude": 30, "longitude": 30})
    GeoPoint()  # (0, 0)

Latitude stays within [-90, 90] and longitude within [-180, 180] for the
lifetime of the instance: constructors and property setters both reject
out-of-range values with ``GeoPointRangeError``.
"""
from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from numbers import Real
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

if TYPE_CHECKING:
    from geopoint.location.provider import LocationProvider

LATITUDE_MIN = -90.0
LATITUDE_MAX = 90.0
LONGITUDE_MIN = -180.0
LONGITUDE_MAX = 180.0

EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_MILES = 3958.8

WIRE_TYPE_FIELD = "__type"
WIRE_TYPE = "GeoPoint"


class GeoPointRangeError(ValueError):
    """A latitude or longitude fell outside its domain."""

    def __init__(self, field: str, value: Any, bound: Optional[float]) -> None:
        self.field = field
        self.value = value
        self.bound = bound
        if bound is None:
            super().__init__(f"{field} is not a number (got {value!r})")
            return
        op = "<" if value < bound else ">"
        super().__init__(f"{field} {op} {bound} (got {value!r})")


def validate(latitude: Any, longitude: Any) -> None:
    """Raise ``GeoPointRangeError`` if the pair is out of bounds. Bounds are inclusive.

    NaN is rejected with ``bound`` set to None.
    """
    if math.isnan(latitude):
        raise GeoPointRangeError("latitude", latitude, None)
    if latitude < LATITUDE_MIN:
        raise GeoPointRangeError("latitude", latitude, LATITUDE_MIN)
    if latitude > LATITUDE_MAX:
        raise GeoPointRangeError("latitude", latitude, LATITUDE_MAX)
    if math.isnan(longitude):
        raise GeoPointRangeError("longitude", longitude, None)
    if longitude < LONGITUDE_MIN:
        raise GeoPointRangeError("longitude", longitude, LONGITUDE_MIN)
    if longitude > LONGITUDE_MAX:
        raise GeoPointRangeError("longitude", longitude, LONGITUDE_MAX)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_pair(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and len(value) == 2


def _fields_of(value: Any) -> Optional[Tuple[Any, Any]]:
    if isinstance(value, Mapping):
        if "latitude" in value and "longitude" in value:
            return value["latitude"], value["longitude"]
        return None
    if hasattr(value, "latitude") and hasattr(value, "longitude"):
        return value.latitude, value.longitude
    return None


def _numeric(fields: Optional[Tuple[Any, Any]]) -> Optional[Tuple[Any, Any]]:
    if fields is None or not (_is_number(fields[0]) and _is_number(fields[1])):
        return None
    return fields


def _resolve(first: Any = None, second: Any = None) -> Optional[Tuple[Any, Any]]:
    """Map constructor arguments onto a (latitude, longitude) pair, or None.

    Pairs and field objects only match when both components are numbers.
    """
    if _is_pair(first) and _numeric((first[0], first[1])):
        return first[0], first[1]
    fields = _numeric(_fields_of(first))
    if fields is not None:
        return fields
    if _is_number(first) and _is_number(second):
        return first, second
    return None


class GeoPoint:
    """A latitude/longitude point that can be attached to a record as its location.

    Only one field of a record is expected to carry a GeoPoint; this type does
    not enforce that.

    >>> point = GeoPoint(30.0, -20.0)
    >>> point.to_wire()
    {'__type': 'GeoPoint', 'latitude': 30.0, 'longitude': -20.0}
    """

    __slots__ = ("_latitude", "_longitude")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, *args: Any) -> None:
        if len(args) > 2:
            raise TypeError(f"GeoPoint() takes at most 2 positional arguments ({len(args)} given)")
        resolved = _resolve(*args)
        if resolved is None:
            # TODO: decide with API consumers whether unusable input should raise instead of defaulting.
            self._latitude = 0.0
            self._longitude = 0.0
            return
        latitude, longitude = resolved
        validate(latitude, longitude)
        self._latitude = float(latitude)
        self._longitude = float(longitude)

    @classmethod
    def from_pair(cls, pair: Sequence[float]) -> "GeoPoint":
        """Build from a ``(latitude, longitude)`` sequence, rejecting any other shape."""
        if not (_is_pair(pair) and _numeric((pair[0], pair[1]))):
            raise TypeError(f"expected a numeric (latitude, longitude) pair, got {pair!r}")
        return cls(pair[0], pair[1])

    @classmethod
    def from_object(cls, value: Any) -> "GeoPoint":
        """Build from a mapping or object exposing ``latitude`` and ``longitude``."""
        fields = _numeric(_fields_of(value))
        if fields is None:
            raise TypeError(f"{type(value).__name__} has no numeric latitude/longitude fields")
        return cls(*fields)

    @classmethod
    def from_degrees(cls, latitude: float, longitude: float) -> "GeoPoint":
        if not (_is_number(latitude) and _is_number(longitude)):
            raise TypeError(f"latitude and longitude must be numbers, got {latitude!r}, {longitude!r}")
        return cls(latitude, longitude)

    @classmethod
    async def current(cls, provider: LocationProvider) -> "GeoPoint":
        """Resolve the host's current position through ``provider``.

        Provider errors propagate to the caller unchanged.
        """
        position = await provider.current_position()
        return cls.from_object(position)

    @property
    def latitude(self) -> float:
        """North-south component, in [-90, 90]."""
        return self._latitude

    @latitude.setter
    def latitude(self, value: float) -> None:
        validate(value, self._longitude)
        self._latitude = float(value)

    @property
    def longitude(self) -> float:
        """East-west component, in [-180, 180]."""
        return self._longitude

    @longitude.setter
    def longitude(self, value: float) -> None:
        validate(self._latitude, value)
        self._longitude = float(value)

    def to_wire(self) -> Dict[str, Any]:
        """Return the tagged record consumed by storage and transport layers."""
        validate(self._latitude, self._longitude)
        return {
            WIRE_TYPE_FIELD: WIRE_TYPE,
            "latitude": self._latitude,
            "longitude": self._longitude,
        }

    def angular_distance(self, other: "GeoPoint") -> float:
        """Return the central angle to ``other`` in radians (haversine)."""
        lat1 = math.radians(self.latitude)
        long1 = math.radians(self.longitude)
        lat2 = math.radians(other.latitude)
        long2 = math.radians(other.longitude)
        sin_half_dlat = math.sin((lat1 - lat2) / 2)
        sin_half_dlong = math.sin((long1 - long2) / 2)
        # Square of half the chord length between the points.
        a = sin_half_dlat * sin_half_dlat + math.cos(lat1) * math.cos(lat2) * sin_half_dlong * sin_half_dlong
        a = min(1.0, a)
        return 2 * math.asin(math.sqrt(a))

    def kilometers_to(self, other: "GeoPoint") -> float:
        return self.angular_distance(other) * EARTH_RADIUS_KM

    def miles_to(self, other: "GeoPoint") -> float:
        return self.angular_distance(other) * EARTH_RADIUS_MILES

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeoPoint):
            return NotImplemented
        return self._latitude == other._latitude and self._longitude == other._longitude

    def __repr__(self) -> str:
        return f"GeoPoint(latitude={self._latitude!r}, longitude={self._longitude!r})"
