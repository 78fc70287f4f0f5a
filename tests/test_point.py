from types import SimpleNamespace

import pytest

from geopoint.core.point import GeoPoint, GeoPointRangeError


def test_construction_forms_agree():
    expected = GeoPoint(30.0, -20.0)
    assert GeoPoint([30.0, -20.0]) == expected
    assert GeoPoint((30.0, -20.0)) == expected
    assert GeoPoint({"latitude": 30.0, "longitude": -20.0}) == expected
    assert GeoPoint(SimpleNamespace(latitude=30.0, longitude=-20.0)) == expected
    assert GeoPoint(expected) == expected


def test_integer_input_is_stored_as_float():
    point = GeoPoint(30, -20)
    assert isinstance(point.latitude, float)
    assert point.to_wire()["latitude"] == 30.0


@pytest.mark.parametrize(
    "args",
    [
        (),
        (45.0,),
        ("north",),
        (None, None),
        ([1.0, 2.0, 3.0],),
        ({"latitude": 10.0},),
        (True, False),
        (["north", "east"],),
        ([True, False],),
        ({"latitude": None, "longitude": None},),
        (SimpleNamespace(latitude="1", longitude="2"),),
    ],
)
def test_unusable_input_defaults_to_origin(args):
    point = GeoPoint(*args)
    assert point.latitude == 0.0
    assert point.longitude == 0.0


def test_too_many_arguments():
    with pytest.raises(TypeError):
        GeoPoint(1.0, 2.0, 3.0)


def test_constructor_rejects_out_of_range():
    with pytest.raises(GeoPointRangeError, match=r"latitude > 90\.0"):
        GeoPoint([95.0, 0.0])
    with pytest.raises(GeoPointRangeError, match=r"longitude < -180\.0"):
        GeoPoint({"latitude": 0.0, "longitude": -190.0})


def test_guarded_mutation_keeps_previous_value():
    point = GeoPoint(10.0, 20.0)
    with pytest.raises(GeoPointRangeError) as excinfo:
        point.latitude = 95
    assert excinfo.value.field == "latitude"
    assert point.latitude == 10.0
    with pytest.raises(GeoPointRangeError):
        point.longitude = 181
    assert point.longitude == 20.0


def test_guarded_mutation_accepts_valid_values():
    point = GeoPoint()
    point.latitude = -90
    point.longitude = 180.0
    assert point == GeoPoint(-90.0, 180.0)


def test_explicit_constructors_reject_wrong_shape():
    with pytest.raises(TypeError):
        GeoPoint.from_pair([1.0])
    with pytest.raises(TypeError):
        GeoPoint.from_object(42)
    with pytest.raises(TypeError):
        GeoPoint.from_degrees("1", 2.0)
    assert GeoPoint.from_pair((1.0, 2.0)) == GeoPoint(1.0, 2.0)
    assert GeoPoint.from_object({"latitude": 1.0, "longitude": 2.0}) == GeoPoint(1.0, 2.0)


def test_from_object_validates_fields():
    with pytest.raises(GeoPointRangeError):
        GeoPoint.from_object(SimpleNamespace(latitude=-91.0, longitude=0.0))


def test_points_are_not_hashable():
    with pytest.raises(TypeError):
        hash(GeoPoint(1.0, 2.0))


def test_to_wire():
    assert GeoPoint(30.0, -20.0).to_wire() == {"__type": "GeoPoint", "latitude": 30.0, "longitude": -20.0}


def test_repr():
    assert repr(GeoPoint(1.5, -2.0)) == "GeoPoint(latitude=1.5, longitude=-2.0)"


@pytest.mark.parametrize(
    "value",
    [["north", "east"], [True, False], (None, 1.0)],
)
def test_from_pair_requires_numbers(value):
    with pytest.raises(TypeError):
        GeoPoint.from_pair(value)


@pytest.mark.parametrize(
    "value",
    [{"latitude": None, "longitude": None}, SimpleNamespace(latitude="1", longitude="2")],
)
def test_from_object_requires_numbers(value):
    with pytest.raises(TypeError):
        GeoPoint.from_object(value)


def test_nan_is_rejected_on_construction_and_mutation():
    with pytest.raises(GeoPointRangeError) as excinfo:
        GeoPoint(float("nan"), 0.0)
    assert excinfo.value.field == "latitude"
    point = GeoPoint(10.0, 20.0)
    with pytest.raises(GeoPointRangeError):
        point.longitude = float("nan")
    assert point.longitude == 20.0
    with pytest.raises(GeoPointRangeError):
        point.latitude = float("inf")
    assert point.latitude == 10.0


def test_to_wire_rechecks_tampered_storage():
    point = GeoPoint(10.0, 20.0)
    point._latitude = 95.0
    with pytest.raises(GeoPointRangeError) as excinfo:
        point.to_wire()
    assert excinfo.value.field == "latitude"
    assert excinfo.value.bound == 90.0
