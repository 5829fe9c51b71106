import json

import pytest

from simplegeo_client.models.credentials import Credentials
from simplegeo_client.models.geo_point import GeoPoint
from simplegeo_client.models.geo_record import GeoRecord
from simplegeo_client.models.place import Place


def _record():
    record = GeoRecord("geotest", "1", lat=40.1, lng=-73.9)
    record.set_property("color", "red")
    return record


# ----------------------------------------------------------------------
# GeoRecord
# ----------------------------------------------------------------------
def test_record_serializes_to_geojson_feature():
    data = _record().to_dict()

    assert data["type"] == "Feature"
    assert data["id"] == "1"
    assert data["geometry"] == {"type": "Point", "coordinates": [-73.9, 40.1]}
    assert data["properties"] == {"color": "red"}
    assert isinstance(data["created"], int)
    assert list(data) == ["type", "id", "created", "geometry", "properties"]


def test_record_to_json_matches_dict():
    record = _record()
    assert json.loads(record.to_json()) == record.to_dict()


def test_record_created_is_set_once(monkeypatch):
    import simplegeo_client.models.geo_record as geo_record_mod

    monkeypatch.setattr(geo_record_mod.time, "time", lambda: 1310000000.9)
    record = GeoRecord("geotest", "1")
    assert record.created == 1310000000

    monkeypatch.setattr(geo_record_mod.time, "time", lambda: 1320000000.0)
    record.set_property("color", "blue")
    record.lat, record.lng = 1.0, 2.0
    assert record.created == 1310000000
    assert record.to_dict()["created"] == 1310000000


def test_record_created_cannot_be_reassigned():
    record = _record()
    with pytest.raises(AttributeError):
        record.created = 5


def test_property_bag():
    record = _record()

    assert record.get_property("color") == "red"
    assert record.get_property("size") is None
    assert record.get_property("size", 3) == 3

    record.set_property("color", "green")
    record.remove_property("missing")
    assert record.get_property("color") == "green"

    record.remove_property("color")
    assert record.properties == {}


def test_properties_returns_a_copy():
    record = _record()
    record.properties["color"] = "blue"
    assert record.get_property("color") == "red"


def test_record_without_location_serializes_null_coordinates():
    data = GeoRecord("geotest", "2").to_dict()
    assert data["geometry"]["coordinates"] == [None, None]


def test_record_from_dict():
    data = {
        "type": "Feature",
        "id": "1",
        "created": 1310000000,
        "geometry": {"type": "Point", "coordinates": [-73.9, 40.1]},
        "properties": {"color": "red"},
    }
    record = GeoRecord.from_dict("geotest", data)

    assert record.layer == "geotest"
    assert (record.lat, record.lng) == (40.1, -73.9)
    assert record.created == 1310000000
    assert record.to_dict() == data


def test_record_from_dict_rejects_short_coordinates():
    with pytest.raises(ValueError):
        GeoRecord.from_dict("geotest", {"id": "1", "geometry": {"coordinates": [1.0]}})


# ----------------------------------------------------------------------
# Place
# ----------------------------------------------------------------------
def test_place_serialization_has_no_created():
    place = Place(37.77, -122.41, properties={"name": "Cafe", "private": True})
    data = place.to_dict()

    assert data == {
        "type": "Feature",
        "id": None,
        "geometry": {"type": "Point", "coordinates": [-122.41, 37.77]},
        "properties": {"name": "Cafe", "private": True},
    }


def test_place_from_dict_and_equality():
    place = Place(37.77, -122.41, id="SG_4H2GqJDZrc0ZAjKGR8qM4D", properties={"name": "Cafe"})
    assert Place.from_dict(place.to_dict()) == place
    assert place != GeoRecord("l", place.id, place.lat, place.lng, place.properties)


# ----------------------------------------------------------------------
# GeoPoint
# ----------------------------------------------------------------------
def test_geo_point_paths():
    point = GeoPoint(37.7, -122.4)
    assert point.as_tuple == (37.7, -122.4)
    assert point.as_path() == "37.7,-122.4"


@pytest.mark.parametrize("lat", [90.5, -91, "north"])
def test_geo_point_rejects_bad_latitude(lat):
    with pytest.raises(ValueError):
        GeoPoint(lat, 0)


def test_geo_point_distance():
    sf = GeoPoint(37.7749, -122.4194)
    la = GeoPoint(34.0522, -118.2437)

    assert sf.distance_km(sf) == pytest.approx(0.0)
    assert sf.distance_km(la) == pytest.approx(559, rel=0.01)


# ----------------------------------------------------------------------
# Credentials
# ----------------------------------------------------------------------
def test_credentials_repr_hides_secrets():
    credentials = Credentials("ck", "supersecret", token="tk", token_secret="tokensecret")
    text = repr(credentials)

    assert "supersecret" not in text
    assert "tokensecret" not in text
    assert credentials.has_token
    assert not Credentials("ck", "cs").has_token


def test_credentials_are_immutable():
    credentials = Credentials("ck", "cs")
    with pytest.raises(AttributeError):
        credentials.consumer_secret = "other"
