from typing import Any, Dict, Optional

from simplegeo_client.models.feature import Feature


class Place(Feature):
    # A feature in SimpleGeo Places.
    #
    # New places have no id; the API assigns a handle (SG_...) on insert.
    # Include "private": True in the properties to keep a place visible only
    # to your application.

    def __init__(self,
                 lat: float,
                 lng: float,
                 id: Optional[str] = None,
                 properties: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(id=id, lat=lat, lng=lng, properties=properties)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Place":
        lat, lng = cls._parse_geometry(data)
        return cls(lat=lat, lng=lng, id=data.get("id"),
                   properties=data.get("properties") or {})
