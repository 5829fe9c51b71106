import time
from typing import Any, Dict, Optional

from simplegeo_client.models.feature import Feature


class GeoRecord(Feature):
    # A SimpleGeo Storage record: arbitrary data about an object and the
    # layer it resides in.
    #
    # The creation timestamp is fixed when the record is built and cannot
    # be reassigned afterwards.

    def __init__(self,
                 layer: str,
                 id: str,
                 lat: Optional[float] = None,
                 lng: Optional[float] = None,
                 properties: Optional[Dict[str, Any]] = None,
                 created: Optional[int] = None) -> None:
        super().__init__(id=id, lat=lat, lng=lng, properties=properties)
        self.layer = layer
        self._created = int(time.time()) if created is None else int(created)

    @property
    def created(self) -> int:
        # Unix epoch seconds. Read-only.
        return self._created

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        # Keep the record layout: type, id, created, geometry, properties
        return {
            "type": data["type"],
            "id": data["id"],
            "created": self.created,
            "geometry": data["geometry"],
            "properties": data["properties"],
        }

    @classmethod
    def from_dict(cls, layer: str, data: Dict[str, Any]) -> "GeoRecord":
        # Rebuild a record from a GeoJSON feature, e.g. a get_record response.
        lat, lng = cls._parse_geometry(data)
        return cls(
            layer=data.get("layer", layer),
            id=data["id"],
            lat=lat,
            lng=lng,
            properties=data.get("properties") or {},
            created=data.get("created"),
        )

    def __repr__(self) -> str:
        return f"GeoRecord(layer={self.layer!r}, id={self.id!r}, lat={self.lat!r}, lng={self.lng!r})"
