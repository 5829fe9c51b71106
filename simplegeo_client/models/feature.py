"""
feature.py
----------

Shared GeoJSON "Feature" behaviour for the objects the API stores:
Places features and Storage records.

A feature is an id, an optional point, and a free-form property bag.
Properties are held in an explicit mapping and accessed through
set_property / get_property.
"""

import json
from typing import Any, Dict, Optional, Tuple


class Feature:
    """
    Base class for GeoJSON-like features.

    Attributes
    ----------
    id : str or None
        Unique identifier of the feature.
    lat, lng : float or None
        Location of the feature. Optional when only addressing the feature
        (get / delete), required when inserting / updating.
    """

    def __init__(self,
                 id: Optional[str] = None,
                 lat: Optional[float] = None,
                 lng: Optional[float] = None,
                 properties: Optional[Dict[str, Any]] = None) -> None:
        self.id = id
        self.lat = lat
        self.lng = lng
        self._properties: Dict[str, Any] = dict(properties or {})

    # ------------------------------------------------------------------
    # Property bag
    # ------------------------------------------------------------------
    def set_property(self, key: str, value: Any) -> None:
        self._properties[key] = value

    def get_property(self, key: str, default: Any = None) -> Any:
        return self._properties.get(key, default)

    def remove_property(self, key: str) -> None:
        self._properties.pop(key, None)

    @property
    def properties(self) -> Dict[str, Any]:
        # A copy, so callers cannot mutate the bag behind set_property.
        return dict(self._properties)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    @property
    def coordinates(self) -> Tuple[Optional[float], Optional[float]]:
        # GeoJSON order: (lng, lat)
        return self.lng, self.lat

    def to_dict(self) -> Dict[str, Any]:
        """
        Return the GeoJSON-like representation of the feature:

            {"type": "Feature", "id": ..., "geometry": {...}, "properties": {...}}
        """
        return {
            "type": "Feature",
            "id": self.id,
            "geometry": {
                "type": "Point",
                "coordinates": [self.lng, self.lat],
            },
            "properties": self.properties,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @staticmethod
    def _parse_geometry(data: Dict[str, Any]) -> Tuple[Optional[float], Optional[float]]:
        # Returns (lat, lng) from a GeoJSON feature dict, or (None, None).
        geometry = data.get("geometry") or {}
        coords = geometry.get("coordinates") or [None, None]
        if len(coords) < 2:
            raise ValueError(f"Point geometry needs [lng, lat], got {coords!r}")
        lng, lat = coords[0], coords[1]
        return lat, lng

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Feature):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, lat={self.lat!r}, lng={self.lng!r})"
