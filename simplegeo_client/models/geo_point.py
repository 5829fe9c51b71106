from dataclasses import dataclass
from typing import Tuple

from geopy.distance import geodesic
from geopy.point import Point


@dataclass(frozen=True)
class GeoPoint:
    # A latitude / longitude pair. Simply represents a coordinate.

    lat: float
    lng: float

    def __post_init__(self) -> None:
        # geopy rejects latitudes outside [-90, 90] and non-numeric input.
        Point(self.lat, self.lng)

    @property
    def as_tuple(self) -> Tuple[float, float]:
        # Returns a (lat, lng) tuple, the order geopy expects.
        return self.lat, self.lng

    def as_path(self) -> str:
        # "lat,lng" as used in the context / places / nearby URLs.
        return f"{self.lat},{self.lng}"

    def distance_km(self, other: "GeoPoint") -> float:
        # Geodesic (great-circle) distance in kilometres.
        return geodesic(self.as_tuple, other.as_tuple).km

    def __str__(self) -> str:
        return f"({self.lat:.5f}, {self.lng:.5f})"
