"""
client.py
---------

Client for the SimpleGeo REST API.

Each public method maps a friendly call onto an endpoint: it builds a
RequestDescriptor (method, path, query parameters or JSON body), has it
signed with OAuth 1.0 HMAC-SHA1, sends it through the transport and
returns the decoded JSON.

Usage:
    from simplegeo_client.client import Client
    from simplegeo_client.models.credentials import Credentials

    client = Client(Credentials("key", "secret"))
    client.places_coord(37.7749, -122.4194, q="coffee", radius=1)

    # or, reading SIMPLEGEO_KEY / SIMPLEGEO_SECRET or simplegeo.yaml
    client = Client.from_config()
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

from loguru import logger

from simplegeo_client.models.credentials import Credentials
from simplegeo_client.models.geo_point import GeoPoint
from simplegeo_client.models.geo_record import GeoRecord
from simplegeo_client.models.place import Place
from simplegeo_client.oauth.request import HEADER, HttpMethod, RequestDescriptor
from simplegeo_client.oauth.signer import OAuthSigner
from simplegeo_client.utils.config import load_credentials
from simplegeo_client.utils.transport import HttpTransport

Coordinate = Union[float, int, str, GeoPoint]

SG_ID_PATTERN = re.compile(r"SG_[A-Za-z0-9]{22}")


class Client:
    BASE_URL = "http://api.simplegeo.com/"

    def __init__(self,
                 credentials: Credentials,
                 transport: Optional[Any] = None,
                 base_url: str = BASE_URL,
                 placement: str = HEADER) -> None:
        # transport: anything with send(SignedRequest) -> response with .body
        self.credentials = credentials
        self.signer = OAuthSigner(credentials)
        self.transport = transport if transport is not None else HttpTransport(placement=placement)
        self.base_url = base_url

    @classmethod
    def from_config(cls, path: Optional[Union[str, Path]] = None, **kwargs) -> "Client":
        """Build a client from load_credentials() (environment, then YAML file)."""
        return cls(load_credentials(path), **kwargs)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def extract_id(text: str) -> Optional[str]:
        """
        Extract a SimpleGeo handle (SG_ + 22 alphanumerics) from text,
        e.g. from a feature href. Returns None when there is none.
        """
        match = SG_ID_PATTERN.search(text or "")
        return match.group(0) if match else None

    @staticmethod
    def _coord(lat: Coordinate, lng: Optional[Coordinate] = None) -> str:
        # "lat,lng" from either a GeoPoint or two numbers.
        if isinstance(lat, GeoPoint):
            return lat.as_path()
        if lng is None:
            raise ValueError("Longitude is required unless a GeoPoint is given")
        return GeoPoint(lat, lng).as_path()

    @staticmethod
    def _segment(value: Any) -> str:
        # A caller-supplied path segment (layer, id, ip, handle).
        text = str(value) if value is not None else ""
        if not text:
            raise ValueError("Path segment must not be empty")
        return quote(text, safe="")

    def _request(self,
                 method: HttpMethod,
                 path: str,
                 params: Optional[Dict[str, Any]] = None,
                 body: Optional[str] = None) -> Any:
        descriptor = RequestDescriptor(
            method=method,
            base_url=self.base_url,
            path=path,
            params=params or {},
            body=body,
        )
        signed = self.signer.sign(descriptor)
        logger.debug("SimpleGeo {method} {path}", method=method.value, path=path)

        response = self.transport.send(signed)
        if not response.body:
            return None
        return json.loads(response.body)

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------
    def feature_categories(self) -> Any:
        """List every possible feature category."""
        return self._request(HttpMethod.GET, "1.2/features/categories.json")

    def feature(self, handle: str) -> Any:
        """Detailed information about a feature, by SimpleGeo handle."""
        return self._request(HttpMethod.GET, f"1.2/features/{self._segment(handle)}.json")

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------
    def context_ip(self, ip: str, **params) -> Any:
        return self._request(HttpMethod.GET, f"1.2/context/{self._segment(ip)}.json", params)

    def context_coord(self, lat: Coordinate, lng: Optional[Coordinate] = None, **params) -> Any:
        """Context of a coordinate. lat may be a GeoPoint, in which case lng is omitted."""
        return self._request(HttpMethod.GET, f"1.2/context/{self._coord(lat, lng)}.json", params)

    def context_coord_feature(self, lat: Coordinate, lng: Optional[Coordinate], category: str) -> Any:
        """Only the features of one category around a coordinate."""
        return self._request(
            HttpMethod.GET,
            f"1.2/context/{self._coord(lat, lng)}.json",
            {"features__category": category, "filter": "features"},
        )

    def context_address(self, address: str, **params) -> Any:
        """Context of a human readable (US) address."""
        return self._request(HttpMethod.GET, "1.2/context/address.json", {"address": address, **params})

    def weather_address(self, address: str) -> Any:
        return self._request(
            HttpMethod.GET,
            "1.2/context/address.json",
            {"address": address, "filter": "weather"},
        )

    # ------------------------------------------------------------------
    # Places
    #
    # Search options: q (query), category, radius (km, default 25), num
    # ------------------------------------------------------------------
    def places_ip(self, ip: str, **params) -> Any:
        return self._request(HttpMethod.GET, f"1.2/places/{self._segment(ip)}.json", params)

    def places_coord(self, lat: Coordinate, lng: Optional[Coordinate] = None, **params) -> Any:
        return self._request(HttpMethod.GET, f"1.2/places/{self._coord(lat, lng)}.json", params)

    def places_bounds(self,
                      sw_lat: Coordinate, sw_lng: Coordinate,
                      ne_lat: Coordinate, ne_lng: Coordinate,
                      **params) -> Any:
        """Places inside a bounding box given by its south-west and north-east corners."""
        bounds = f"{self._coord(sw_lat, sw_lng)},{self._coord(ne_lat, ne_lng)}"
        return self._request(HttpMethod.GET, f"1.2/places/{bounds}.json", params)

    def places_address(self, address: str, **params) -> Any:
        return self._request(HttpMethod.GET, "1.2/places/address.json", {"address": address, **params})

    def create_place(self, place: Place) -> Any:
        """
        Contribute a new feature to SimpleGeo Places.

        Inserting the same place twice overwrites the earlier insert. New
        places are visible only to your application until approved.
        """
        return self._request(HttpMethod.POST, "1.2/places", body=place.to_json())

    def update_place(self, place: Place) -> Any:
        return self._request(
            HttpMethod.POST,
            f"1.2/features/{self._place_id(place)}.json",
            body=place.to_json(),
        )

    def delete_place(self, place: Place) -> Any:
        """Suggest that a feature be deleted; hides it from your view. Returns a status token."""
        return self._request(HttpMethod.DELETE, f"1.2/features/{self._place_id(place)}.json")

    def _place_id(self, place: Place) -> str:
        if not place.id:
            raise ValueError("Place has no id; create it first")
        return self._segment(place.id)

    # ------------------------------------------------------------------
    # Storage records
    # ------------------------------------------------------------------
    def _record_path(self, record: GeoRecord) -> str:
        return f"0.1/records/{self._segment(record.layer)}/{self._segment(record.id)}"

    def put_record(self, record: GeoRecord) -> Any:
        """Insert (or replace) a record at its layer / id."""
        return self._request(HttpMethod.PUT, f"{self._record_path(record)}.json", body=record.to_json())

    def get_record(self, record: GeoRecord) -> Any:
        return self._request(HttpMethod.GET, f"{self._record_path(record)}.json")

    def delete_record(self, record: GeoRecord) -> Any:
        return self._request(HttpMethod.DELETE, f"{self._record_path(record)}.json")

    def record_history(self, record: GeoRecord) -> Any:
        """Location history of a single record."""
        return self._request(HttpMethod.GET, f"{self._record_path(record)}/history.json")

    # Nearby search options: radius, limit, types, start, end
    def nearby_records_coord(self, layer: str, lat: Coordinate, lng: Optional[Coordinate] = None,
                             **params) -> Any:
        return self._request(
            HttpMethod.GET,
            f"0.1/records/{self._segment(layer)}/nearby/{self._coord(lat, lng)}.json",
            params,
        )

    def nearby_records_address(self, layer: str, address: str, **params) -> Any:
        return self._request(
            HttpMethod.GET,
            f"0.1/records/{self._segment(layer)}/nearby/address.json",
            {"address": address, **params},
        )

    def nearby_records_geohash(self, layer: str, geohash: str, **params) -> Any:
        """Records near a geohash (see geohash.org)."""
        return self._request(
            HttpMethod.GET,
            f"0.1/records/{self._segment(layer)}/nearby/{self._segment(geohash)}.json",
            params,
        )

    def nearby_records_ip(self, layer: str, ip: str, **params) -> Any:
        return self._request(
            HttpMethod.GET,
            f"0.1/records/{self._segment(layer)}/nearby/{self._segment(ip)}.json",
            params,
        )
