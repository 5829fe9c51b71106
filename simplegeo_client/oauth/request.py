"""
request.py
----------

The two values that cross the signer boundary:

    RequestDescriptor  - what the endpoint mapper wants to send
    SignedRequest      - the descriptor plus the oauth_* parameters,
                         ready to hand to a transport

Both are immutable. Signing builds a new SignedRequest and never touches
the descriptor.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from simplegeo_client.oauth.encoding import percent_encode
from simplegeo_client.oauth.errors import UnsupportedMethod

HEADER = "header"
QUERY = "query"
PLACEMENTS = (HEADER, QUERY)


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, method: Any) -> "HttpMethod":
        # Accepts an HttpMethod or its name in any case.
        if isinstance(method, cls):
            return method
        if isinstance(method, str):
            try:
                return cls(method.upper())
            except ValueError:
                pass
        raise UnsupportedMethod(f"Unsupported HTTP method: {method!r}")


@dataclass(frozen=True)
class RequestDescriptor:
    """
    An unsigned request.

    Attributes
    ----------
    method : str or HttpMethod
        Validated at signing time, so an unsupported verb is a signing error.
    base_url : str
        Scheme + host (+ optional path prefix), e.g. "http://api.simplegeo.com/".
    path : str
        Endpoint path relative to base_url, e.g. "1.2/places/address.json".
    params : mapping of str -> value
        Query parameters, or the form body for POST / PUT without a raw body.
    body : str or None
        Raw body (JSON). When present it is sent as is and not signed.
    """

    method: Any
    base_url: str
    path: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)
    body: Optional[str] = None
    content_type: str = "application/json"

    def __post_init__(self) -> None:
        # Freeze a private copy so later changes to the caller's dict
        # cannot leak into an already-built descriptor.
        object.__setattr__(self, "params", MappingProxyType(dict(self.params or {})))

    @property
    def url(self) -> str:
        if not self.path:
            return self.base_url
        return self.base_url.rstrip("/") + "/" + self.path.lstrip("/")

    @property
    def form_encoded(self) -> bool:
        # Parameters travel in a form body only for POST / PUT without a raw body.
        return self.body is None and str(getattr(self.method, "value", self.method)).upper() in ("POST", "PUT")


def encode_pairs(pairs) -> str:
    # key=value&key=value with RFC 3986 encoding on both sides.
    return "&".join(f"{percent_encode(k)}={percent_encode(v)}" for k, v in pairs)


@dataclass(frozen=True)
class SignedRequest:
    """
    A request carrying a computed oauth_signature.

    Attributes
    ----------
    descriptor : RequestDescriptor
        The untouched input.
    method : HttpMethod
    url : str
        Normalized base URL: no query string, no default port.
    params : tuple of (name, value)
        All request parameters as strings, including any query string that
        was part of the descriptor URL.
    oauth_params : mapping of str -> str
        oauth_consumer_key, oauth_nonce, oauth_signature_method,
        oauth_timestamp, oauth_version, oauth_token (if any), oauth_signature.
    base_string : str
        The signature base string the signature was computed over.
    """

    descriptor: RequestDescriptor
    method: HttpMethod
    url: str
    params: Tuple[Tuple[str, str], ...]
    oauth_params: Mapping[str, str]
    base_string: str

    @property
    def oauth_signature(self) -> str:
        return self.oauth_params["oauth_signature"]

    @property
    def oauth_nonce(self) -> str:
        return self.oauth_params["oauth_nonce"]

    @property
    def oauth_timestamp(self) -> str:
        return self.oauth_params["oauth_timestamp"]

    @property
    def oauth_signature_method(self) -> str:
        return self.oauth_params["oauth_signature_method"]

    @property
    def oauth_version(self) -> str:
        return self.oauth_params["oauth_version"]

    # ------------------------------------------------------------------
    # Transport-facing views
    # ------------------------------------------------------------------
    def authorization_header(self, realm: str = "") -> str:
        """
        Authorization header value:

            OAuth realm="", oauth_consumer_key="ck", oauth_nonce="...", ...
        """
        parts = [f'realm="{realm}"']
        parts.extend(
            f'{percent_encode(k)}="{percent_encode(v)}"'
            for k, v in sorted(self.oauth_params.items())
        )
        return "OAuth " + ", ".join(parts)

    def query_params(self, placement: str = HEADER) -> List[Tuple[str, str]]:
        # Parameters that go on the URL. With query placement the oauth_*
        # parameters are appended here instead of going into a header.
        pairs: List[Tuple[str, str]] = []
        if not self.descriptor.form_encoded:
            pairs.extend(self.params)
        if placement == QUERY:
            pairs.extend(sorted(self.oauth_params.items()))
        return pairs

    def request_url(self, placement: str = HEADER) -> str:
        query = encode_pairs(self.query_params(placement))
        return f"{self.url}?{query}" if query else self.url

    def body_bytes(self) -> Optional[bytes]:
        if self.descriptor.body is not None:
            return self.descriptor.body.encode("utf-8")
        if self.descriptor.form_encoded and self.params:
            return encode_pairs(self.params).encode("ascii")
        return None

    def headers(self, placement: str = HEADER) -> Dict[str, str]:
        if placement not in PLACEMENTS:
            raise ValueError(f"Unknown signature placement: {placement!r}")
        headers: Dict[str, str] = {}
        if placement == HEADER:
            headers["Authorization"] = self.authorization_header()
        if self.descriptor.body is not None:
            headers["Content-Type"] = self.descriptor.content_type
        elif self.descriptor.form_encoded and self.params:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        return headers
