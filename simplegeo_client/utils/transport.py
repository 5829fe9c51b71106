"""
transport.py
------------

Sends a SignedRequest over HTTP with requests and hands back the status
and raw body.

Responsible ONLY for moving bytes:

- It does NOT sign anything.
- It does NOT decode JSON.
- Network errors and non-2xx responses propagate as requests exceptions,
  unchanged.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

import requests
from loguru import logger

from simplegeo_client.oauth.request import HEADER, PLACEMENTS, SignedRequest

DEFAULT_TIMEOUT = 10


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)


class HttpTransport:
    """
    Executes signed requests with the requests library.

    Parameters
    ----------
    timeout : float
        Seconds before requests gives up on connect / read.
    placement : str
        "header" to send an Authorization header (default) or "query" to
        append the oauth_* parameters to the URL.
    session : requests.Session or None
        Optional session; plain requests.request is used otherwise.
    """

    def __init__(self,
                 timeout: float = DEFAULT_TIMEOUT,
                 placement: str = HEADER,
                 session: Optional[requests.Session] = None) -> None:
        if placement not in PLACEMENTS:
            raise ValueError(f"Unknown signature placement: {placement!r}")
        self.timeout = timeout
        self.placement = placement
        self.session = session

    # ------------------------------------------------------------------
    def send(self, signed: SignedRequest) -> TransportResponse:
        url = signed.request_url(self.placement)
        sender = self.session.request if self.session is not None else requests.request

        logger.debug("{method} {url}", method=signed.method.value, url=signed.url)
        response = sender(
            signed.method.value,
            url,
            headers=signed.headers(self.placement),
            data=signed.body_bytes(),
            timeout=self.timeout,
        )

        if not 200 <= response.status_code < 300:
            logger.warning(
                "SimpleGeo returned {status} for {method} {url}: {text}",
                status=response.status_code,
                method=signed.method.value,
                url=signed.url,
                text=response.text[:500],
            )
            response.raise_for_status()
            # 1xx / 3xx that were not followed
            raise requests.HTTPError(
                f"Unexpected status {response.status_code} for {signed.url}",
                response=response,
            )

        logger.debug("{status} from {url}", status=response.status_code, url=signed.url)
        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )
