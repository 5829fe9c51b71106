"""
signer.py
---------

OAuth 1.0 request signing with HMAC-SHA1.

Steps
-----
1. Generate oauth_nonce and oauth_timestamp (unless supplied).
2. Collect oauth_* parameters plus every request parameter (query string and
   form body; a raw JSON body is never signed).
3. Percent-encode each name and value (RFC 3986).
4. Sort by encoded name, then encoded value, and join as k=v&k=v.
5. Base string = METHOD & enc(base URL) & enc(parameter string).
6. Key = enc(consumer secret) & enc(token secret).
7. oauth_signature = base64(HMAC-SHA1(key, base string)).

Given the same descriptor, credentials, nonce and timestamp the signature
is always the same. Nothing here mutates its input or keeps state between
calls, so a signer can be shared between threads.
"""

import base64
import hashlib
import hmac
import secrets
import string
import time
from typing import Iterable, List, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlsplit, urlunsplit

from loguru import logger

from simplegeo_client.models.credentials import Credentials
from simplegeo_client.oauth.encoding import percent_encode, to_param_string
from simplegeo_client.oauth.errors import EncodingError, InvalidCredentials
from simplegeo_client.oauth.request import HttpMethod, RequestDescriptor, SignedRequest

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"
NONCE_LENGTH = 32
DEFAULT_PORTS = {"http": 80, "https": 443}

_NONCE_ALPHABET = string.ascii_letters + string.digits

Pairs = List[Tuple[str, str]]


# ----------------------------------------------------------------------
# Building blocks
# ----------------------------------------------------------------------
def generate_nonce(length: int = NONCE_LENGTH) -> str:
    """Random alphanumeric token from the OS CSPRNG."""
    return "".join(secrets.choice(_NONCE_ALPHABET) for _ in range(length))


def generate_timestamp() -> str:
    return str(int(time.time()))


def normalize_url(url: str) -> Tuple[str, Pairs]:
    """
    Split a URL into its normalized base URL and its query parameters.

    The base URL has a lower-case scheme and host, no default port, no
    query string and no fragment. An empty path becomes "/".
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS or not parts.hostname:
        raise EncodingError(f"Cannot sign a request to {url!r}: absolute http(s) URL required")

    netloc = parts.hostname.lower()
    if parts.port is not None and parts.port != DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{parts.port}"

    base = urlunsplit((scheme, netloc, parts.path or "/", "", ""))
    query = parse_qsl(parts.query, keep_blank_values=True)
    return base, query


def collect_parameters(descriptor: RequestDescriptor, oauth_params: dict) -> Tuple[str, Pairs, Pairs]:
    """
    Gather every parameter that takes part in the signature.

    Returns (base_url, request_params, all_params). request_params are the
    caller's parameters as strings; all_params adds the oauth_* ones.
    """
    base_url, request_params = normalize_url(descriptor.url)

    for name, value in descriptor.params.items():
        if not isinstance(name, str):
            raise EncodingError(f"Parameter names must be strings, got {name!r}")
        if name.startswith("oauth_"):
            raise EncodingError(f"Parameter {name!r} collides with the OAuth protocol parameters")
        request_params.append((name, to_param_string(value)))

    all_params = request_params + [(k, v) for k, v in oauth_params.items()]
    return base_url, request_params, all_params


def normalize_parameters(pairs: Iterable[Tuple[str, str]]) -> str:
    # Sort on the encoded form, name first then value for repeated names.
    encoded = sorted((percent_encode(k), percent_encode(v)) for k, v in pairs)
    return "&".join(f"{k}={v}" for k, v in encoded)


def signature_base_string(method: Union[str, HttpMethod], base_url: str,
                          pairs: Iterable[Tuple[str, str]]) -> str:
    method = HttpMethod.parse(method)
    return "&".join([
        method.value,
        percent_encode(base_url),
        percent_encode(normalize_parameters(pairs)),
    ])


def signing_key(consumer_secret: str, token_secret: str = "") -> str:
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret or '')}"


def hmac_sha1(key: str, text: str) -> str:
    digest = hmac.new(key.encode("utf-8"), text.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def _check_credentials(credentials: Credentials) -> None:
    for name in ("consumer_key", "consumer_secret"):
        value = getattr(credentials, name, None)
        if not isinstance(value, str) or not value:
            raise InvalidCredentials(f"{name} is missing or empty")
    for name in ("token", "token_secret"):
        if not isinstance(getattr(credentials, name), str):
            raise InvalidCredentials(f"{name} must be a string")


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------
def sign(descriptor: RequestDescriptor,
         credentials: Credentials,
         nonce: Optional[str] = None,
         timestamp: Optional[Union[int, str]] = None) -> SignedRequest:
    """
    Sign a request descriptor.

    Parameters
    ----------
    descriptor : RequestDescriptor
        Request to sign. Not modified.
    credentials : Credentials
        Consumer key and secret must be non-empty.
    nonce, timestamp : optional
        Fixed values for reproducible signatures; generated when omitted.

    Raises
    ------
    InvalidCredentials, UnsupportedMethod, EncodingError
    """
    _check_credentials(credentials)
    method = HttpMethod.parse(descriptor.method)

    oauth_params = {
        "oauth_consumer_key": credentials.consumer_key,
        "oauth_nonce": nonce if nonce is not None else generate_nonce(),
        "oauth_signature_method": SIGNATURE_METHOD,
        "oauth_timestamp": str(timestamp) if timestamp is not None else generate_timestamp(),
        "oauth_version": OAUTH_VERSION,
    }
    if credentials.has_token:
        oauth_params["oauth_token"] = credentials.token

    base_url, request_params, all_params = collect_parameters(descriptor, oauth_params)
    base_string = signature_base_string(method, base_url, all_params)
    key = signing_key(credentials.consumer_secret, credentials.token_secret)

    oauth_params["oauth_signature"] = hmac_sha1(key, base_string)

    logger.debug("Signed {method} {url}", method=method.value, url=base_url)

    return SignedRequest(
        descriptor=descriptor,
        method=method,
        url=base_url,
        params=tuple(request_params),
        oauth_params=oauth_params,
        base_string=base_string,
    )


class OAuthSigner:
    """
    Holds a set of credentials and signs descriptors with them.

    Thin convenience around sign(); keeps no state besides the credentials.
    """

    def __init__(self, credentials: Credentials) -> None:
        self.credentials = credentials

    def sign(self,
             descriptor: RequestDescriptor,
             nonce: Optional[str] = None,
             timestamp: Optional[Union[int, str]] = None) -> SignedRequest:
        return sign(descriptor, self.credentials, nonce=nonce, timestamp=timestamp)
