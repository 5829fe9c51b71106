"""
encoding.py
-----------

RFC 3986 percent-encoding as required by OAuth 1.0 (section 5.1).

Only the unreserved characters  A-Z a-z 0-9 - . _ ~  are left as is.
Everything else, including space, '+', '*' and '%', is encoded from its
UTF-8 bytes with upper-case hex digits.
"""

from typing import Any
from urllib.parse import quote, unquote

from simplegeo_client.oauth.errors import EncodingError


def to_param_string(value: Any) -> str:
    """
    Convert a parameter value to the string that gets signed and sent.

    Accepted: str, bytes (UTF-8), bool ("true" / "false"), int, float.
    Raises EncodingError for anything else (None, mappings, sequences, ...).
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(f"Parameter bytes are not valid UTF-8: {value!r}") from e
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise EncodingError(f"Cannot sign parameter value of type {type(value).__name__}: {value!r}")


def percent_encode(value: Any) -> str:
    # quote() keeps "-._~" and alphanumerics by default; safe="~" only adds
    # the tilde for older interpreters and drops "/" from the safe set.
    text = to_param_string(value)
    try:
        return quote(text.encode("utf-8"), safe="~")
    except UnicodeEncodeError as e:
        # lone surrogates
        raise EncodingError(f"Parameter is not encodable as UTF-8: {text!r}") from e


def percent_decode(value: str) -> str:
    return unquote(value, encoding="utf-8", errors="strict")
