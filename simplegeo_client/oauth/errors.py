"""
errors.py
---------

Typed failures raised while signing a request.

Signing is a pure computation: it either succeeds or fails the same way
every time for the same input. Transport failures are not represented here;
they surface as requests exceptions.
"""


class SigningError(ValueError):
    """Base class for every signing failure."""


class InvalidCredentials(SigningError):
    """Consumer key or consumer secret is missing or empty."""


class UnsupportedMethod(SigningError):
    """HTTP method outside GET / POST / PUT / DELETE."""


class EncodingError(SigningError):
    """A parameter name or value cannot be represented as a string for signing."""
