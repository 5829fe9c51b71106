from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    # OAuth credentials owned by a Client for its lifetime.
    #
    # The API is used in two-legged mode: token / token_secret stay empty
    # unless a caller has a user token to delegate with.

    consumer_key: str
    consumer_secret: str
    token: str = ""
    token_secret: str = ""

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def __repr__(self) -> str:
        # Never leak secrets into logs or tracebacks.
        return f"Credentials(consumer_key={self.consumer_key!r}, has_token={self.has_token})"
