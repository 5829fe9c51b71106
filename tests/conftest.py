import pytest

from simplegeo_client.client import Client
from simplegeo_client.models.credentials import Credentials
from simplegeo_client.utils.transport import TransportResponse

FIXED_NONCE = "abcdefghij0123456789abcdefghij0"
FIXED_TIMESTAMP = 1310000000


class FakeTransport:
    # Records every SignedRequest and answers with a canned body.

    def __init__(self, body=b'{"ok": true}', status_code=200, error=None):
        self.body = body
        self.status_code = status_code
        self.error = error
        self.sent = []

    def send(self, signed):
        self.sent.append(signed)
        if self.error is not None:
            raise self.error
        return TransportResponse(status_code=self.status_code, body=self.body)

    @property
    def last(self):
        return self.sent[-1]


@pytest.fixture
def credentials():
    return Credentials(consumer_key="ck", consumer_secret="cs")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(credentials, transport):
    return Client(credentials, transport=transport)
