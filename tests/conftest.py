import json

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from gcal_client.google_auth_helpers import TOKEN_URI, ServiceAccountCredential
from gcal_client.transport import TransportResponse

CLIENT_EMAIL = "calendar-bot@example-project.iam.gserviceaccount.com"


class FakeTransport:
    """Records every request and replays canned responses, no network."""

    def __init__(self, responses=None, token_response=None):
        self.requests = []
        self.responses = list(responses or [])
        self.token_response = token_response or TransportResponse(
            200, json.dumps({"access_token": "ya29.test-token", "expires_in": 3599, "token_type": "Bearer"})
        )

    def send(self, method, url, body=None, headers=None):
        self.requests.append({"method": method, "url": url, "body": body, "headers": dict(headers or {})})
        if url == TOKEN_URI:
            return self.token_response
        if not self.responses:
            raise AssertionError(f"unexpected request {method} {url}")
        return self.responses.pop(0)

    def api_requests(self):
        return [r for r in self.requests if r["url"] != TOKEN_URI]

    def token_requests(self):
        return [r for r in self.requests if r["url"] == TOKEN_URI]


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key):
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def public_key_pem(rsa_private_key):
    return rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


@pytest.fixture
def credential_info(private_key_pem):
    return {
        "type": "service_account",
        "project_id": "example-project",
        "private_key_id": "abc123",
        "private_key": private_key_pem,
        "client_email": CLIENT_EMAIL,
        "token_uri": TOKEN_URI,
    }


@pytest.fixture
def credential(credential_info):
    return ServiceAccountCredential.from_info(credential_info)


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def transport_factory():
    return FakeTransport
