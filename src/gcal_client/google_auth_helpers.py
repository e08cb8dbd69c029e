# src/gcal_client/google_auth_helpers.py
import calendar
import datetime
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from google.auth import crypt, jwt

from gcal_client.errors import AuthError

logger = logging.getLogger(__name__)

SCOPE = "https://www.googleapis.com/auth/calendar"
TOKEN_URI = "https://oauth2.googleapis.com/token"
GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME = datetime.timedelta(hours=1)

_REQUIRED_FIELDS = ("client_email", "private_key")


@dataclass(frozen=True)
class ServiceAccountCredential:
    """The parts of a service-account key file needed to sign token requests."""
    client_email: str
    private_key: str
    private_key_id: Optional[str] = None

    def __repr__(self):
        return f"ServiceAccountCredential(client_email={self.client_email!r})"

    @classmethod
    def from_info(cls, info: Optional[Mapping[str, Any]]) -> "ServiceAccountCredential":
        if info is None:
            raise AuthError("No credentials provided")
        if not isinstance(info, Mapping):
            raise AuthError("Service account credentials must be a JSON object")

        for field in _REQUIRED_FIELDS:
            value = info.get(field)
            if not isinstance(value, str) or not value.strip():
                raise AuthError(f"Service account credentials are missing '{field}'")

        key_id = info.get("private_key_id")
        return cls(
            client_email=info["client_email"],
            private_key=info["private_key"],
            private_key_id=key_id if isinstance(key_id, str) and key_id else None,
        )

    @classmethod
    def from_json(cls, text: str) -> "ServiceAccountCredential":
        try:
            info = json.loads(text)
        except (TypeError, ValueError) as e:
            raise AuthError(f"Service account credentials are not valid JSON: {e}") from e
        return cls.from_info(info)

    @classmethod
    def from_file(cls, path) -> "ServiceAccountCredential":
        try:
            with open(os.fspath(path), "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise AuthError(f"Could not read service account file {path}: {e}") from e
        return cls.from_json(text)


def _to_epoch(value: datetime.datetime) -> int:
    # naive values are UTC; utctimetuple() normalizes aware ones
    return calendar.timegm(value.utctimetuple())


def build_claims(credential: ServiceAccountCredential, now: datetime.datetime) -> dict:
    issued_at = _to_epoch(now)
    return {
        "iss": credential.client_email,
        "scope": SCOPE,
        "aud": TOKEN_URI,
        "iat": issued_at,
        "exp": issued_at + int(ASSERTION_LIFETIME.total_seconds()),
    }


def build_assertion(credential, now: Optional[datetime.datetime] = None) -> str:
    """
    Return an RS256-signed JWT asserting the service account's identity.

    `credential` is a ServiceAccountCredential or the parsed key file mapping.
    `now` is the issue time; it defaults to the current UTC time.
    Raises AuthError if the credential is missing, malformed, or its private key cannot be used.
    """
    if not isinstance(credential, ServiceAccountCredential):
        credential = ServiceAccountCredential.from_info(credential)
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)

    claims = build_claims(credential, now)

    try:
        signer = crypt.RSASigner.from_string(credential.private_key, key_id=credential.private_key_id)
    except Exception as e:
        raise AuthError(f"Could not load private key for {credential.client_email}: {e}") from e

    try:
        token = jwt.encode(signer, claims)
    except Exception as e:
        raise AuthError(f"Could not sign assertion for {credential.client_email}: {e}") from e

    return token.decode("ascii") if isinstance(token, bytes) else token


def fetch_access_token(credential: ServiceAccountCredential, transport, token_uri: str = TOKEN_URI) -> str:
    """
    Exchange a freshly signed assertion for a bearer access token.

    `transport` is any object with the Transport.send() signature. Nothing is cached:
    every call signs a new assertion and performs one round-trip.
    """
    assertion = build_assertion(credential)
    body = urlencode({"grant_type": GRANT_TYPE, "assertion": assertion}).encode("ascii")

    logger.debug("Requesting access token for %s from %s", credential.client_email, token_uri)
    resp = transport.send(
        "POST",
        token_uri,
        body=body,
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    if not 200 <= resp.status < 300:
        raise AuthError(f"Token endpoint returned status {resp.status}: {resp.text}")

    try:
        payload = json.loads(resp.text)
    except ValueError as e:
        raise AuthError("Token endpoint returned a non-JSON body") from e

    access_token = payload.get("access_token") if isinstance(payload, dict) else None
    if not isinstance(access_token, str) or not access_token:
        raise AuthError("Failed to get access token")
    return access_token
