"""HMAC-signed bearer tokens.

A token is ``<payload>.<signature>``: the payload is URL-safe base64 JSON
carrying ``sub``, ``role``, ``name``, ``typ`` and ``exp`` (epoch seconds);
the signature is HMAC-SHA256 over the encoded payload. Access and refresh
tokens are signed with different secrets.
"""

import base64
import hashlib
import hmac
import json
import time

from agrigo.errors import Unauthenticated
from agrigo.identity.port import IdentityProvider, Principal

ACCESS = "access"
REFRESH = "refresh"


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def _b64decode(data: str) -> bytes:
    padding = 4 - (len(data) % 4)
    if padding != 4:
        data += "=" * padding
    return base64.urlsafe_b64decode(data)


class SignedTokenProvider(IdentityProvider):
    def __init__(self, secret: str, refresh_secret: str, access_ttl: int, refresh_ttl: int) -> None:
        self._secrets = {ACCESS: secret.encode(), REFRESH: refresh_secret.encode()}
        self._ttls = {ACCESS: access_ttl, REFRESH: refresh_ttl}

    def issue_access_token(self, principal: Principal) -> str:
        return self._issue(principal, ACCESS)

    def issue_refresh_token(self, principal: Principal) -> str:
        return self._issue(principal, REFRESH)

    def resolve(self, credential: str) -> Principal:
        """Resolve an access token. Refresh tokens are not accepted here."""
        claims = self._verify(credential, ACCESS)
        return Principal(user_id=claims["sub"], role=claims["role"], name=claims.get("name"))

    def _issue(self, principal: Principal, kind: str) -> str:
        claims = {
            "sub": principal.user_id,
            "role": principal.role,
            "name": principal.name,
            "typ": kind,
            "exp": int(time.time()) + self._ttls[kind],
        }
        payload = _b64encode(json.dumps(claims, separators=(",", ":")).encode())
        return f"{payload}.{self._sign(payload, kind)}"

    def _sign(self, payload: str, kind: str) -> str:
        digest = hmac.new(self._secrets[kind], payload.encode(), hashlib.sha256).digest()
        return _b64encode(digest)

    def _verify(self, credential: str, kind: str) -> dict:
        payload, _, signature = (credential or "").partition(".")
        if not payload or not signature:
            raise Unauthenticated("Malformed token")

        if not hmac.compare_digest(signature, self._sign(payload, kind)):
            raise Unauthenticated("Invalid token")

        try:
            claims = json.loads(_b64decode(payload))
        except ValueError:
            raise Unauthenticated("Malformed token") from None

        if claims.get("typ") != kind:
            raise Unauthenticated("Invalid token")
        if claims.get("exp", 0) <= time.time():
            raise Unauthenticated("Token expired")
        return claims
