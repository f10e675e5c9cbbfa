"""FastAPI dependencies resolving and checking the caller."""

from fastapi import Depends, Request

from agrigo.errors import Unauthenticated, Unauthorized
from agrigo.identity.port import Principal
from agrigo.identity.provider import get_identity_provider
from agrigo.identity.token_record import has_token_record


def _bearer_credential(request: Request) -> str:
    header = request.headers.get("Authorization")
    if not header:
        raise Unauthenticated("Authentication required")

    scheme, _, credential = header.partition(" ")
    # A bare token without a scheme is accepted too
    if not credential:
        return scheme
    if scheme.lower() != "bearer":
        raise Unauthenticated("Unsupported authorization scheme")
    return credential.strip()


def current_principal(request: Request) -> Principal:
    principal = get_identity_provider().resolve(_bearer_credential(request))
    if not has_token_record(principal.user_id):
        raise Unauthenticated("Session ended, please log in again")
    return principal


def require_farmer(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_farmer:
        raise Unauthorized("Access denied. Farmer role required.")
    return principal
