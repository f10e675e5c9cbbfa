"""Credential check and token issuance for returning users."""

from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from agrigo.errors import IncorrectPassword, UnknownAccount
from agrigo.identity.passwords import verify_password
from agrigo.identity.port import Principal
from agrigo.identity.provider import get_identity_provider
from agrigo.identity.token_record import RecordTokens, RevokeTokens
from agrigo.identity.user import User

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Session:
    user: User
    access_token: str
    refresh_token: str


def authenticate(email: str, password: str) -> Session:
    """Check ``password`` against the account for ``email`` and issue tokens.

    Raises UnknownAccount (400) for an unregistered email and
    IncorrectPassword (401) for a wrong password. The issued pair is kept
    as the user's token record.
    """
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None:
        raise UnknownAccount()
    if not verify_password(user.password_hash, password):
        logger.warning("Login refused", user_id=str(user.id))
        raise IncorrectPassword()

    provider = get_identity_provider()
    principal = Principal(user_id=str(user.id), role=user.role, name=user.name)

    session = Session(
        user=user,
        access_token=provider.issue_access_token(principal),
        refresh_token=provider.issue_refresh_token(principal),
    )
    current_domain.process(
        RecordTokens(
            user_id=principal.user_id,
            access_token=session.access_token,
            refresh_token=session.refresh_token,
        ),
        asynchronous=False,
    )

    logger.info("User logged in", user_id=principal.user_id)
    return session


def log_out(principal: Principal) -> None:
    """Drop the caller's token record; its tokens stop being honoured."""
    current_domain.process(RevokeTokens(user_id=principal.user_id), asynchronous=False)
    logger.info("User logged out", user_id=principal.user_id)
