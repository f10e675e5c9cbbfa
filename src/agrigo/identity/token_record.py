"""Server-side record of the tokens last issued to each user.

Login stores the pair, replacing any earlier one; logout deletes it. A
bearer token is only honoured while its user still has a record.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Text
from protean.utils.globals import current_domain

from agrigo.domain import agrigo
from agrigo.identity.events import TokensIssued
from agrigo.utils.concurrency import serialized_writes

logger = structlog.get_logger(__name__)


@agrigo.aggregate
class TokenRecord:
    user_id: Identifier(identifier=True)
    access_token: Text(required=True)
    refresh_token: Text(required=True)
    issued_at: DateTime(required=True)

    @classmethod
    def issue(cls, user_id, access_token, refresh_token):
        now = datetime.now(UTC)
        record = cls(user_id=user_id, access_token=access_token, refresh_token=refresh_token, issued_at=now)
        record.raise_(TokensIssued(user_id=str(user_id), issued_at=now))
        return record

    def replace(self, access_token, refresh_token):
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.issued_at = datetime.now(UTC)
        self.raise_(TokensIssued(user_id=str(self.user_id), issued_at=self.issued_at))


@agrigo.command(part_of="TokenRecord")
class RecordTokens:
    user_id: Identifier(required=True)
    access_token: Text(required=True)
    refresh_token: Text(required=True)


@agrigo.command(part_of="TokenRecord")
class RevokeTokens:
    user_id: Identifier(required=True)


def _record_of(user_id) -> TokenRecord | None:
    try:
        return current_domain.repository_for(TokenRecord).get(str(user_id))
    except ObjectNotFoundError:
        return None


def has_token_record(user_id) -> bool:
    return _record_of(user_id) is not None


@agrigo.command_handler(part_of=TokenRecord)
class TokenRecordHandler:
    @serialized_writes
    @handle(RecordTokens)
    def record_tokens(self, command):
        record = _record_of(command.user_id)
        if record is None:
            record = TokenRecord.issue(command.user_id, command.access_token, command.refresh_token)
        else:
            record.replace(command.access_token, command.refresh_token)
        current_domain.repository_for(TokenRecord).add(record)

    @serialized_writes
    @handle(RevokeTokens)
    def revoke_tokens(self, command):
        record = _record_of(command.user_id)
        if record is None:
            return
        current_domain.repository_for(TokenRecord)._dao.delete(record)
        logger.info("Tokens revoked", user_id=str(command.user_id))
