"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from agrigo.domain import agrigo


@agrigo.event(part_of="User")
class UserRegistered:
    """A farmer or consumer opened an account."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    name: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@agrigo.event(part_of="TokenRecord")
class TokensIssued:
    """A user logged in and received a fresh access/refresh pair."""

    __version__ = 1

    user_id: Identifier(required=True)
    issued_at: DateTime(required=True)
