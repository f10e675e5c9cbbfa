"""Identity provider port.

Resolves the bearer credential of an incoming request to the caller's
identity. Adapters decide how credentials are issued and checked.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """The resolved caller: who they are and which role they act in."""

    user_id: str
    role: str
    name: str | None = None

    @property
    def is_farmer(self) -> bool:
        return self.role == "farmer"


class IdentityProvider(ABC):
    """Abstract identity provider interface."""

    @abstractmethod
    def issue_access_token(self, principal: Principal) -> str:
        """Issue the short-lived credential presented on every request."""
        ...

    @abstractmethod
    def issue_refresh_token(self, principal: Principal) -> str:
        ...

    @abstractmethod
    def resolve(self, credential: str) -> Principal:
        """Return the principal behind ``credential``.

        Raises ``agrigo.errors.Unauthenticated`` when the credential is
        malformed, forged or expired.
        """
        ...
