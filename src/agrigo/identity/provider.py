"""Identity provider factory.

Provides get_identity_provider() / set_identity_provider() to swap
implementations. The default is a SignedTokenProvider keyed from settings.
"""

from agrigo.config import get_settings
from agrigo.identity.port import IdentityProvider
from agrigo.identity.tokens import SignedTokenProvider

_current_provider: IdentityProvider | None = None


def get_identity_provider() -> IdentityProvider:
    """Return the current identity provider, building the default on first use."""
    global _current_provider
    if _current_provider is None:
        settings = get_settings()
        _current_provider = SignedTokenProvider(
            secret=settings.token_secret,
            refresh_secret=settings.refresh_secret,
            access_ttl=settings.access_token_ttl,
            refresh_ttl=settings.refresh_token_ttl,
        )
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    global _current_provider
    _current_provider = None
