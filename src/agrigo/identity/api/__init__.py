"""Identity API package."""

from agrigo.identity.api.routes import router

__all__ = ["router"]
