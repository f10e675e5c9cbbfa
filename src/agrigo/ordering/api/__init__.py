"""Ordering API package."""

from agrigo.ordering.api.routes import router

__all__ = ["router"]
