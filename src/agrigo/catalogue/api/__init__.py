"""Catalogue API package."""

from agrigo.catalogue.api.routes import router

__all__ = ["router"]
