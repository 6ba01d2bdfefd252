"""Catalog domain services (credential, API client)."""

from .client import CatalogClient
from .credentials import CatalogCredentials

__all__ = ["CatalogClient", "CatalogCredentials"]
