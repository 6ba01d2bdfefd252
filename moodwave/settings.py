#!/usr/bin/env python
"""
Catalog settings schema.

Merges defaults from config.Config with optional runtime overrides and
validates the values the catalog client depends on.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from config import Config


class CatalogSettings(BaseModel):
    """Credentials and request options for the catalog client."""

    model_config = ConfigDict(extra="ignore")

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    market: str = "IN"
    request_timeout: float = 10.0
    token_expiry_margin: int = 60

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @field_validator("client_id", "client_secret", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("market", mode="before")
    @classmethod
    def _normalize_market(cls, value: object) -> str:
        text = str(value or "").strip().upper()
        if len(text) != 2 or not text.isalpha():
            return "IN"
        return text

    @field_validator("request_timeout", mode="before")
    @classmethod
    def _coerce_timeout(cls, value: object) -> float:
        try:
            timeout = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 10.0
        return max(1.0, min(timeout, 60.0))

    @field_validator("token_expiry_margin", mode="before")
    @classmethod
    def _coerce_margin(cls, value: object) -> int:
        try:
            margin = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 60
        return max(0, min(margin, 600))


def load_catalog_settings(overrides: Optional[Dict[str, Any]] = None) -> CatalogSettings:
    """Load catalog settings merging config defaults with optional overrides."""
    data: Dict[str, Any] = {
        "client_id": Config.SPOTIPY_CLIENT_ID,
        "client_secret": Config.SPOTIPY_CLIENT_SECRET,
        "market": Config.CATALOG_MARKET,
        "request_timeout": Config.CATALOG_REQUEST_TIMEOUT,
        "token_expiry_margin": Config.CATALOG_TOKEN_EXPIRY_MARGIN_SECONDS,
    }
    if overrides:
        data.update(overrides)
    return CatalogSettings.model_validate(data)


__all__ = ["CatalogSettings", "load_catalog_settings"]
