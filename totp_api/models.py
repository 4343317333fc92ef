"""Request and response envelopes for the HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TotpRequest(BaseModel):
    """JSON body accepted by ``POST /api/totp``."""

    model_config = ConfigDict(extra="ignore")

    secret: str = Field(default="")

    @field_validator("secret", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        # A JSON null secret counts as not supplied
        return "" if value is None else value


class TotpResponse(BaseModel):
    """Success or failure envelope.

    Rendered with unset fields dropped, so a success carries ``code`` and
    ``remaining`` and a failure carries ``error``.
    """

    success: bool
    code: str | None = None
    remaining: int | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
