"""Pydantic models for authentication endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class PrincipalResponse(BaseModel):
    """Identity carried by the current session token."""

    subject: str
