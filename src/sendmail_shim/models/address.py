"""Structured mail address model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EmailAddress(BaseModel):
    """A mailbox with an optional display name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Display name, empty when absent")
    address: str = Field(default="", description="Addr-spec, e.g. bob@example.com")
