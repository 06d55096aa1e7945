"""Message model shared by the argument and stdin populating passes.

Address fields use ``None`` as the "unset" marker. Each populating pass writes
a field only while it is still ``None``, so whichever pass runs first owns it.
The command-line pass always runs before standard input is read.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sendmail_shim.models.address import EmailAddress


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """A single outgoing message, as assembled for one invocation."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime = Field(default_factory=_utcnow, description="Creation instant")

    from_addr: EmailAddress | None = Field(default=None, alias="from", description="Sender")
    reply_to: list[EmailAddress] | None = Field(
        default=None, alias="replyTo", description="Reply-To addresses"
    )
    to: list[EmailAddress] | None = Field(default=None, description="Primary recipients")
    cc: list[EmailAddress] | None = Field(default=None, description="Carbon-copy recipients")
    bcc: list[EmailAddress] | None = Field(
        default=None, description="Blind-copy recipients, never rendered"
    )
    subject: str = Field(default="", description="Subject header value")

    extra_headers: str = Field(
        default="",
        alias="extraHeaders",
        description="Unrecognized header lines, verbatim and CRLF-terminated",
    )
    body: str = Field(default="", description="Everything after the header block")

    def to_log_json(self) -> str:
        """Serialize using the wire names of the send log.

        Undecodable input bytes (surrogate escapes) are written as U+FFFD so
        the record is always valid JSON. The message itself is not changed.
        """

        data = _log_safe(self.model_dump(by_alias=True))
        return type(self).model_validate(data).model_dump_json(by_alias=True)


def _log_safe(value: Any) -> Any:
    if isinstance(value, str):
        return value.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")
    if isinstance(value, dict):
        return {k: _log_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_log_safe(v) for v in value]
    return value
