"""Append-only JSON-lines log of submitted messages.

Each record holds the full message, including Bcc recipients and the body, so
the log file should be treated as sensitive.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from sendmail_shim.exceptions import SendLogError
from sendmail_shim.models import Message

logger = structlog.get_logger()


class SendLogWriter:
    """Writer appending one record per message to a log file."""

    def __init__(self, path: Path | None) -> None:
        """Create a writer.

        Args:
            path: Log file location. ``None`` disables logging.
        """

        self._path = path

    @property
    def enabled(self) -> bool:
        return self._path is not None

    def append(self, message: Message) -> None:
        """Append ``message`` as a single newline-terminated JSON record.

        Raises:
            SendLogError: The file could not be created or written.
        """

        if self._path is None:
            logger.debug("send_log_disabled")
            return

        record = message.to_log_json() + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as fh:
                fh.write(record)
        except OSError as exc:
            raise SendLogError(f"Cannot append to send log {self._path}: {exc}") from exc

        logger.info("send_log_appended", path=str(self._path), record_length=len(record))
