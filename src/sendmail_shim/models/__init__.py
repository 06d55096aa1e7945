"""Data models for sendmail-shim.

This module contains Pydantic models for data validation and serialization.
"""

from sendmail_shim.models.address import EmailAddress
from sendmail_shim.models.message import Message

__all__ = ["EmailAddress", "Message"]
