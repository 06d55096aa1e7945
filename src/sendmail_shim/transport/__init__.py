"""Delivery of composed messages to a remote SMTP server."""

from .envelope import Envelope, build_envelope
from .smtp import SmtpTransport

__all__ = ["Envelope", "SmtpTransport", "build_envelope"]
