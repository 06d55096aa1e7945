"""sendmail-shim - a sendmail-compatible mail submission command.

This package reads sendmail-style arguments and a message on standard input,
composes a well-formed message and submits it to a remote SMTP server.
"""

__version__ = "0.1.0"

from sendmail_shim.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
