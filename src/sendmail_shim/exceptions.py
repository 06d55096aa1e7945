"""Custom exceptions for sendmail-shim."""


class SendmailShimError(Exception):
    """Base exception for all sendmail-shim errors."""


class MalformedInputError(SendmailShimError):
    """Exception raised when the message on standard input cannot be parsed."""


class InputReadError(MalformedInputError):
    """Exception raised when standard input cannot be read to the end."""


class CompositionError(SendmailShimError):
    """Exception raised when a message cannot be rendered."""


class MissingSenderError(CompositionError):
    """Exception raised when no sender address was resolved."""


class MissingRecipientError(CompositionError):
    """Exception raised when no 'To' recipient was resolved."""


class DeliveryError(SendmailShimError):
    """Exception raised when the SMTP server does not accept the message."""


class SendLogError(SendmailShimError):
    """Exception raised when the send log cannot be appended to."""


class ConfigurationError(SendmailShimError):
    """Exception raised for configuration related errors."""
