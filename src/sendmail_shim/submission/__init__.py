"""Submission of composed messages to the send log and the SMTP server."""

from .submitter import MailSubmitter, SubmissionResult

__all__ = ["MailSubmitter", "SubmissionResult"]
