"""Persistent record of submitted messages."""

from .writer import SendLogWriter

__all__ = ["SendLogWriter"]
