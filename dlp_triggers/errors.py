# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Errors raised while handling job triggers."""

from typing import Optional


class TriggerError(Exception):
    """Base class for all job trigger errors."""


class UsageError(TriggerError):
    """The command line is missing or has malformed arguments."""


class ValidationError(TriggerError):
    """A trigger definition could not be built from the given parameters."""


class RemoteError(TriggerError):
    """The DLP service rejected or failed a call."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause
