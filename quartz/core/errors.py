"""
Errors — Failure taxonomy of the routing engine

Parse and validation problems are collected as string lists and raised
once at the dispatcher boundary. Execution problems are caught by the
executor and surfaced again by dispatch().
"""

from typing import List, Optional


class QuartzError(Exception):
    """Base class for all routing engine errors."""


class ParseError(QuartzError):
    """Unknown verb/object, missing required parameter, malformed value."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class CommandValidationError(QuartzError):
    """Invalid verb-object combination or rejected parsed command."""


class PreconditionError(QuartzError):
    """Missing configuration section or wrong working-directory context."""

    def __init__(self, message: str, remediation: Optional[str] = None):
        if remediation:
            message = f"{message} Run: {remediation}"
        super().__init__(message)
        self.remediation = remediation


class ExecutionError(QuartzError):
    """A handler (or middleware) failed during real work."""


class RegistryConflictError(QuartzError):
    """A (verb, object) pair was registered twice."""
