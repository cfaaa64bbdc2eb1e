"""Error taxonomy shared by the service and the board."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(DashboardError):
    """Input rejected before it reaches storage."""


class InvalidStatus(ValidationError):
    """A status outside the five lifecycle states."""

    def __init__(self, value: object):
        self.value = value
        super().__init__("Invalid status")


class StorageFault(DashboardError):
    """A persistence call failed.

    The message is safe to return to callers; the underlying exception is
    chained and only ever written to the log.
    """
