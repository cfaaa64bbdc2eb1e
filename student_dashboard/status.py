"""Application lifecycle states and the rule for moving between them.

Any state may move to any other state: the board lets a card be dropped on
any column, so validation is set membership only. Both the HTTP service and
the terminal board import :class:`ApplicationStatus` from here, which keeps
the two sides agreeing on the state set.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Optional, TypeVar

from pydantic import BaseModel

from .errors import InvalidStatus

T = TypeVar("T")


class ApplicationStatus(str, Enum):
    """The five columns of the board, in display order."""

    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    INTERVIEWS = "interviews"
    OFFERS = "offers"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


def coerce_status(value: object) -> Optional[ApplicationStatus]:
    """Return the matching status, or None when ``value`` is not one."""
    if isinstance(value, ApplicationStatus):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ApplicationStatus(value)
    except ValueError:
        return None


def valid_transition(target: object) -> bool:
    """True iff ``target`` names one of the five lifecycle states."""
    return coerce_status(target) is not None


def parse_status(value: object) -> ApplicationStatus:
    """Convert ``value`` at a boundary, raising :class:`InvalidStatus`."""
    status = coerce_status(value)
    if status is None:
        raise InvalidStatus(value)
    return status


def apply_transition(application: T, target: object) -> T:
    """Return a copy of ``application`` with its status replaced.

    Works on pydantic models and dataclasses. Every other field is carried
    over unchanged, and moving to the current status yields an equal value.
    """
    status = parse_status(target)
    if isinstance(application, BaseModel):
        return application.model_copy(update={"status": status})
    if dataclasses.is_dataclass(application):
        return dataclasses.replace(application, status=status)
    raise TypeError(f"Cannot transition {type(application).__name__}")
