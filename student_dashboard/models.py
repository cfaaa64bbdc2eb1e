"""Database models."""

from datetime import date, datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from .status import ApplicationStatus


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Application(SQLModel, table=True):
    """A tracked job application.

    ``status`` is stored as plain text. The service only ever writes one of
    the :class:`ApplicationStatus` values, but rows written by other tools
    may hold anything, so readers must not assume membership.
    """

    __tablename__ = "applications"

    id: Optional[int] = Field(default=None, primary_key=True)
    company: str
    position: str
    deadline: Optional[date] = Field(default=None, index=True)
    notes: Optional[str] = None
    status: str = Field(default=ApplicationStatus.APPLIED.value, index=True)
    applied_date: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow, index=True)


class Reminder(SQLModel, table=True):
    """A dated note that points at an application by id.

    There is no foreign key: deleting the application leaves the reference
    dangling.
    """

    __tablename__ = "reminders"

    id: Optional[int] = Field(default=None, primary_key=True)
    application_id: Optional[int] = Field(default=None, index=True)
    reminder_date: date = Field(index=True)
    title: str
    description: Optional[str] = None
    is_completed: bool = False
