"""Pydantic schemas for API IO."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .status import ApplicationStatus


class ApplicationBase(BaseModel):
    company: str = Field(min_length=1)
    position: str = Field(min_length=1)
    deadline: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("deadline", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        # Form inputs submit "" for an untouched optional field.
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ApplicationCreate(ApplicationBase):
    pass


class ApplicationUpdate(ApplicationBase):
    """Full replacement of the editable fields; status is not editable here."""


class ApplicationRead(ApplicationBase):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    applied_date: date
    status: ApplicationStatus

    @field_validator("applied_date", mode="before")
    @classmethod
    def strip_time(cls, value: object) -> object:
        # Timestamps are written in UTC; some backends hand them back naive.
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return value.astimezone().date()
        return value


class StatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplicationBoard(BaseModel):
    """Applications grouped by status, one key per column."""

    applied: list[ApplicationRead] = Field(default_factory=list)
    shortlisted: list[ApplicationRead] = Field(default_factory=list)
    interviews: list[ApplicationRead] = Field(default_factory=list)
    offers: list[ApplicationRead] = Field(default_factory=list)
    rejected: list[ApplicationRead] = Field(default_factory=list)


class DashboardRead(BaseModel):
    total: int
    interview_count: int
    offer_count: int
    deadline_count: int


class ReminderCreate(BaseModel):
    application_id: Optional[int] = None
    reminder_date: date
    title: str = Field(min_length=1)
    description: Optional[str] = None


class ReminderUpdate(BaseModel):
    is_completed: bool


class ReminderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    application_id: Optional[int]
    reminder_date: date
    title: str
    description: Optional[str]
    is_completed: bool


class CreatedResponse(BaseModel):
    id: int
    message: str


class MessageResponse(BaseModel):
    message: str
