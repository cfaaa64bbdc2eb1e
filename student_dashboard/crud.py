"""Database CRUD helpers.

Updates and deletes against an id that does not exist touch nothing and
still return normally; callers treat that as a no-op rather than an error.
Any SQLAlchemy failure is logged and re-raised as :class:`StorageFault`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from . import models, schemas
from .errors import StorageFault
from .status import ApplicationStatus, parse_status

logger = logging.getLogger(__name__)


@contextmanager
def _storage(session: Session, message: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception(message)
        raise StorageFault(message) from exc


def list_applications(session: Session) -> list[models.Application]:
    """Every application, newest first."""
    statement = select(models.Application).order_by(
        models.Application.created_at.desc(), models.Application.id.desc()
    )
    with _storage(session, "Failed to fetch applications"):
        return list(session.exec(statement))


def insert_application(session: Session, payload: schemas.ApplicationCreate) -> int:
    now = models.utcnow()
    application = models.Application(
        **payload.model_dump(),
        status=ApplicationStatus.APPLIED.value,
        applied_date=now,
        created_at=now,
    )
    with _storage(session, "Failed to create application"):
        session.add(application)
        session.commit()
        session.refresh(application)
    logger.info("Created application %s (%s, %s)", application.id, application.company, application.position)
    return application.id


def update_status(session: Session, application_id: int, status: object) -> None:
    """Move an application to ``status``; raises InvalidStatus before any write."""
    target = parse_status(status)
    with _storage(session, "Failed to update application status"):
        application = session.get(models.Application, application_id)
        if not application:
            logger.info("Status update for missing application %s ignored", application_id)
            return
        application.status = target.value
        session.add(application)
        session.commit()
    logger.info("Application %s moved to %s", application_id, target.value)


def update_fields(session: Session, application_id: int, payload: schemas.ApplicationUpdate) -> None:
    with _storage(session, "Failed to update application"):
        application = session.get(models.Application, application_id)
        if not application:
            return
        for field, value in payload.model_dump().items():
            setattr(application, field, value)
        session.add(application)
        session.commit()


def delete_application(session: Session, application_id: int) -> None:
    """Delete an application; reminders that reference it are left alone."""
    with _storage(session, "Failed to delete application"):
        application = session.get(models.Application, application_id)
        if not application:
            return
        session.delete(application)
        session.commit()
    logger.info("Deleted application %s", application_id)


def list_reminders(session: Session) -> list[models.Reminder]:
    statement = select(models.Reminder).order_by(models.Reminder.reminder_date.asc(), models.Reminder.id.asc())
    with _storage(session, "Failed to fetch reminders"):
        return list(session.exec(statement))


def insert_reminder(session: Session, payload: schemas.ReminderCreate) -> int:
    reminder = models.Reminder(**payload.model_dump())
    with _storage(session, "Failed to create reminder"):
        session.add(reminder)
        session.commit()
        session.refresh(reminder)
    return reminder.id


def update_reminder_completion(session: Session, reminder_id: int, is_completed: bool) -> None:
    with _storage(session, "Failed to update reminder"):
        reminder = session.get(models.Reminder, reminder_id)
        if not reminder:
            return
        reminder.is_completed = is_completed
        session.add(reminder)
        session.commit()


def delete_reminder(session: Session, reminder_id: int) -> None:
    with _storage(session, "Failed to delete reminder"):
        reminder = session.get(models.Reminder, reminder_id)
        if not reminder:
            return
        session.delete(reminder)
        session.commit()
