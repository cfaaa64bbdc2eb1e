"""Reminder endpoints.

Reminders are not checked against the applications table: a reminder may
point at an application id that never existed or has since been deleted.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from .. import crud, schemas
from ..database import get_session

router = APIRouter()


@router.get("", response_model=list[schemas.ReminderRead])
def list_reminders(session: Session = Depends(get_session)) -> list[schemas.ReminderRead]:
    return [schemas.ReminderRead.model_validate(row) for row in crud.list_reminders(session)]


@router.post("", response_model=schemas.CreatedResponse, status_code=201)
def create_reminder(
    payload: schemas.ReminderCreate,
    session: Session = Depends(get_session),
) -> schemas.CreatedResponse:
    reminder_id = crud.insert_reminder(session, payload)
    return schemas.CreatedResponse(id=reminder_id, message="Reminder created successfully")


@router.put("/{reminder_id}", response_model=schemas.MessageResponse)
def update_reminder(
    reminder_id: int,
    payload: schemas.ReminderUpdate,
    session: Session = Depends(get_session),
) -> schemas.MessageResponse:
    crud.update_reminder_completion(session, reminder_id, payload.is_completed)
    return schemas.MessageResponse(message="Reminder updated successfully")


@router.delete("/{reminder_id}", response_model=schemas.MessageResponse)
def delete_reminder(reminder_id: int, session: Session = Depends(get_session)) -> schemas.MessageResponse:
    crud.delete_reminder(session, reminder_id)
    return schemas.MessageResponse(message="Reminder deleted successfully")
