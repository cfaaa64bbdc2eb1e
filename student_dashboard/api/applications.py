"""Application endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from .. import crud, schemas
from ..board import group_by_status
from ..database import get_session

router = APIRouter()


@router.get("", response_model=schemas.ApplicationBoard)
def list_applications(session: Session = Depends(get_session)) -> schemas.ApplicationBoard:
    groups = group_by_status(crud.list_applications(session))
    return schemas.ApplicationBoard(
        **{
            status.value: [schemas.ApplicationRead.model_validate(row) for row in rows]
            for status, rows in groups.items()
        }
    )


@router.post("", response_model=schemas.CreatedResponse, status_code=201)
def create_application(
    payload: schemas.ApplicationCreate,
    session: Session = Depends(get_session),
) -> schemas.CreatedResponse:
    application_id = crud.insert_application(session, payload)
    return schemas.CreatedResponse(id=application_id, message="Application created successfully")


@router.put("/{application_id}/status", response_model=schemas.MessageResponse)
def update_application_status(
    application_id: int,
    payload: schemas.StatusUpdate,
    session: Session = Depends(get_session),
) -> schemas.MessageResponse:
    crud.update_status(session, application_id, payload.status)
    return schemas.MessageResponse(message="Application status updated successfully")


@router.put("/{application_id}", response_model=schemas.MessageResponse)
def update_application(
    application_id: int,
    payload: schemas.ApplicationUpdate,
    session: Session = Depends(get_session),
) -> schemas.MessageResponse:
    crud.update_fields(session, application_id, payload)
    return schemas.MessageResponse(message="Application updated successfully")


@router.delete("/{application_id}", response_model=schemas.MessageResponse)
def delete_application(application_id: int, session: Session = Depends(get_session)) -> schemas.MessageResponse:
    crud.delete_application(session, application_id)
    return schemas.MessageResponse(message="Application deleted successfully")
