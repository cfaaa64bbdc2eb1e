"""Dashboard summary endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from .. import crud, schemas
from ..board import derive_counters
from ..database import get_session

router = APIRouter()


@router.get("", response_model=schemas.DashboardRead)
def dashboard_summary(session: Session = Depends(get_session)) -> schemas.DashboardRead:
    """Counters are recomputed from the full collection on every read."""
    counters = derive_counters(crud.list_applications(session))
    return schemas.DashboardRead(**counters.as_dict())
