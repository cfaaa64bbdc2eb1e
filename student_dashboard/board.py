"""Board projections: counters, status grouping, and the board reducer.

Everything here is a pure function of its arguments. The service uses
:func:`group_by_status` and :func:`derive_counters` to answer reads, and the
terminal board uses :func:`reduce_board` to compute the next board from a
confirmed one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, TypeVar, Union

from . import schemas
from .status import ApplicationStatus, apply_transition, coerce_status, parse_status

logger = logging.getLogger(__name__)

T = TypeVar("T")

Board = dict[ApplicationStatus, tuple[schemas.ApplicationRead, ...]]


@dataclass(frozen=True)
class DashboardCounters:
    total: int = 0
    interview_count: int = 0
    offer_count: int = 0
    deadline_count: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "interview_count": self.interview_count,
            "offer_count": self.offer_count,
            "deadline_count": self.deadline_count,
        }


def derive_counters(applications: Iterable, today: Optional[date] = None) -> DashboardCounters:
    """Count applications, interviews, offers and upcoming deadlines.

    ``total`` includes rows whose status is not recognized. A deadline counts
    when it is set and falls on or after ``today``.
    """
    today = today or date.today()
    total = interviews = offers = deadlines = 0
    for application in applications:
        total += 1
        status = coerce_status(application.status)
        if status is ApplicationStatus.INTERVIEWS:
            interviews += 1
        elif status is ApplicationStatus.OFFERS:
            offers += 1
        if application.deadline is not None and application.deadline >= today:
            deadlines += 1
    return DashboardCounters(
        total=total,
        interview_count=interviews,
        offer_count=offers,
        deadline_count=deadlines,
    )


def group_by_status(applications: Iterable[T]) -> dict[ApplicationStatus, list[T]]:
    """Stable partition into the five status groups.

    Every group is present, in column order. Items whose status is not one
    of the five are dropped.
    """
    groups: dict[ApplicationStatus, list[T]] = {status: [] for status in ApplicationStatus}
    for application in applications:
        status = coerce_status(application.status)
        if status is None:
            logger.debug("Dropping application %s with unknown status %r", getattr(application, "id", None), application.status)
            continue
        groups[status].append(application)
    return groups


def empty_board() -> Board:
    return {status: () for status in ApplicationStatus}


def board_from_groups(groups: schemas.ApplicationBoard) -> Board:
    return {status: tuple(getattr(groups, status.value)) for status in ApplicationStatus}


def board_applications(board: Board) -> list[schemas.ApplicationRead]:
    """Flatten a board back into one list, column by column."""
    return [application for status in ApplicationStatus for application in board.get(status, ())]


def find_application(board: Board, application_id: int) -> Optional[schemas.ApplicationRead]:
    for application in board_applications(board):
        if application.id == application_id:
            return application
    return None


@dataclass(frozen=True)
class MoveApplication:
    application_id: int
    target: Union[ApplicationStatus, str]


@dataclass(frozen=True)
class AddApplication:
    application: schemas.ApplicationRead


@dataclass(frozen=True)
class EditApplication:
    application_id: int
    fields: schemas.ApplicationUpdate


@dataclass(frozen=True)
class RemoveApplication:
    application_id: int


BoardCommand = Union[MoveApplication, AddApplication, EditApplication, RemoveApplication]


def reduce_board(board: Board, command: BoardCommand) -> Board:
    """Return the board that results from applying ``command``.

    The input board is never modified. Commands naming an id that is not on
    the board return an equal board.
    """
    if isinstance(command, MoveApplication):
        return _move(board, command.application_id, parse_status(command.target))
    if isinstance(command, AddApplication):
        status = parse_status(command.application.status)
        updated = dict(board)
        updated[status] = tuple(board.get(status, ())) + (command.application,)
        return updated
    if isinstance(command, EditApplication):
        changes = command.fields.model_dump()
        return {
            status: tuple(
                application.model_copy(update=changes) if application.id == command.application_id else application
                for application in cards
            )
            for status, cards in board.items()
        }
    if isinstance(command, RemoveApplication):
        return {
            status: tuple(application for application in cards if application.id != command.application_id)
            for status, cards in board.items()
        }
    raise TypeError(f"Unknown board command: {command!r}")


def _move(board: Board, application_id: int, target: ApplicationStatus) -> Board:
    source = None
    card = None
    for status, cards in board.items():
        for application in cards:
            if application.id == application_id:
                source, card = status, application
                break
        if card is not None:
            break
    if card is None or source is target:
        return dict(board)

    updated = dict(board)
    updated[source] = tuple(application for application in board[source] if application.id != application_id)
    updated[target] = tuple(board.get(target, ())) + (apply_transition(card, target),)
    return updated
