"""Command controller that keeps the board in step with the server.

The controller only ever shows a board the server has confirmed. A command
is validated locally, sent, and committed once the request succeeds; when
the request fails the last confirmed board stays on screen and the error is
kept for the status line.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .. import schemas
from ..board import (
    AddApplication,
    Board,
    BoardCommand,
    DashboardCounters,
    EditApplication,
    MoveApplication,
    RemoveApplication,
    board_applications,
    board_from_groups,
    derive_counters,
    empty_board,
    find_application,
    reduce_board,
)
from ..errors import DashboardError
from ..status import parse_status
from .client import DashboardClient, error_detail

logger = logging.getLogger(__name__)


class BoardController:
    def __init__(self, client: DashboardClient):
        self.client = client
        self.board: Board = empty_board()
        self.counters = DashboardCounters()
        self.loading = False
        self.error: Optional[str] = None

    def _commit(self, board: Board) -> None:
        self.board = board
        self.counters = derive_counters(board_applications(board))
        self.error = None

    def _fail(self, message: str) -> bool:
        logger.warning(message)
        self.error = message
        return False

    async def load(self) -> bool:
        """Replace the board with the server's listing."""
        self.loading = True
        try:
            groups = await self.client.fetch_board()
        except httpx.HTTPError as exc:
            return self._fail(f"Failed to load applications: {error_detail(exc)}")
        finally:
            self.loading = False
        self._commit(board_from_groups(groups))
        return True

    async def dispatch(self, command: BoardCommand) -> bool:
        """Send ``command`` to the server and commit it once confirmed.

        Adds go through :meth:`add`, since the card needs the id and dates
        the server assigns.
        """
        if isinstance(command, AddApplication):
            fields = command.application.model_dump(include={"company", "position", "deadline", "notes"})
            return await self.add(schemas.ApplicationCreate(**fields)) is not None

        try:
            proposed = reduce_board(self.board, command)
        except DashboardError as exc:
            return self._fail(str(exc))

        if isinstance(command, MoveApplication):
            current = find_application(self.board, command.application_id)
            if current is not None and current.status is parse_status(command.target):
                return True

        self.loading = True
        try:
            await self._send(command)
        except httpx.HTTPError as exc:
            return self._fail(f"Failed to apply {type(command).__name__}: {error_detail(exc)}")
        finally:
            self.loading = False
        self._commit(proposed)
        return True

    async def _send(self, command: BoardCommand) -> None:
        if isinstance(command, MoveApplication):
            await self.client.update_status(command.application_id, parse_status(command.target))
        elif isinstance(command, EditApplication):
            await self.client.update_application(command.application_id, command.fields)
        elif isinstance(command, RemoveApplication):
            await self.client.delete_application(command.application_id)

    async def move(self, application_id: int, target: object) -> bool:
        return await self.dispatch(MoveApplication(application_id, target))

    async def edit(self, application_id: int, fields: schemas.ApplicationUpdate) -> bool:
        return await self.dispatch(EditApplication(application_id, fields))

    async def remove(self, application_id: int) -> bool:
        return await self.dispatch(RemoveApplication(application_id))

    async def add(self, payload: schemas.ApplicationCreate) -> Optional[int]:
        """Create an application, then reload so the card carries server values."""
        self.loading = True
        try:
            application_id = await self.client.create_application(payload)
        except httpx.HTTPError as exc:
            self._fail(f"Failed to add application: {error_detail(exc)}")
            return None
        finally:
            self.loading = False
        await self.load()
        return application_id
