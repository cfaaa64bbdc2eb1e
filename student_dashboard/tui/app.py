"""Textual kanban board for tracked applications."""

from __future__ import annotations

from datetime import date
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError
from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Footer, Header, Input, Static

from .. import schemas
from ..status import ApplicationStatus
from .client import DashboardClient, error_detail
from .controller import BoardController


class BoardColumn(DataTable):
    """One status column of the board."""

    def __init__(self, status: ApplicationStatus) -> None:
        super().__init__(zebra_stripes=True, id=f"column-{status.value}")
        self.status = status
        self.cursor_type = "row"
        self.can_focus = True
        self.add_columns("Company", "Position", "Due")
        self._row_lookup: list[schemas.ApplicationRead] = []

    def update_rows(self, applications: tuple[schemas.ApplicationRead, ...]) -> None:
        self.clear()
        self._row_lookup = list(applications)
        for application in applications:
            self.add_row(
                application.company,
                application.position,
                application.deadline.isoformat() if application.deadline else "-",
            )

    def current_application(self) -> Optional[schemas.ApplicationRead]:
        if self.cursor_row is None:
            return None
        if 0 <= self.cursor_row < len(self._row_lookup):
            return self._row_lookup[self.cursor_row]
        return None


class ApplicationFormScreen(ModalScreen[Optional[dict]]):
    """Modal used both to add and to edit an application."""

    def __init__(self, application: Optional[schemas.ApplicationRead] = None):
        super().__init__()
        self._application = application

    def compose(self) -> ComposeResult:
        current = self._application
        title = "Edit application" if current else "Add new application"
        yield Container(
            Static(title, classes="modal-title"),
            Input(value=current.company if current else "", placeholder="Company", id="company"),
            Input(value=current.position if current else "", placeholder="Position", id="position"),
            Input(
                value=current.deadline.isoformat() if current and current.deadline else "",
                placeholder="Deadline (YYYY-MM-DD, optional)",
                id="deadline",
            ),
            Input(value=(current.notes or "") if current else "", placeholder="Notes (optional)", id="notes"),
            Static("", id="form-status"),
            Container(
                Button("Save", id="save", variant="primary"),
                Button("Cancel", id="cancel", variant="error"),
            ),
            classes="modal-body",
        )

    def gather_payload(self) -> Optional[dict]:
        status = self.query_one("#form-status", Static)
        payload = {
            "company": self.query_one("#company", Input).value.strip(),
            "position": self.query_one("#position", Input).value.strip(),
            "deadline": self.query_one("#deadline", Input).value.strip(),
            "notes": self.query_one("#notes", Input).value.strip(),
        }
        try:
            schemas.ApplicationCreate.model_validate(payload)
        except PydanticValidationError as exc:
            field = exc.errors()[0]["loc"][0]
            status.update(f"Check the {field} field")
            return None
        return payload

    @on(Button.Pressed)
    def handle_buttons(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.dismiss(None)
            return
        payload = self.gather_payload()
        if payload:
            self.dismiss(payload)


class ReminderFormScreen(ModalScreen[Optional[dict]]):
    """Modal for a new reminder."""

    def __init__(self, application_id: Optional[int] = None):
        super().__init__()
        self._application_id = application_id

    def compose(self) -> ComposeResult:
        yield Container(
            Static("New reminder", classes="modal-title"),
            Input(placeholder="Title", id="title"),
            Input(value=date.today().isoformat(), placeholder="Date (YYYY-MM-DD)", id="reminder-date"),
            Input(placeholder="Description (optional)", id="description"),
            Static("", id="form-status"),
            Container(
                Button("Save", id="save", variant="primary"),
                Button("Cancel", id="cancel", variant="error"),
            ),
            classes="modal-body",
        )

    @on(Button.Pressed)
    def handle_buttons(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.dismiss(None)
            return
        payload = {
            "application_id": self._application_id,
            "title": self.query_one("#title", Input).value.strip(),
            "reminder_date": self.query_one("#reminder-date", Input).value.strip(),
            "description": self.query_one("#description", Input).value.strip() or None,
        }
        try:
            schemas.ReminderCreate.model_validate(payload)
        except PydanticValidationError:
            self.query_one("#form-status", Static).update("Title and a valid date are required")
            return
        self.dismiss(payload)


class ReminderScreen(ModalScreen[None]):
    """Reminder list with completion toggling."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("space", "toggle", "Toggle done"),
        Binding("a", "add", "Add reminder"),
        Binding("x", "delete", "Delete"),
    ]

    def __init__(self, client: DashboardClient, application_id: Optional[int] = None):
        super().__init__()
        self.client = client
        self.application_id = application_id
        self._reminders: list[schemas.ReminderRead] = []

    def compose(self) -> ComposeResult:
        table = DataTable(zebra_stripes=True, id="reminders")
        table.cursor_type = "row"
        table.add_columns("Date", "Title", "Application", "Done")
        yield Vertical(
            Static("Reminders", classes="modal-title"),
            table,
            Static("", id="reminder-status"),
            classes="modal-body",
        )

    async def on_mount(self) -> None:
        await self.refresh_reminders()

    def status(self, message: str) -> None:
        self.query_one("#reminder-status", Static).update(Text(message))

    async def refresh_reminders(self) -> None:
        try:
            self._reminders = await self.client.fetch_reminders()
        except httpx.HTTPError as exc:
            self.status(f"Failed to load reminders: {error_detail(exc)}")
            return
        table = self.query_one("#reminders", DataTable)
        table.clear()
        for reminder in self._reminders:
            table.add_row(
                reminder.reminder_date.isoformat(),
                reminder.title,
                str(reminder.application_id) if reminder.application_id is not None else "-",
                "yes" if reminder.is_completed else "",
            )
        self.status(f"{len(self._reminders)} reminder(s)")

    def current_reminder(self) -> Optional[schemas.ReminderRead]:
        row = self.query_one("#reminders", DataTable).cursor_row
        if row is None or not 0 <= row < len(self._reminders):
            return None
        return self._reminders[row]

    def action_close(self) -> None:
        self.dismiss(None)

    async def action_toggle(self) -> None:
        reminder = self.current_reminder()
        if not reminder:
            return
        try:
            await self.client.set_reminder_completed(reminder.id, not reminder.is_completed)
        except httpx.HTTPError as exc:
            self.status(f"Failed to update reminder: {error_detail(exc)}")
            return
        await self.refresh_reminders()

    async def action_delete(self) -> None:
        reminder = self.current_reminder()
        if not reminder:
            return
        try:
            await self.client.delete_reminder(reminder.id)
        except httpx.HTTPError as exc:
            self.status(f"Failed to delete reminder: {error_detail(exc)}")
            return
        await self.refresh_reminders()

    def action_add(self) -> None:
        self.app.run_worker(self._add_flow(), exclusive=True, name="reminder-form")

    async def _add_flow(self) -> None:
        payload = await self.app.push_screen_wait(ReminderFormScreen(self.application_id))
        if not payload:
            return
        try:
            await self.client.create_reminder(
                title=payload["title"],
                reminder_date=date.fromisoformat(payload["reminder_date"]),
                application_id=payload["application_id"],
                description=payload["description"],
            )
        except httpx.HTTPError as exc:
            self.status(f"Failed to create reminder: {error_detail(exc)}")
            return
        await self.refresh_reminders()


class DashboardApp(App):
    """Main Textual application."""

    CSS = """
    #counters {
        padding: 0 1;
        height: 1;
    }
    #board {
        height: 1fr;
    }
    .column {
        width: 1fr;
        border: round $primary;
    }
    #status {
        padding: 0 1;
        height: 1;
    }
    .modal-body {
        padding: 1 2;
        border: round $primary;
        width: 70%;
        margin: 1 2;
    }
    .modal-title {
        padding-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("r", "refresh", "Refresh"),
        Binding("h", "focus_column(-1)", "Prev column", show=False),
        Binding("l", "focus_column(1)", "Next column", show=False),
        Binding("left_square_bracket", "shift(-1)", "Move left"),
        Binding("right_square_bracket", "shift(1)", "Move right"),
        Binding("1", "move_to(0)", "Applied", show=False),
        Binding("2", "move_to(1)", "Shortlisted", show=False),
        Binding("3", "move_to(2)", "Interviews", show=False),
        Binding("4", "move_to(3)", "Offers", show=False),
        Binding("5", "move_to(4)", "Rejected", show=False),
        Binding("a", "add", "Add"),
        Binding("e", "edit", "Edit"),
        Binding("x", "delete", "Delete"),
        Binding("m", "reminders", "Reminders"),
    ]

    def __init__(self, client: Optional[DashboardClient] = None) -> None:
        super().__init__()
        self.client = client or DashboardClient()
        self.controller = BoardController(self.client)
        self.statuses = list(ApplicationStatus)
        self.active_index = 0

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="counters")
        with Horizontal(id="board"):
            for status in self.statuses:
                with Vertical(classes="column"):
                    yield Static(status.label)
                    yield BoardColumn(status)
        yield Static("", id="status")
        yield Footer()

    async def on_mount(self) -> None:
        await self.refresh_board()

    async def on_unmount(self) -> None:  # pragma: no cover - application shutdown
        await self.client.close()

    def status(self, message: str) -> None:
        self.query_one("#status", Static).update(Text(message))

    def column(self, index: int) -> BoardColumn:
        return self.query_one(f"#column-{self.statuses[index].value}", BoardColumn)

    def render_board(self) -> None:
        for index, status in enumerate(self.statuses):
            self.column(index).update_rows(self.controller.board[status])
        counters = self.controller.counters
        self.query_one("#counters", Static).update(
            Text(
                f"Applications {counters.total} | Interviews {counters.interview_count}"
                f" | Offers {counters.offer_count} | Deadlines {counters.deadline_count}"
            )
        )
        if self.controller.error:
            self.status(self.controller.error)

    async def refresh_board(self) -> None:
        if await self.controller.load():
            self.status(f"Loaded {self.controller.counters.total} application(s)")
        self.render_board()
        self.column(self.active_index).focus()

    def selected(self) -> Optional[schemas.ApplicationRead]:
        return self.column(self.active_index).current_application()

    async def action_refresh(self) -> None:
        await self.refresh_board()

    def action_focus_column(self, step: int) -> None:
        self.active_index = (self.active_index + step) % len(self.statuses)
        self.column(self.active_index).focus()

    @on(DataTable.RowHighlighted)
    def track_column(self, event: DataTable.RowHighlighted) -> None:
        if isinstance(event.data_table, BoardColumn):
            self.active_index = self.statuses.index(event.data_table.status)

    async def _move_selected(self, target_index: int) -> None:
        application = self.selected()
        if not application:
            return
        target = self.statuses[target_index]
        if await self.controller.move(application.id, target):
            self.status(f"Moved {application.company} to {target.label}")
        self.render_board()

    async def action_shift(self, step: int) -> None:
        target_index = self.active_index + step
        if 0 <= target_index < len(self.statuses):
            await self._move_selected(target_index)

    async def action_move_to(self, index: int) -> None:
        await self._move_selected(index)

    def action_add(self) -> None:
        self.run_worker(self._form_flow(None), exclusive=True, name="application-form")

    def action_edit(self) -> None:
        application = self.selected()
        if application:
            self.run_worker(self._form_flow(application), exclusive=True, name="application-form")

    async def _form_flow(self, application: Optional[schemas.ApplicationRead]) -> None:
        payload = await self.push_screen_wait(ApplicationFormScreen(application))
        if not payload:
            return
        if application is None:
            if await self.controller.add(schemas.ApplicationCreate.model_validate(payload)) is not None:
                self.status(f"Added {payload['company']}")
        elif await self.controller.edit(application.id, schemas.ApplicationUpdate.model_validate(payload)):
            self.status(f"Updated {payload['company']}")
        self.render_board()

    async def action_delete(self) -> None:
        application = self.selected()
        if not application:
            return
        if await self.controller.remove(application.id):
            self.status(f"Deleted {application.company}")
        self.render_board()

    def action_reminders(self) -> None:
        application = self.selected()
        self.push_screen(ReminderScreen(self.client, application.id if application else None))


def main() -> None:
    DashboardApp().run()


if __name__ == "__main__":
    main()
