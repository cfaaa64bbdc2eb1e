"""HTTP client the board uses to talk to the API."""

from __future__ import annotations

from datetime import date
from typing import Optional

import httpx

from .. import schemas
from ..config import get_settings
from ..status import ApplicationStatus


class DashboardClient:
    """Thin wrapper around the REST API for the TUI."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if base_url is None or timeout is None:
            settings = get_settings()
            base_url = base_url or settings.api_url
            timeout = timeout or settings.client_timeout
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_dashboard(self) -> schemas.DashboardRead:
        response = await self._client.get("/dashboard")
        response.raise_for_status()
        return schemas.DashboardRead.model_validate(response.json())

    async def fetch_board(self) -> schemas.ApplicationBoard:
        response = await self._client.get("/applications")
        response.raise_for_status()
        return schemas.ApplicationBoard.model_validate(response.json())

    async def create_application(self, payload: schemas.ApplicationCreate) -> int:
        response = await self._client.post("/applications", json=payload.model_dump(mode="json"))
        response.raise_for_status()
        return response.json()["id"]

    async def update_status(self, application_id: int, status: ApplicationStatus) -> None:
        response = await self._client.put(f"/applications/{application_id}/status", json={"status": status.value})
        response.raise_for_status()

    async def update_application(self, application_id: int, payload: schemas.ApplicationUpdate) -> None:
        response = await self._client.put(f"/applications/{application_id}", json=payload.model_dump(mode="json"))
        response.raise_for_status()

    async def delete_application(self, application_id: int) -> None:
        response = await self._client.delete(f"/applications/{application_id}")
        response.raise_for_status()

    async def fetch_reminders(self) -> list[schemas.ReminderRead]:
        response = await self._client.get("/reminders")
        response.raise_for_status()
        return [schemas.ReminderRead.model_validate(item) for item in response.json()]

    async def create_reminder(
        self,
        *,
        title: str,
        reminder_date: date,
        application_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        payload = schemas.ReminderCreate(
            application_id=application_id,
            reminder_date=reminder_date,
            title=title,
            description=description,
        )
        response = await self._client.post("/reminders", json=payload.model_dump(mode="json"))
        response.raise_for_status()
        return response.json()["id"]

    async def set_reminder_completed(self, reminder_id: int, completed: bool) -> None:
        response = await self._client.put(f"/reminders/{reminder_id}", json={"is_completed": completed})
        response.raise_for_status()

    async def delete_reminder(self, reminder_id: int) -> None:
        response = await self._client.delete(f"/reminders/{reminder_id}")
        response.raise_for_status()


def error_detail(exc: httpx.HTTPError) -> str:
    """Best-effort human readable description of a failed request."""
    response = getattr(exc, "response", None)
    if response is None:
        return str(exc)
    try:
        data = response.json()
        if isinstance(data, dict) and "message" in data:
            return f"{response.status_code}: {data['message']}"
    except ValueError:
        pass
    text = response.text.strip()
    return f"{response.status_code}: {text or exc}"
