"""Quick manual smoke test for the Student Dashboard API."""

from __future__ import annotations

import asyncio
import json
import os

import httpx

API_BASE = os.getenv("STUDENTDASH_API_URL", "http://127.0.0.1:5000/api")


async def main() -> None:
    async with httpx.AsyncClient(base_url=API_BASE, timeout=10) as client:
        resp = await client.get("/dashboard")
        print("Initial counters", resp.status_code, resp.json())

        created = await client.post(
            "/applications",
            json={"company": "ExampleCo", "position": "Smoke SWE", "deadline": None},
        )
        created.raise_for_status()
        application_id = created.json()["id"]
        print("Created", application_id)

        moved = await client.put(f"/applications/{application_id}/status", json={"status": "interviews"})
        print("Move", moved.status_code, moved.json())

        rejected = await client.put(f"/applications/{application_id}/status", json={"status": "archived"})
        print("Invalid move", rejected.status_code, rejected.json())

        reminder = await client.post(
            "/reminders",
            json={"application_id": application_id, "reminder_date": "2030-01-01", "title": "Follow up"},
        )
        reminder.raise_for_status()

        board = await client.get("/applications")
        print("Board", json.dumps(board.json(), indent=2))

        await client.delete(f"/applications/{application_id}")
        await client.delete(f"/reminders/{reminder.json()['id']}")

        final = await client.get("/dashboard")
        print("Final counters", final.json())


if __name__ == "__main__":
    asyncio.run(main())
