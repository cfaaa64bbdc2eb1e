"""Tests for the API server."""

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timedelta, timezone

from fastapi.testclient import TestClient
from sqlmodel import Session, create_engine

from student_dashboard import crud, models, schemas
from student_dashboard.database import init_db
from student_dashboard.database import get_session
from student_dashboard.main import app


def create(client, **fields) -> int:
    payload = {"company": "Google", "position": "SWE", "deadline": None}
    payload.update(fields)
    response = client.post("/api/applications", json=payload)
    assert response.status_code == 201
    return response.json()["id"]


def group_ids(client) -> dict[str, list[int]]:
    response = client.get("/api/applications")
    assert response.status_code == 200
    return {status: [item["id"] for item in items] for status, items in response.json().items()}


class TestSystemEndpoints:
    def test_health(self, test_client):
        response = test_client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestApplicationEndpoints:
    """Tests for application endpoints."""

    def test_list_empty(self, test_client):
        assert group_ids(test_client) == {
            "applied": [],
            "shortlisted": [],
            "interviews": [],
            "offers": [],
            "rejected": [],
        }

    def test_create_starts_in_applied(self, test_client):
        """Scenario: a new application lands in the applied column only."""
        before = test_client.get("/api/dashboard").json()
        application_id = create(test_client)

        groups = group_ids(test_client)
        assert groups["applied"] == [application_id]
        assert sum(len(ids) for ids in groups.values()) == 1

        after = test_client.get("/api/dashboard").json()
        assert after["total"] == before["total"] + 1
        assert after["deadline_count"] == before["deadline_count"]

    def test_created_fields_round_trip(self, test_client):
        deadline = (date.today() + timedelta(days=10)).isoformat()
        create(test_client, company="IBM", position="Data Analyst", deadline=deadline, notes="via career fair")

        item = test_client.get("/api/applications").json()["applied"][0]
        assert item["company"] == "IBM"
        assert item["position"] == "Data Analyst"
        assert item["deadline"] == deadline
        assert item["notes"] == "via career fair"
        assert item["status"] == "applied"
        assert item["applied_date"] == date.today().isoformat()

    def test_listing_is_newest_first(self, test_client):
        first = create(test_client, company="A")
        second = create(test_client, company="B")
        assert group_ids(test_client)["applied"] == [second, first]

    def test_create_requires_company_and_position(self, test_client):
        response = test_client.post("/api/applications", json={"company": "Google"})
        assert response.status_code == 400
        assert "position" in response.json()["message"]

        response = test_client.post("/api/applications", json={"company": "", "position": "SWE"})
        assert response.status_code == 400

    def test_blank_deadline_is_treated_as_missing(self, test_client):
        create(test_client, deadline="", notes="")
        item = test_client.get("/api/applications").json()["applied"][0]
        assert item["deadline"] is None
        assert item["notes"] is None

    def test_status_update_moves_between_groups(self, test_client):
        """Scenario: applied -> interviews bumps the interview counter."""
        application_id = create(test_client)
        before = test_client.get("/api/dashboard").json()

        response = test_client.put(f"/api/applications/{application_id}/status", json={"status": "interviews"})
        assert response.status_code == 200
        assert response.json()["message"] == "Application status updated successfully"

        groups = group_ids(test_client)
        assert groups["applied"] == []
        assert groups["interviews"] == [application_id]
        after = test_client.get("/api/dashboard").json()
        assert after["interview_count"] == before["interview_count"] + 1

    def test_status_update_to_same_status_succeeds(self, test_client):
        application_id = create(test_client)
        response = test_client.put(f"/api/applications/{application_id}/status", json={"status": "applied"})
        assert response.status_code == 200
        assert group_ids(test_client)["applied"] == [application_id]

    def test_invalid_status_is_rejected(self, test_client):
        """Scenario: an unknown status is a 400 and nothing changes."""
        application_id = create(test_client)

        response = test_client.put(f"/api/applications/{application_id}/status", json={"status": "archived"})
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid status"}
        assert group_ids(test_client)["applied"] == [application_id]

    def test_last_status_write_wins(self, test_client):
        """Scenario: conflicting updates both succeed; the later one sticks."""
        application_id = create(test_client)

        first = test_client.put(f"/api/applications/{application_id}/status", json={"status": "offers"})
        second = test_client.put(f"/api/applications/{application_id}/status", json={"status": "rejected"})

        assert first.status_code == 200
        assert second.status_code == 200
        groups = group_ids(test_client)
        assert groups["rejected"] == [application_id]
        assert groups["offers"] == []

    def test_update_fields_keeps_status(self, test_client):
        application_id = create(test_client)
        test_client.put(f"/api/applications/{application_id}/status", json={"status": "shortlisted"})

        response = test_client.put(
            f"/api/applications/{application_id}",
            json={"company": "Microsoft", "position": "UX Designer", "deadline": "2030-04-30", "notes": None},
        )
        assert response.status_code == 200

        item = test_client.get("/api/applications").json()["shortlisted"][0]
        assert item["company"] == "Microsoft"
        assert item["position"] == "UX Designer"
        assert item["deadline"] == "2030-04-30"

    def test_missing_ids_are_noops(self, test_client):
        assert test_client.put("/api/applications/999/status", json={"status": "offers"}).status_code == 200
        assert (
            test_client.put("/api/applications/999", json={"company": "X", "position": "Y"}).status_code == 200
        )
        assert test_client.delete("/api/applications/999").status_code == 200
        assert test_client.get("/api/dashboard").json()["total"] == 0

    def test_delete_removes_from_listing(self, test_client):
        application_id = create(test_client)
        response = test_client.delete(f"/api/applications/{application_id}")
        assert response.status_code == 200
        assert group_ids(test_client)["applied"] == []

    def test_unknown_stored_status_is_hidden_but_counted(self, test_client, session):
        session.add(models.Application(company="Legacy", position="Intern", status="archived"))
        session.commit()
        create(test_client)

        groups = group_ids(test_client)
        assert sum(len(ids) for ids in groups.values()) == 1
        assert test_client.get("/api/dashboard").json()["total"] == 2


class TestDashboardEndpoint:
    def test_counters(self, test_client):
        future = (date.today() + timedelta(days=3)).isoformat()
        past = (date.today() - timedelta(days=3)).isoformat()
        today = date.today().isoformat()

        interview_id = create(test_client, deadline=future)
        offer_id = create(test_client, deadline=past)
        create(test_client, deadline=today)
        create(test_client)
        test_client.put(f"/api/applications/{interview_id}/status", json={"status": "interviews"})
        test_client.put(f"/api/applications/{offer_id}/status", json={"status": "offers"})

        assert test_client.get("/api/dashboard").json() == {
            "total": 4,
            "interview_count": 1,
            "offer_count": 1,
            "deadline_count": 2,
        }


class TestReminderEndpoints:
    def test_create_and_list_in_date_order(self, test_client):
        later = test_client.post(
            "/api/reminders",
            json={"application_id": None, "reminder_date": "2030-05-02", "title": "Follow up"},
        )
        sooner = test_client.post(
            "/api/reminders",
            json={"application_id": None, "reminder_date": "2030-05-01", "title": "Prep", "description": "LeetCode"},
        )
        assert later.status_code == 201
        assert sooner.status_code == 201

        reminders = test_client.get("/api/reminders").json()
        assert [r["title"] for r in reminders] == ["Prep", "Follow up"]
        assert reminders[0]["description"] == "LeetCode"
        assert reminders[0]["is_completed"] is False

    def test_toggle_completion(self, test_client):
        reminder_id = test_client.post(
            "/api/reminders", json={"reminder_date": "2030-05-01", "title": "Send thank-you"}
        ).json()["id"]

        response = test_client.put(f"/api/reminders/{reminder_id}", json={"is_completed": True})
        assert response.status_code == 200
        assert test_client.get("/api/reminders").json()[0]["is_completed"] is True

    def test_title_is_required(self, test_client):
        response = test_client.post("/api/reminders", json={"reminder_date": "2030-05-01"})
        assert response.status_code == 400
        assert "title" in response.json()["message"]

    def test_delete(self, test_client):
        reminder_id = test_client.post(
            "/api/reminders", json={"reminder_date": "2030-05-01", "title": "Call recruiter"}
        ).json()["id"]
        assert test_client.delete(f"/api/reminders/{reminder_id}").status_code == 200
        assert test_client.get("/api/reminders").json() == []

    def test_deleting_application_leaves_reminder_dangling(self, test_client):
        """Scenario: reminders keep the id of a deleted application."""
        application_id = create(test_client)
        test_client.post(
            "/api/reminders",
            json={"application_id": application_id, "reminder_date": "2030-05-01", "title": "Follow up"},
        )

        test_client.delete(f"/api/applications/{application_id}")

        assert group_ids(test_client)["applied"] == []
        reminders = test_client.get("/api/reminders").json()
        assert reminders[0]["application_id"] == application_id

    def test_reminder_for_unknown_application_is_accepted(self, test_client):
        response = test_client.post(
            "/api/reminders", json={"application_id": 12345, "reminder_date": "2030-05-01", "title": "Orphan"}
        )
        assert response.status_code == 201


class TestStorageFaults:
    def test_storage_failure_is_a_500_without_details(self, test_client):
        from sqlalchemy.pool import StaticPool
        from sqlmodel import create_engine

        # No tables: every statement fails inside SQLAlchemy.
        broken = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)

        def broken_session():
            with Session(broken) as session:
                yield session

        app.dependency_overrides[get_session] = broken_session

        response = test_client.get("/api/applications")
        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch applications"}

        response = test_client.post("/api/applications", json={"company": "A", "position": "B"})
        assert response.status_code == 500
        assert response.json() == {"message": "Failed to create application"}
        broken.dispose()

    def test_unexpected_error_is_a_json_500(self, session, override_session):
        # A blank company can only get in underneath the API; reading it back fails validation.
        session.add(models.Application(company="", position="Analyst"))
        session.commit()

        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/api/applications")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"message": "Internal server error"}


class TestTimestamps:
    def test_new_rows_carry_timezone_aware_timestamps(self):
        application = models.Application(company="Google", position="SWE")
        assert application.created_at.tzinfo is not None
        assert application.applied_date.tzinfo is not None

    def test_insert_and_read_back(self, session):
        application_id = crud.insert_application(session, schemas.ApplicationCreate(company="Google", position="SWE"))
        assert application_id is not None

        stored = crud.list_applications(session)[0]
        read = schemas.ApplicationRead.model_validate(stored)
        assert read.applied_date == models.utcnow().astimezone().date()

    def test_applied_date_is_the_local_calendar_day(self):
        utc_value = datetime(2026, 10, 18, 23, 30, tzinfo=timezone.utc)
        fields = {"id": 1, "company": "A", "position": "B", "status": "applied"}

        aware = schemas.ApplicationRead.model_validate({**fields, "applied_date": utc_value})
        naive = schemas.ApplicationRead.model_validate({**fields, "applied_date": utc_value.replace(tzinfo=None)})

        assert aware.applied_date == utc_value.astimezone().date()
        assert naive.applied_date == aware.applied_date

    def test_listing_reports_todays_date(self, test_client):
        create(test_client)
        applied = test_client.get("/api/applications").json()["applied"][0]
        assert applied["applied_date"] == models.utcnow().astimezone().date().isoformat()


class TestConcurrentStatusUpdates:
    def test_threaded_updates_against_a_file_database(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'race.db'}", connect_args={"check_same_thread": False})
        init_db(engine)
        with Session(engine) as session:
            application_id = crud.insert_application(session, schemas.ApplicationCreate(company="Google", position="SWE"))

        def move(status: str) -> str:
            with Session(engine) as session:
                crud.update_status(session, application_id, status)
            return status

        targets = ["offers", "rejected"] * 8
        with ThreadPoolExecutor(max_workers=4) as pool:
            futures = [pool.submit(move, status) for status in targets]
            applied = [future.result() for future in futures]

        assert applied == targets
        with Session(engine) as session:
            final = session.get(models.Application, application_id).status
        assert final in {"offers", "rejected"}

        # A later single write still overrides whatever the race left behind.
        move("shortlisted")
        with Session(engine) as session:
            assert session.get(models.Application, application_id).status == "shortlisted"
        engine.dispose()
