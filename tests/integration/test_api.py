"""
Integration tests for the LiftLog API.

The full app is built with create_app() and exercised through TestClient.
The record store is swapped for an in-memory fake via dependency_overrides,
so routers, use cases, services and repositories all run for real.
"""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api.deps import get_record_store, get_settings
from backend.main import create_app
from backend.settings import Settings
from domain.models import Exercise
from tests.fakes import FailingRecordStore, FakeRecordStore, make_entry, make_exercise, make_set

FIXTURES = Path(__file__).parent.parent / "fixtures" / "imports"

LIFTIN_TWO_SESSIONS = (
    "Date,Exercise,Set,Weight,Reps,RPE\n"
    "2024-01-01,Squat,1,100,5,7\n"
    "2024-01-03,Squat,1,100,5,7\n"
    "2024-01-03,Squat,2,105,5,7\n"
    "2024-01-03,Leg Press,1,200,10,\n"
)


@pytest.fixture
def settings(tmp_path):
    return Settings(environment="test", data_dir=tmp_path, _env_file=None)


@pytest.fixture
def store():
    return FakeRecordStore()


@pytest.fixture
def app(settings, store):
    app = create_app(settings=settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_record_store] = lambda: store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


def _upload(client, filename, content, content_type="text/plain"):
    return client.post("/imports", files={"file": (filename, content, content_type)})


def _exercise_id(client, name):
    return next(e["id"] for e in client.get("/exercises").json() if e["name"] == name)


def _bench_workout_payload(client, weight=135, reps=5, name="Push Day"):
    bench = next(e for e in client.get("/exercises").json() if e["name"] == "Barbell Bench Press")
    entry = make_entry(Exercise.model_validate(bench), [make_set(weight, reps)])
    return {
        "name": name,
        "date": "2024-02-01T18:00:00Z",
        "exercises": [entry.model_dump(mode="json")],
    }


# =============================================================================
# Health
# =============================================================================


@pytest.mark.integration
class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "environment": "test"}


# =============================================================================
# Imports
# =============================================================================


@pytest.mark.integration
class TestImports:
    """Tests for POST /imports."""

    def test_hevy_export(self, client):
        content = (FIXTURES / "hevy_export.json").read_bytes()

        response = _upload(client, "hevy.json", content, "application/json")

        assert response.status_code == 201
        body = response.json()
        assert body["source"] == "Hevy"
        assert body["workout_count"] == 1
        assert body["exercise_count"] == 2
        assert body["workouts"][0]["name"] == "Push Day"
        assert body["workouts"][0]["exercise_count"] == 3
        assert [e["name"] for e in body["exercises"]] == ["Incline Dumbbell Press", "Cable Fly"]

        workouts = client.get("/workouts").json()
        assert [w["name"] for w in workouts] == ["Push Day"]
        assert workouts[0]["is_completed"] is True

    def test_strong_export(self, client):
        content = (FIXTURES / "strong_export.json").read_bytes()

        response = _upload(client, "strong.json", content, "application/json")

        assert response.status_code == 201
        assert response.json()["source"] == "Strong"

    def test_liftin_export(self, client):
        content = (FIXTURES / "liftin_export.csv").read_bytes()

        response = _upload(client, "liftin.csv", content, "text/csv")

        assert response.status_code == 201
        body = response.json()
        assert body["source"] == "Liftin'"
        assert [w["name"] for w in body["workouts"]] == ["Workout 2024-01-01", "Workout 2024-01-03"]

    def test_unsupported_format(self, client, store):
        response = _upload(client, "notes.txt", b"just some notes")

        assert response.status_code == 415
        assert response.json() == {"detail": "Unsupported file format", "retryable": False}
        assert store.dump("workouts") is None

    def test_malformed_hevy_export(self, client):
        content = json.dumps({"workouts": "nope", "routines": []})

        response = _upload(client, "hevy.json", content, "application/json")

        assert response.status_code == 422
        body = response.json()
        assert body["detail"] == "Hevy export is malformed"
        assert body["retryable"] is True
        assert body["errors"]

    def test_liftin_without_valid_rows(self, client):
        response = _upload(client, "liftin.csv", b"Date,Exercise,Set,Weight,Reps,RPE\nbad,row\n")

        assert response.status_code == 422
        assert response.json()["detail"] == "No valid rows found in Liftin' export"

    def test_file_too_large(self, app, settings, client):
        small = settings.model_copy(update={"max_import_bytes": 16})
        app.dependency_overrides[get_settings] = lambda: small

        response = _upload(client, "liftin.csv", LIFTIN_TWO_SESSIONS.encode())

        assert response.status_code == 422
        assert "too large" in response.json()["detail"]

    def test_missing_file_field(self, client):
        assert client.post("/imports").status_code == 422


# =============================================================================
# Workouts
# =============================================================================


@pytest.mark.integration
class TestWorkouts:
    """Tests for /workouts."""

    def test_create_and_get(self, client):
        response = client.post("/workouts", json=_bench_workout_payload(client))

        assert response.status_code == 201
        created = response.json()
        assert created["is_completed"] is False
        assert created["name"] == "Push Day"

        fetched = client.get(f"/workouts/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["id"] == created["id"]

    def test_create_requires_name(self, client):
        assert client.post("/workouts", json={"name": ""}).status_code == 422

    def test_create_rejects_unknown_exercise(self, client):
        entry = make_entry(make_exercise("Zercher Squat"), [make_set(100, 5)])
        payload = {"name": "Legs", "exercises": [entry.model_dump(mode="json")]}

        response = client.post("/workouts", json=payload)

        assert response.status_code == 422
        assert response.json()["detail"] == f"Exercise not found: {entry.exercise_id}"
        assert client.get("/workouts").json() == []

    def test_create_stores_catalog_copy_of_exercise(self, client):
        payload = _bench_workout_payload(client)
        payload["exercises"][0]["exercise"]["name"] = "Renamed Press"

        created = client.post("/workouts", json=payload).json()

        assert created["exercises"][0]["exercise"]["name"] == "Barbell Bench Press"

    def test_unknown_workout(self, client):
        assert client.get("/workouts/missing").status_code == 404
        assert client.get("/workouts/missing/stats").status_code == 404
        assert client.delete("/workouts/missing").status_code == 404

    def test_list_most_recent_first(self, client):
        for day in ("2024-01-01", "2024-01-03", "2024-01-02"):
            client.post("/workouts", json={"name": day, "date": f"{day}T10:00:00Z"})

        assert [w["name"] for w in client.get("/workouts").json()] == [
            "2024-01-03",
            "2024-01-02",
            "2024-01-01",
        ]
        assert [w["name"] for w in client.get("/workouts", params={"limit": 1}).json()] == ["2024-01-03"]

    def test_invalid_limit(self, client):
        assert client.get("/workouts", params={"limit": 0}).status_code == 422

    def test_stats(self, client):
        payload = _bench_workout_payload(client)
        payload["exercises"][0]["sets"].append(make_set(200, 1, is_completed=False).model_dump(mode="json"))
        workout_id = client.post("/workouts", json=payload).json()["id"]

        response = client.get(f"/workouts/{workout_id}/stats")

        assert response.status_code == 200
        assert response.json() == {
            "workout_id": workout_id,
            "total_volume": 675,
            "completed_sets": 1,
            "total_reps": 5,
            "exercise_count": 1,
        }

    def test_complete_detects_records(self, client):
        workout_id = client.post("/workouts", json=_bench_workout_payload(client)).json()["id"]

        response = client.post(f"/workouts/{workout_id}/complete")

        assert response.status_code == 200
        body = response.json()
        assert body["workout"]["is_completed"] is True
        assert sorted(r["type"] for r in body["new_records"]) == ["reps", "volume", "weight"]

    def test_complete_twice_conflicts(self, client):
        workout_id = client.post("/workouts", json=_bench_workout_payload(client)).json()["id"]
        client.post(f"/workouts/{workout_id}/complete")

        response = client.post(f"/workouts/{workout_id}/complete")

        assert response.status_code == 409

    def test_complete_unknown_workout(self, client):
        assert client.post("/workouts/missing/complete").status_code == 404

    def test_delete(self, client):
        workout_id = client.post("/workouts", json=_bench_workout_payload(client)).json()["id"]

        response = client.delete(f"/workouts/{workout_id}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Workout deleted successfully"}
        assert client.get(f"/workouts/{workout_id}").status_code == 404


# =============================================================================
# Exercises
# =============================================================================


@pytest.mark.integration
class TestExercises:
    """Tests for /exercises."""

    def test_catalog_is_seeded_and_sorted(self, client):
        names = [e["name"] for e in client.get("/exercises").json()]

        assert "Barbell Bench Press" in names
        assert names == sorted(names, key=str.lower)

    def test_get_and_unknown(self, client):
        squat_id = _exercise_id(client, "Squat")

        assert client.get(f"/exercises/{squat_id}").json()["name"] == "Squat"
        assert client.get("/exercises/missing").status_code == 404

    def test_built_in_cannot_be_deleted(self, client):
        response = client.delete(f"/exercises/{_exercise_id(client, 'Squat')}")
        assert response.status_code == 409

    def test_custom_exercise_can_be_deleted(self, client):
        _upload(client, "liftin.csv", LIFTIN_TWO_SESSIONS.encode())
        leg_press_id = _exercise_id(client, "Leg Press")

        response = client.delete(f"/exercises/{leg_press_id}")

        assert response.status_code == 200
        assert client.get(f"/exercises/{leg_press_id}").status_code == 404

    def test_stats_and_highlights(self, client):
        _upload(client, "liftin.csv", LIFTIN_TWO_SESSIONS.encode())
        squat_id = _exercise_id(client, "Squat")

        response = client.get(f"/exercises/{squat_id}/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["exercise_name"] == "Squat"
        assert [s["volume"] for s in body["stats"]] == [500, 1025]
        assert body["stats"][1]["best_set"] == "105 × 5"
        assert [h["metric"] for h in body["highlights"]] == ["Volume", "Max Weight", "Est. 1RM"]

    def test_stats_ignore_in_progress_workouts(self, client):
        payload = _bench_workout_payload(client, weight=300, reps=5)
        client.post("/workouts", json=payload)
        bench_id = payload["exercises"][0]["exercise_id"]

        body = client.get(f"/exercises/{bench_id}/stats").json()

        assert body["stats"] == []
        assert body["highlights"] == []

    def test_stats_include_workout_once_completed(self, client):
        payload = _bench_workout_payload(client, weight=300, reps=5)
        workout_id = client.post("/workouts", json=payload).json()["id"]
        bench_id = payload["exercises"][0]["exercise_id"]
        client.post(f"/workouts/{workout_id}/complete")

        body = client.get(f"/exercises/{bench_id}/stats").json()

        assert [s["max_weight"] for s in body["stats"]] == [300]

    def test_stats_unknown_exercise(self, client):
        assert client.get("/exercises/missing/stats").status_code == 404

    def test_progression_needs_history(self, client):
        squat_id = _exercise_id(client, "Squat")

        response = client.get(f"/exercises/{squat_id}/progression")

        assert response.status_code == 200
        assert response.json() == {"exercise_id": squat_id, "recommendation": None}

    def test_progression_recommendation(self, client):
        _upload(client, "liftin.csv", LIFTIN_TWO_SESSIONS.encode())
        squat_id = _exercise_id(client, "Squat")

        response = client.get(f"/exercises/{squat_id}/progression")

        recommendation = response.json()["recommendation"]
        assert recommendation["difficulty"] == "harder"
        assert [s["weight"] for s in recommendation["suggested_sets"]] == [105, 110]
        assert all(s["is_completed"] is False for s in recommendation["suggested_sets"])


# =============================================================================
# Personal records
# =============================================================================


@pytest.mark.integration
class TestPersonalRecords:
    """Tests for /personal-records."""

    def _complete(self, client, weight, reps):
        workout_id = client.post("/workouts", json=_bench_workout_payload(client, weight, reps)).json()["id"]
        return client.post(f"/workouts/{workout_id}/complete").json()

    def test_current_bests(self, client):
        self._complete(client, 135, 5)
        self._complete(client, 140, 5)

        bests = client.get("/personal-records").json()

        assert {r["type"]: r["value"] for r in bests} == {"weight": 140, "reps": 5, "volume": 700}

    def test_filter_by_exercise(self, client):
        self._complete(client, 135, 5)

        assert client.get("/personal-records", params={"exercise_id": "missing"}).json() == []

    def test_notifications(self, client):
        self._complete(client, 135, 5)

        unread = client.get("/personal-records/notifications").json()
        assert sorted(n["improvement"] for n in unread) == ["135 lbs", "5 reps", "675 lbs"]

        response = client.post(f"/personal-records/notifications/{unread[0]['id']}/read")
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert len(client.get("/personal-records/notifications").json()) == 2

    def test_mark_unknown_notification(self, client):
        assert client.post("/personal-records/notifications/missing/read").status_code == 404


# =============================================================================
# Storage failures
# =============================================================================


@pytest.mark.integration
class TestStorageFailures:
    """Storage errors surface as 503 responses."""

    def test_read_failure(self, app, client):
        app.dependency_overrides[get_record_store] = lambda: FailingRecordStore()

        response = client.get("/workouts")

        assert response.status_code == 503
        assert response.json() == {"detail": "Storage is unavailable"}

    def test_import_write_failure(self, app, client):
        app.dependency_overrides[get_record_store] = lambda: FailingRecordStore(
            fail_on={"set"}, keys={"workouts"}
        )

        response = _upload(client, "liftin.csv", LIFTIN_TWO_SESSIONS.encode())

        assert response.status_code == 503
