from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient

from life_tracker.db.core import Database
from life_tracker.main import create_app
from life_tracker.services import metrics


TODAY = date(2026, 3, 15)
NOW = datetime(2026, 3, 15, 12, 0, 0)


@pytest.fixture(autouse=True)
def frozen_clock(monkeypatch):
    monkeypatch.setattr(metrics, "utc_today", lambda: TODAY)
    monkeypatch.setattr(metrics, "utc_now", lambda: NOW)


@pytest.fixture
def database():
    database = Database("sqlite://")
    yield database
    database.dispose()


@pytest.fixture
def app(database):
    return create_app(database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_habit(client):
    def _make_habit(name="Read", description=None):
        response = client.post("/api/habits", json={"name": name, "description": description})
        assert response.status_code == 201
        return response.json()
    return _make_habit


@pytest.fixture
def log_habit(client):
    def _log_habit(habit_id, day, completed=True):
        return client.post(
            "/api/habit-logs",
            json={"habitId": habit_id, "date": day.isoformat(), "completed": completed},
        )
    return _log_habit


@pytest.fixture
def make_checklist(client):
    def _make_checklist(title="Groceries", items=()):
        response = client.post("/api/checklists", json={"title": title})
        assert response.status_code == 201
        checklist = response.json()
        for order, (item_title, completed) in enumerate(items):
            item = client.post(
                "/api/checklist-items",
                json={"checklistId": checklist["id"], "title": item_title, "completed": completed, "order": order},
            )
            assert item.status_code == 201
        return client.get(f"/api/checklists/{checklist['id']}").json()
    return _make_checklist
