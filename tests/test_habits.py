from datetime import timedelta

from conftest import TODAY


def days_ago(n):
    return TODAY - timedelta(days=n)


def test_create_habit_starts_with_empty_streaks(make_habit):
    habit = make_habit(name="Meditate", description="  ")
    assert habit["currentStreak"] == 0
    assert habit["longestStreak"] == 0
    assert habit["description"] is None


def test_streak_fields_cannot_be_patched(client, make_habit):
    habit = make_habit()
    response = client.patch(f"/api/habits/{habit['id']}", json={"name": "Read more", "currentStreak": 50})
    assert response.status_code == 200
    assert response.json()["name"] == "Read more"
    assert response.json()["currentStreak"] == 0


def test_upsert_is_idempotent_per_day(client, make_habit, log_habit):
    habit = make_habit()

    first = log_habit(habit["id"], TODAY, completed=True)
    assert first.status_code == 201
    second = log_habit(habit["id"], TODAY, completed=False)
    assert second.status_code == 201
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["completed"] is False

    logs = client.get(f"/api/habits/{habit['id']}/logs").json()
    assert len(logs) == 1
    assert client.get(f"/api/habits/{habit['id']}").json()["currentStreak"] == 0


def test_consecutive_days_build_a_streak(client, make_habit, log_habit):
    habit = make_habit()
    for n in (2, 1, 0):
        log_habit(habit["id"], days_ago(n))

    refreshed = client.get(f"/api/habits/{habit['id']}").json()
    assert refreshed["currentStreak"] == 3
    assert refreshed["longestStreak"] == 3


def test_missing_today_means_no_current_streak(client, make_habit, log_habit):
    habit = make_habit()
    log_habit(habit["id"], days_ago(2))
    log_habit(habit["id"], days_ago(1))

    refreshed = client.get(f"/api/habits/{habit['id']}").json()
    assert refreshed["currentStreak"] == 0
    assert refreshed["longestStreak"] == 2


def test_incomplete_day_breaks_both_streaks(client, make_habit, log_habit):
    habit = make_habit()
    log_habit(habit["id"], days_ago(3))
    log_habit(habit["id"], days_ago(2))
    log_habit(habit["id"], days_ago(1), completed=False)
    log_habit(habit["id"], TODAY)

    refreshed = client.get(f"/api/habits/{habit['id']}").json()
    assert refreshed["currentStreak"] == 1
    assert refreshed["longestStreak"] == 2


def test_longest_streak_ignores_gaps_between_logged_days(client, make_habit, log_habit):
    habit = make_habit()
    for n in (5, 4, 1, 0):
        log_habit(habit["id"], days_ago(n))

    refreshed = client.get(f"/api/habits/{habit['id']}").json()
    assert refreshed["currentStreak"] == 2
    assert refreshed["longestStreak"] == 4


def test_relogging_a_day_recomputes_streaks(client, make_habit, log_habit):
    habit = make_habit()
    log_habit(habit["id"], days_ago(1))
    log_habit(habit["id"], TODAY)
    assert client.get(f"/api/habits/{habit['id']}").json()["currentStreak"] == 2

    log_habit(habit["id"], days_ago(1), completed=False)
    refreshed = client.get(f"/api/habits/{habit['id']}").json()
    assert refreshed["currentStreak"] == 1
    assert refreshed["longestStreak"] == 1


def test_log_for_unknown_habit_is_rejected(client, log_habit):
    response = log_habit(999, TODAY)
    assert response.status_code == 404
    assert "999" in response.json()["message"]
    assert client.get(f"/api/habit-logs/date/{TODAY.isoformat()}").json() == []


def test_logs_are_listed_newest_first(client, make_habit, log_habit):
    habit = make_habit()
    for n in (3, 0, 1):
        log_habit(habit["id"], days_ago(n))

    dates = [log["date"] for log in client.get(f"/api/habits/{habit['id']}/logs").json()]
    assert dates == [days_ago(0).isoformat(), days_ago(1).isoformat(), days_ago(3).isoformat()]


def test_logs_for_date_span_all_habits(client, make_habit, log_habit):
    reading = make_habit(name="Read")
    running = make_habit(name="Run")
    log_habit(reading["id"], TODAY)
    log_habit(running["id"], TODAY, completed=False)
    log_habit(running["id"], days_ago(1))

    logs = client.get(f"/api/habit-logs/date/{TODAY.isoformat()}").json()
    assert {(log["habitId"], log["completed"]) for log in logs} == {
        (reading["id"], True),
        (running["id"], False),
    }


def test_logs_for_date_rejects_malformed_date(client):
    response = client.get("/api/habit-logs/date/not-a-date")
    assert response.status_code == 400
    assert "message" in response.json()


def test_deleting_habit_removes_its_logs(client, make_habit, log_habit):
    habit = make_habit()
    log_habit(habit["id"], TODAY)
    log_habit(habit["id"], days_ago(1))

    response = client.delete(f"/api/habits/{habit['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Habit deleted successfully"}
    assert client.get(f"/api/habits/{habit['id']}").status_code == 404
    assert client.get(f"/api/habits/{habit['id']}/logs").json() == []
    assert client.get(f"/api/habit-logs/date/{TODAY.isoformat()}").json() == []


def test_names_are_trimmed_and_blank_names_rejected(client, make_habit):
    assert client.post("/api/habits", json={"name": "   "}).status_code == 400

    habit = make_habit(name="  Journal  ")
    assert habit["name"] == "Journal"

    assert client.patch(f"/api/habits/{habit['id']}", json={"name": "  "}).status_code == 400
    updated = client.patch(f"/api/habits/{habit['id']}", json={"description": "   "}).json()
    assert updated["description"] is None
