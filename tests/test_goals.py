from decimal import Decimal


def make_goal(client, **overrides):
    payload = {"title": "Read 12 books", "targetValue": 12, "currentValue": 3, "unit": "books"}
    payload.update(overrides)
    return client.post("/api/goals", json=payload)


def test_create_goal_defaults(client):
    response = make_goal(client)
    assert response.status_code == 201
    goal = response.json()
    assert goal["status"] == "not_started"
    assert goal["motivationMedia"] == []
    assert goal["startDate"]
    assert goal["targetDate"] is None
    assert goal["progress"] == 25


def test_progress_is_capped_and_zero_without_target(client):
    assert make_goal(client, currentValue=20).json()["progress"] == 100
    assert make_goal(client, targetValue=None).json()["progress"] == 0
    assert make_goal(client, targetValue=0).json()["progress"] == 0


def test_invalid_status_is_rejected(client):
    response = make_goal(client, status="abandoned")
    assert response.status_code == 400
    assert "status" in response.json()["message"]


def test_patch_progress_and_status(client):
    goal = make_goal(client).json()

    response = client.patch(f"/api/goals/{goal['id']}", json={"currentValue": 6, "status": "in_progress"})
    assert response.status_code == 200
    updated = response.json()
    assert Decimal(updated["currentValue"]) == Decimal("6")
    assert updated["status"] == "in_progress"
    assert updated["progress"] == 50
    assert updated["title"] == goal["title"]


def test_motivation_media_round_trips(client):
    goal = make_goal(client, motivationMedia=["https://example.com/a.png"]).json()
    assert goal["motivationMedia"] == ["https://example.com/a.png"]

    media = ["https://example.com/a.png", "data:image/png;base64,AAAA"]
    updated = client.patch(f"/api/goals/{goal['id']}", json={"motivationMedia": media}).json()
    assert updated["motivationMedia"] == media
    assert client.get(f"/api/goals/{goal['id']}").json()["motivationMedia"] == media


def test_target_date_can_be_cleared(client):
    goal = make_goal(client, targetDate="2026-06-01T00:00:00").json()
    updated = client.patch(f"/api/goals/{goal['id']}", json={"targetDate": None}).json()
    assert updated["targetDate"] is None


def test_list_and_delete(client):
    first = make_goal(client, title="first").json()
    second = make_goal(client, title="second").json()

    ids = [goal["id"] for goal in client.get("/api/goals").json()]
    assert ids == [second["id"], first["id"]]

    assert client.delete(f"/api/goals/{first['id']}").json() == {"message": "Goal deleted successfully"}
    assert client.get(f"/api/goals/{first['id']}").status_code == 404
    assert client.delete(f"/api/goals/{first['id']}").status_code == 404


def test_text_cleanup_matches_between_create_and_update(client):
    assert make_goal(client, title="   ").status_code == 400

    goal = make_goal(client, title=" Run ", description="  ", unit=" km ").json()
    assert (goal["title"], goal["description"], goal["unit"]) == ("Run", None, "km")

    updated = client.patch(
        f"/api/goals/{goal['id']}",
        json={"title": "  Run more  ", "description": "   ", "unit": "  miles "},
    ).json()
    assert (updated["title"], updated["description"], updated["unit"]) == ("Run more", None, "miles")

    assert client.patch(f"/api/goals/{goal['id']}", json={"title": "  "}).status_code == 400
