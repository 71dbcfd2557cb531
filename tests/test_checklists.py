def test_new_checklist_is_empty(make_checklist):
    checklist = make_checklist()
    assert checklist["items"] == []
    assert checklist["progress"] == 0


def test_items_are_ordered_and_drive_progress(client, make_checklist):
    checklist = make_checklist(items=[("milk", True), ("eggs", False), ("bread", True)])
    assert [item["title"] for item in checklist["items"]] == ["milk", "eggs", "bread"]
    assert checklist["progress"] == 67

    eggs = checklist["items"][1]
    response = client.patch(f"/api/checklist-items/{eggs['id']}", json={"completed": True, "order": 10})
    assert response.status_code == 200

    refreshed = client.get(f"/api/checklists/{checklist['id']}").json()
    assert refreshed["progress"] == 100
    assert [item["title"] for item in refreshed["items"]] == ["milk", "bread", "eggs"]


def test_items_endpoint(client, make_checklist):
    checklist = make_checklist(items=[("a", False), ("b", False)])

    items = client.get(f"/api/checklists/{checklist['id']}/items").json()
    assert [item["title"] for item in items] == ["a", "b"]
    assert all(item["checklistId"] == checklist["id"] for item in items)

    assert client.get("/api/checklists/999/items").status_code == 404


def test_item_for_unknown_checklist_is_rejected(client):
    response = client.post("/api/checklist-items", json={"checklistId": 999, "title": "orphan", "order": 0})
    assert response.status_code == 404
    assert "999" in response.json()["message"]


def test_item_cannot_move_to_unknown_checklist(client, make_checklist):
    checklist = make_checklist(items=[("a", False)])
    item = checklist["items"][0]
    response = client.patch(f"/api/checklist-items/{item['id']}", json={"checklistId": 999})
    assert response.status_code == 404


def test_rename_checklist(client, make_checklist):
    checklist = make_checklist(items=[("a", True)])
    response = client.patch(f"/api/checklists/{checklist['id']}", json={"title": "Weekend"})
    assert response.status_code == 200
    assert response.json()["title"] == "Weekend"
    assert len(response.json()["items"]) == 1


def test_delete_item(client, make_checklist):
    checklist = make_checklist(items=[("a", False), ("b", True)])
    item = checklist["items"][0]

    response = client.delete(f"/api/checklist-items/{item['id']}")
    assert response.json() == {"message": "Checklist item deleted successfully"}
    assert client.get(f"/api/checklist-items/{item['id']}").status_code == 404
    assert client.get(f"/api/checklists/{checklist['id']}").json()["progress"] == 100


def test_deleting_checklist_removes_items(client, make_checklist):
    checklist = make_checklist(items=[("a", False), ("b", True)])
    item_ids = [item["id"] for item in checklist["items"]]

    response = client.delete(f"/api/checklists/{checklist['id']}")
    assert response.json() == {"message": "Checklist deleted successfully"}
    assert client.get(f"/api/checklists/{checklist['id']}").status_code == 404
    for item_id in item_ids:
        assert client.get(f"/api/checklist-items/{item_id}").status_code == 404


def test_titles_are_trimmed_on_create_and_update(client, make_checklist):
    assert client.post("/api/checklists", json={"title": "   "}).status_code == 400

    checklist = make_checklist(title="  Errands ")
    assert checklist["title"] == "Errands"

    renamed = client.patch(f"/api/checklists/{checklist['id']}", json={"title": "  Weekend errands  "})
    assert renamed.json()["title"] == "Weekend errands"
    assert client.patch(f"/api/checklists/{checklist['id']}", json={"title": "   "}).status_code == 400

    item = client.post(
        "/api/checklist-items", json={"checklistId": checklist["id"], "title": "   ", "order": 0}
    )
    assert item.status_code == 400
