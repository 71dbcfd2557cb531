from decimal import Decimal


def make_transaction(client, **overrides):
    payload = {
        "title": "Paycheck",
        "amount": "1000.00",
        "type": "income",
        "category": "Salary",
        "date": "2026-03-01T09:00:00",
    }
    payload.update(overrides)
    return client.post("/api/transactions", json=payload)


def test_create_transaction(client):
    response = make_transaction(client)
    assert response.status_code == 201
    transaction = response.json()
    assert transaction["title"] == "Paycheck"
    assert Decimal(transaction["amount"]) == Decimal("1000.00")
    assert transaction["type"] == "income"
    assert transaction["date"].startswith("2026-03-01T09:00:00")


def test_date_defaults_to_now(client):
    payload = {"title": "Coffee", "amount": 3.5, "type": "expense", "category": "Food"}
    response = client.post("/api/transactions", json=payload)
    assert response.status_code == 201
    assert response.json()["date"]


def test_timezone_aware_dates_are_stored_as_utc(client):
    transaction = make_transaction(client, date="2026-03-01T10:00:00+02:00").json()
    assert transaction["date"].startswith("2026-03-01T08:00:00")


def test_rejects_bad_type_and_amount(client):
    assert make_transaction(client, type="refund").status_code == 400
    assert make_transaction(client, amount="-5").status_code == 400
    assert make_transaction(client, amount="0").status_code == 400
    assert make_transaction(client, amount="1.999").status_code == 400


def test_list_is_newest_first(client):
    make_transaction(client, title="old", date="2026-01-01T00:00:00")
    make_transaction(client, title="new", date="2026-03-10T00:00:00")
    make_transaction(client, title="mid", date="2026-02-01T00:00:00")

    titles = [t["title"] for t in client.get("/api/transactions").json()]
    assert titles == ["new", "mid", "old"]


def test_patch_and_delete(client):
    transaction = make_transaction(client).json()

    response = client.patch(f"/api/transactions/{transaction['id']}", json={"amount": "1200.00", "category": "Bonus"})
    assert response.status_code == 200
    updated = response.json()
    assert Decimal(updated["amount"]) == Decimal("1200.00")
    assert updated["category"] == "Bonus"
    assert updated["title"] == "Paycheck"

    assert client.patch(f"/api/transactions/{transaction['id']}", json={"type": None}).status_code == 400

    response = client.delete(f"/api/transactions/{transaction['id']}")
    assert response.json() == {"message": "Transaction deleted successfully"}
    assert client.get(f"/api/transactions/{transaction['id']}").status_code == 404


def test_text_fields_are_trimmed_before_length_checks(client):
    assert make_transaction(client, title="   ").status_code == 400
    assert make_transaction(client, category=" ").status_code == 400

    transaction = make_transaction(client, title=" Bonus ", category=" Work ").json()
    assert (transaction["title"], transaction["category"]) == ("Bonus", "Work")
    assert client.patch(f"/api/transactions/{transaction['id']}", json={"category": "  "}).status_code == 400
