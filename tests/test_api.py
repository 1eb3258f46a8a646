"""HTTP layer: routing, auth header and response shapes."""

# pylint: disable=redefined-outer-name

from fastapi.testclient import TestClient

from ghostbill.main import app


def test_missing_user_header_is_401(client):
    bare = TestClient(app)

    assert bare.get("/recurring").status_code == 401
    assert bare.get("/recurring", headers={"X-User-Id": "nope"}).status_code == 401


def test_next_occurrence_preview(client):
    assert client.get("/recurring/next-occurrence", params={"date": "2024-01-31", "frequency": "monthly"}).json() == {
        "next_date": "2024-02-29"
    }
    assert client.get("/recurring/next-occurrence", params={"date": "2024-01-31", "frequency": "bogus"}).json() == {
        "next_date": "2024-02-29"
    }
    assert client.get("/recurring/next-occurrence", params={"date": "not-a-date"}).json() == {"next_date": None}


def test_recurring_lifecycle(client):
    created = client.post("/recurring", json={
        "merchant_name": "Rent",
        "amount": 1200,
        "frequency": "monthly",
        "start_date": "2024-01-31",
        "notifications_enabled": True,
        "notify_lead_days": 2,
        "notify_time": "08:00",
    })
    assert created.status_code == 201
    rid = created.json()["id"]
    assert created.json()["notify_on"] == "2024-01-29"

    consumed = client.post(f"/recurring/{rid}/consume").json()
    assert consumed["recurring"]["next_date"] == "2024-02-29"
    assert consumed["transaction"]["amount"] == -1200

    paused = client.post(f"/recurring/{rid}/status/paused").json()
    assert paused["status"] == "paused"
    assert client.get("/recurring/due", params={"as_of": "2030-01-01"}).json() == []

    assert client.delete(f"/recurring/{rid}").json() == {"ok": True}
    assert client.get(f"/recurring/{rid}").status_code == 404


def test_recurring_rejects_bad_date(client):
    response = client.post("/recurring", json={"merchant_name": "Gym", "amount": 30, "start_date": "31/01/2024"})

    assert response.status_code == 422


def test_transactions_and_analytics(client):
    assert client.post("/transactions", json={
        "amount": -40, "currency": "USD", "date": "2024-05-03", "merchant": "Shell", "category": "fuel",
    }).status_code == 201
    assert client.post("/transactions/income", json={"amount": 1000, "month": "2024-05-20"}).status_code == 201

    card = client.get("/analytics/savings", params={"month": "2024-05-01"}).json()
    assert card["has_income"] is True
    assert card["savings"] == 960

    assert client.get("/analytics/categories/count").json() == [{"category": "fuel", "count": 1}]
    assert client.get("/transactions/months").json() == [{"month_start": "2024-05-01", "count": 2}]
    assert client.get("/transactions/quota").json()["used"] == 2


def test_profile_tours(client, user_id):
    assert client.get("/profiles/tours/home").json() == {"tab": "home", "seen": False}

    profile = client.put("/profiles/tours/home", json={"seen": True}).json()

    assert profile["user_id"] == str(user_id)
    assert profile["seen_home_tour"] is True
    assert client.get("/profiles/tours/home").json()["seen"] is True
    assert client.get("/profiles/tours/settings").status_code == 404


def test_feedback(client):
    created = client.post("/feedback", json={"message": "  Spookie is great  ", "email": ""})

    assert created.status_code == 201
    assert created.json()["message"] == "Spookie is great"
    assert created.json()["email"] is None
    assert client.post("/feedback", json={"message": "   "}).status_code == 422


def test_export_csv(client):
    client.post("/transactions", json={"amount": -9.5, "currency": "USD", "date": "2024-05-03", "merchant": "Deli"})

    response = client.get("/export/transactions.csv", params={"kind": "expenses", "month": "2024-05-01"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "ghostbill-expenses-2024-05.csv" in response.headers["content-disposition"]
    assert response.content.endswith(b"2024-05-03,Deli,,-9.50,USD,")


def test_recurring_unknown_frequency_is_stored_as_monthly(client):
    # Lenient default, same as the scheduler: the token is masked, not rejected
    created = client.post("/recurring", json={
        "merchant_name": "Gym", "amount": 30, "frequency": "Fortnightly", "start_date": "2024-01-31",
    })

    assert created.status_code == 201
    assert created.json()["frequency"] == "monthly"


def test_recurring_non_string_frequency_is_stored_as_monthly(client):
    for token in (5, True):
        created = client.post("/recurring", json={
            "merchant_name": "Gym", "amount": 30, "frequency": token, "start_date": "2024-01-31",
        })

        assert created.status_code == 201
        assert created.json()["frequency"] == "monthly"


def test_patch_with_null_keeps_required_recurring_fields(client):
    rid = client.post("/recurring", json={
        "merchant_name": "Rent", "amount": 1200, "frequency": "weekly", "start_date": "2024-01-31",
    }).json()["id"]

    for body in ({"amount": None}, {"next_date": None}, {"frequency": None, "status": None}):
        response = client.patch(f"/recurring/{rid}", json=body)
        assert response.status_code == 200, body

    row = client.get(f"/recurring/{rid}").json()
    assert (row["amount"], row["next_date"], row["frequency"], row["status"]) == (1200, "2024-01-31", "weekly", "active")


def test_patch_with_null_keeps_required_transaction_fields(client):
    tid = client.post("/transactions", json={
        "amount": -40, "currency": "USD", "date": "2024-05-03", "merchant": "Shell", "category": "fuel",
    }).json()["id"]

    response = client.patch(f"/transactions/{tid}", json={"date": None, "amount": None, "note": "fill-up"})

    assert response.status_code == 200
    assert (response.json()["date"], response.json()["amount"], response.json()["note"]) == ("2024-05-03", -40, "fill-up")


def test_categorizer_endpoints(client):
    suggestion = client.post("/categorizer/suggest", json={"merchant": "STARBUCKS #1234"}).json()
    assert suggestion == {"category": "coffee", "confidence": 10, "merchant_key": "starbucks", "overridden": False}

    saved = client.put("/categorizer/overrides/category", json={"merchant": "Joe's Place", "category": "dining"})
    assert saved.json() == {"merchant_key": "joe s place", "category": "dining", "display_name": None}
    assert client.put("/categorizer/overrides/category", json={"merchant": "Joe's", "category": "nope"}).status_code == 422

    created = client.post("/transactions", json={"amount": -18, "currency": "USD", "date": "2024-05-03", "merchant": "Joe's Place"})
    assert created.json()["category"] == "dining"

    assert client.get("/categorizer/autocorrect", params={"merchant": "petro canada"}).json() == {"name": "Petro-Canada", "confidence": 10}
    assert client.get("/categorizer/autocorrect", params={"merchant": "zzz"}).json() is None

    assert client.delete("/categorizer/overrides", params={"merchant": "Joe's Place"}).json() == {"ok": True}
    assert client.get("/categorizer/overrides").json() == []
