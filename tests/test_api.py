"""
HTTP surface tests - summary, new quote, transitions, updates, error mapping.

Tests:
1-5.   /summary returns string money; bad, oversized or hidden lump-sum
       row numbers map to 422 invalid_input
6.     /new fills defaults from settings
7-9.   /transition happy path, 409 invalid_transition, 422 unknown status
10-11. /update applies edits, 423 quote_locked outside DRAFT
12.    /statuses and /health
"""


def _sample_quote_json(**overrides):
    data = {
        "id": "Q-0001",
        "title": "Bathroom refit",
        "status": "DRAFT",
        "complexity_pct": 10,
        "markup_pct": 20,
        "tax_pct": 8,
        "tasks": [
            {"id": "t1", "description": "Tiling", "price": 100.0, "materials": []},
        ],
    }
    data.update(overrides)
    return data


def test_summary_endpoint(client):
    response = client.post("/api/quotes/summary", json=_sample_quote_json())
    assert response.status_code == 200
    data = response.json()
    assert data["subtotal"] == "100.00"
    assert data["complexity_amount"] == "10.00"
    assert data["markup_amount"] == "22.00"
    assert data["tax_amount"] == "10.56"
    assert data["grand_total"] == "142.56"
    assert data["grand_total_display"] == "$142.56"


def test_summary_with_materials(client):
    quote = _sample_quote_json(complexity_pct=0, markup_pct=0, tax_pct=0, tasks=[
        {"id": "t1", "price": 33.335,
         "materials": [{"name": "Grout", "quantity": 2, "unit_price": 1.005}]},
    ])
    response = client.post("/api/quotes/summary", json=quote)
    assert response.status_code == 200
    assert response.json()["subtotal"] == "35.35"


def test_summary_rejects_negative_price(client):
    quote = _sample_quote_json(tasks=[{"id": "t1", "price": -5}])
    response = client.post("/api/quotes/summary", json=quote)
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "invalid_input"
    assert body["field"] == "tasks[0].price"



def test_summary_rejects_oversized_quantity(client):
    quote = _sample_quote_json(tasks=[
        {"id": "t1", "price": 10,
         "materials": [{"name": "Sand", "quantity": 1e30, "unit_price": 1}]},
    ])
    response = client.post("/api/quotes/summary", json=quote)
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "invalid_input"
    assert body["field"] == "tasks[0].materials[0].quantity"


def test_summary_rejects_bad_row_on_lump_sum_task(client):
    quote = _sample_quote_json(tasks=[
        {"id": "t1", "price": 10, "material_mode": "lumpsum", "lump_sum_materials": 5,
         "materials": [{"name": "Paint", "quantity": 1, "unit_price": -4}]},
    ])
    response = client.post("/api/quotes/summary", json=quote)
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "invalid_input"
    assert body["field"] == "tasks[0].materials[0].unit_price"


def test_new_quote_uses_settings(client, custom_settings):
    response = client.post("/api/quotes/new", json={
        "id": "Q-9",
        "tasks": [{"id": "t1", "price": 200}],
    })
    assert response.status_code == 200
    data = response.json()
    assert data["quote"]["status"] == "DRAFT"
    assert data["quote"]["markup_pct"] == 15
    assert data["quote"]["complexity_pct"] == 5
    assert data["quote"]["tax_pct"] == 8
    # 200 -> +10.00 -> 210 -> +31.50 -> 241.50 -> +19.32
    assert data["summary"]["grand_total"] == "260.82"


def test_transition_endpoint(client):
    response = client.post("/api/quotes/transition", json={
        "quote": _sample_quote_json(),
        "status": "SENT",
    })
    assert response.status_code == 200
    assert response.json()["status"] == "SENT"


def test_transition_draft_to_accepted_conflict(client):
    response = client.post("/api/quotes/transition", json={
        "quote": _sample_quote_json(),
        "status": "ACCEPTED",
    })
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "invalid_transition"
    assert body["current"] == "DRAFT"
    assert body["requested"] == "ACCEPTED"


def test_transition_unknown_status(client):
    response = client.post("/api/quotes/transition", json={
        "quote": _sample_quote_json(),
        "status": "EXPIRED",
    })
    assert response.status_code == 422


def test_update_draft(client):
    response = client.post("/api/quotes/update", json={
        "quote": _sample_quote_json(),
        "changes": {"markup_pct": 0, "tax_pct": 0, "status": "SENT"},
    })
    assert response.status_code == 200
    data = response.json()
    assert data["quote"]["status"] == "SENT"
    assert data["summary"]["grand_total"] == "110.00"


def test_update_sent_quote_locked(client):
    response = client.post("/api/quotes/update", json={
        "quote": _sample_quote_json(status="SENT"),
        "changes": {"tasks": [{"id": "t1", "price": 150}]},
    })
    assert response.status_code == 423
    body = response.json()
    assert body["error"] == "quote_locked"
    assert body["status"] == "SENT"


def test_statuses_and_health(client):
    statuses = client.get("/api/quotes/statuses").json()
    assert [s["status"] for s in statuses] == ["DRAFT", "SENT", "ACCEPTED", "REJECTED"]
    assert statuses[1]["next"] == ["ACCEPTED", "REJECTED"]

    health = client.get("/health").json()
    assert health == {"status": "ok", "app": "quotecraft"}
