from __future__ import annotations


def _create_activity(client, **extra):
    resp = client.post("/api/activities", json={"name": "Year-end gala", **extra})
    assert resp.status_code == 201
    return resp.get_json()["data"]


def _setup(client, names=("A", "B", "C", "D", "E"), quantity=2):
    activity = _create_activity(client)
    prize = client.post(
        f"/api/activities/{activity['id']}/prizes", json={"name": "Laptop", "level": 1, "quantity": quantity}
    ).get_json()["data"]
    resp = client.post(
        f"/api/activities/{activity['id']}/participants/import",
        json=[{"name": n, "code": f"C{i}", "department": "Ops"} for i, n in enumerate(names)],
    )
    assert resp.get_json()["data"] == {"imported": len(names)}
    return activity, prize


def _draw(client, activity_id, prize_id, **extra):
    return client.post("/api/lottery/draw", json={"activityId": activity_id, "prizeId": prize_id, **extra})


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "data": {"status": "ok"}, "error": None}


def test_created_prize_starts_full(client):
    activity = _create_activity(client)
    resp = client.post(
        f"/api/activities/{activity['id']}/prizes",
        json={"name": "Mug", "quantity": 4, "remainingQuantity": 0},
    )
    prize = resp.get_json()["data"]
    assert prize["quantity"] == 4
    assert prize["remainingQuantity"] == 4
    assert prize["activityId"] == activity["id"]


def test_created_participant_is_never_a_winner(client):
    activity = _create_activity(client)
    resp = client.post(
        f"/api/activities/{activity['id']}/participants",
        json={"name": "Eve", "isWinner": True, "activityId": 999},
    )
    data = resp.get_json()["data"]
    assert resp.status_code == 201
    assert data["isWinner"] is False
    assert data["activityId"] == activity["id"]


def test_draw_flow(client):
    activity, prize = _setup(client)

    resp = _draw(client, activity["id"], prize["id"], count=2, round=1)
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["data"]["prize"]["remainingQuantity"] == 0
    winners = body["data"]["winners"]
    assert len({w["id"] for w in winners}) == 2
    assert set(winners[0]) == {"id", "name", "code", "department"}

    again = _draw(client, activity["id"], prize["id"], count=1)
    error = again.get_json()["error"]
    assert again.status_code == 400
    assert error["code"] == "insufficient_inventory"
    assert error["details"] == {"remaining": 0}

    available = client.get(f"/api/activities/{activity['id']}/participants/available").get_json()["data"]
    assert len(available) == 3
    assert not ({p["id"] for p in available} & {w["id"] for w in winners})


def test_draw_defaults_to_one_winner_in_round_one(client):
    activity, prize = _setup(client)

    _draw(client, activity["id"], prize["id"])
    records = client.get(f"/api/lottery/winners/{activity['id']}/round/1").get_json()["data"]

    assert len(records) == 1
    assert records[0]["round"] == 1
    assert records[0]["participant"]["isWinner"] is True
    assert records[0]["prize"]["id"] == prize["id"]
    assert "wonAt" in records[0]


def test_draw_errors(client):
    activity, prize = _setup(client, names=("Solo",), quantity=3)

    missing_activity = _draw(client, 999, prize["id"])
    assert missing_activity.status_code == 404
    assert missing_activity.get_json()["error"]["details"] == {"resource": "activity"}

    missing_prize = _draw(client, activity["id"], 999)
    assert missing_prize.status_code == 404
    assert missing_prize.get_json()["error"]["details"] == {"resource": "prize"}

    too_many = _draw(client, activity["id"], prize["id"], count=2)
    assert too_many.status_code == 400
    assert too_many.get_json()["error"]["code"] == "insufficient_participants"
    assert too_many.get_json()["error"]["details"] == {"available": 1}

    zero = _draw(client, activity["id"], prize["id"], count=0)
    assert zero.status_code == 400
    assert zero.get_json()["error"]["code"] == "invalid_argument"

    bad_payload = client.post("/api/lottery/draw", json={"prizeId": "x"})
    assert bad_payload.status_code == 400
    assert bad_payload.get_json()["error"]["code"] == "validation_error"


def test_reset_stats_and_rounds(client):
    activity, prize = _setup(client, quantity=3)
    aid = activity["id"]

    assert client.get(f"/api/lottery/rounds/{aid}/next").get_json()["data"] == {"round": 1}
    _draw(client, aid, prize["id"], count=2, round=1)
    assert client.get(f"/api/lottery/rounds/{aid}/next").get_json()["data"] == {"round": 2}

    stats = client.get(f"/api/lottery/stats/{aid}").get_json()["data"]
    assert stats == {
        "totalParticipants": 5,
        "availableParticipants": 3,
        "totalPrizes": 3,
        "remainingPrizes": 1,
        "totalWinners": 2,
    }

    resp = client.post(f"/api/lottery/reset/{aid}")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["recordsCleared"] == 2
    assert resp.get_json()["data"]["message"]

    assert client.get(f"/api/lottery/winners/{aid}").get_json()["data"] == []
    stats = client.get(f"/api/lottery/stats/{aid}").get_json()["data"]
    assert stats["availableParticipants"] == 5
    assert stats["remainingPrizes"] == 3

    assert client.post("/api/lottery/reset/999").status_code == 404
    assert client.get("/api/lottery/stats/999").status_code == 404


def test_awarded_rows_cannot_be_deleted(client):
    activity, prize = _setup(client)
    aid = activity["id"]
    winner = _draw(client, aid, prize["id"]).get_json()["data"]["winners"][0]

    resp = client.delete(f"/api/activities/{aid}/participants/{winner['id']}")
    assert resp.status_code == 409
    assert client.delete(f"/api/activities/{aid}/prizes/{prize['id']}").status_code == 409
    assert client.delete(f"/api/activities/{aid}/participants").status_code == 409

    client.post(f"/api/lottery/reset/{aid}")
    assert client.delete(f"/api/activities/{aid}/participants/{winner['id']}").status_code == 200
    assert client.delete(f"/api/activities/{aid}/prizes/{prize['id']}").status_code == 200
    assert client.delete(f"/api/activities/{aid}/participants").get_json()["data"] == {"deleted": 4}


def test_delete_activity_cascades(client):
    activity, prize = _setup(client)
    aid = activity["id"]
    _draw(client, aid, prize["id"], count=2)

    assert client.delete(f"/api/activities/{aid}").status_code == 200
    assert client.get(f"/api/activities/{aid}").status_code == 404
    assert client.get(f"/api/lottery/winners/{aid}").get_json()["data"] == []
    assert client.get(f"/api/activities/{aid}/prizes").status_code == 404


def test_activity_detail_and_listing(client):
    first = _create_activity(client, themeType="sphere")
    second, _ = _setup(client)

    listing = client.get("/api/activities").get_json()["data"]
    assert [a["id"] for a in listing] == [second["id"], first["id"]]
    assert first["themeType"] == "sphere"
    assert first["status"] == 0

    detail = client.get(f"/api/activities/{second['id']}").get_json()["data"]
    assert len(detail["prizes"]) == 1
    assert len(detail["participants"]) == 5


def test_validation_errors(client):
    activity = _create_activity(client)
    assert client.post("/api/activities", json={}).status_code == 400
    assert client.post(f"/api/activities/{activity['id']}/prizes", json={"name": "X", "quantity": 0}).status_code == 400
    assert client.post(f"/api/activities/{activity['id']}/participants", json={"name": ""}).status_code == 400
    assert client.post(f"/api/activities/{activity['id']}/participants/import", json={"name": "x"}).status_code == 400


def test_unknown_route_uses_envelope(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "not_found"


def test_update_activity(client):
    activity = _create_activity(client)
    aid = activity["id"]

    resp = client.put(f"/api/activities/{aid}", json={"id": aid, "name": "Spring gala", "status": 1})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == 1
    assert client.get(f"/api/activities/{aid}").get_json()["data"]["name"] == "Spring gala"

    mismatch = client.put(f"/api/activities/{aid}", json={"id": aid + 1, "name": "x"})
    assert mismatch.status_code == 404
    assert client.put(f"/api/activities/{aid}", json={"status": 7}).status_code == 400
    assert client.put("/api/activities/999", json={"name": "x"}).status_code == 404


def test_update_prize(client):
    activity, prize = _setup(client, quantity=2)
    aid, pid = activity["id"], prize["id"]
    url = f"/api/activities/{aid}/prizes/{pid}"

    resp = client.put(url, json={"id": pid, "activityId": aid, "name": "Phone", "quantity": 3, "remainingQuantity": 0})
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert (data["name"], data["quantity"], data["remainingQuantity"]) == ("Phone", 3, 3)

    assert client.put(url, json={"id": pid + 1}).status_code == 404
    assert client.put(url, json={"activityId": aid + 1}).status_code == 404

    _draw(client, aid, pid)
    frozen = client.put(url, json={"quantity": 5})
    assert frozen.status_code == 409
    assert frozen.get_json()["error"]["code"] == "conflict"

    renamed = client.put(url, json={"name": "Tablet", "remainingQuantity": 3, "isWinner": True})
    assert renamed.status_code == 200
    assert renamed.get_json()["data"]["remainingQuantity"] == 2


def test_available_participants_are_ordered_by_code(client):
    activity = _create_activity(client)
    aid = activity["id"]
    client.post(
        f"/api/activities/{aid}/participants/import",
        json=[{"name": "Second", "code": "C2"}, {"name": "First", "code": "C1"}],
    )

    available = client.get(f"/api/activities/{aid}/participants/available").get_json()["data"]
    assert [p["code"] for p in available] == ["C1", "C2"]


def test_stale_write_maps_to_conflict(app):
    from sqlalchemy.orm.exc import StaleDataError

    @app.get("/_stale")
    def _stale():
        raise StaleDataError("expected to update 1 row(s); 0 were matched")

    resp = app.test_client().get("/_stale")
    assert resp.status_code == 409
    assert resp.get_json()["error"]["code"] == "concurrency_conflict"
