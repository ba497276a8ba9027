from fastapi.testclient import TestClient


def _add(client: TestClient, name: str) -> str:
    response = client.post("/players", json={"name": name})
    assert response.status_code == 201
    return response.json()["id"]


def test_full_round_through_the_api(client: TestClient) -> None:
    p1, p2, p3 = (_add(client, name) for name in ("P1", "P2", "P3"))

    for pid in (p1, p2):
        assert client.post("/round/teams/A/members", json={"player_id": pid}).status_code == 200
    client.post("/round/teams/B/members", json={"player_id": p3})
    client.post("/round/teams/A/winner")
    client.put("/round/teams/A/bonus-balls", json={"count": 2})
    round_state = client.put("/round/teams/A/knock-ins", json={"count": 3}).json()

    assert round_state["team_a"]["team"]["members"] == ["P1", "P2"]
    assert round_state["team_a"]["score"]["projected_earnings"] == 310
    assert round_state["team_b"]["score"]["is_main_winner"] is False

    settle = client.post("/round/settle")
    assert settle.status_code == 200
    body = settle.json()
    assert body["earnings_a"] == 310
    assert body["earnings_b"] == 0
    totals = {p["name"]: p["cumulative_earnings"] for p in body["players"]}
    assert totals == {"P1": 155.0, "P2": 155.0, "P3": 0.0}

    after = client.get("/round").json()
    assert after["team_a"]["score"] == {
        "bonus_balls_in": 0,
        "opponent_balls_knocked_in": 0,
        "is_main_winner": False,
        "projected_earnings": 0,
    }
    assert after["team_a"]["team"]["player_ids"] == [p1, p2]

    history = client.get("/history").json()
    assert len(history) == 1
    assert history[0]["team_a"]["names"] == ["P1", "P2"]
    assert history[0]["config"]["win_prize"] == 100


def test_toggle_moves_player_between_teams(client: TestClient) -> None:
    pid = _add(client, "Solo")

    seated = client.post("/round/teams/A/members", json={"player_id": pid}).json()
    assert seated["team_a"]["selectable_player_ids"] == [pid]
    assert seated["team_b"]["selectable_player_ids"] == []

    state = client.post("/round/teams/B/members", json={"player_id": pid}).json()

    assert state["team_a"]["team"]["player_ids"] == []
    assert state["team_b"]["team"]["player_ids"] == [pid]


def test_winner_flag_is_exclusive(client: TestClient) -> None:
    client.post("/round/teams/A/winner")
    state = client.post("/round/teams/B/winner").json()

    assert state["team_a"]["score"]["is_main_winner"] is False
    assert state["team_b"]["score"]["is_main_winner"] is True


def test_settle_with_empty_team_returns_error_shape(client: TestClient) -> None:
    pid = _add(client, "Lonely")
    client.post("/round/teams/A/members", json={"player_id": pid})

    response = client.post("/round/settle")

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["code"] == "round_rejected"
    assert detail["message"] == "both teams must have members"
    assert client.get("/history").json() == []


def test_knock_in_adjust_is_clamped(client: TestClient) -> None:
    client.put("/config", json={"balls_per_team": 2})

    for _ in range(4):
        state = client.post("/round/teams/B/knock-ins/adjust", json={"delta": 1}).json()

    assert state["team_b"]["score"]["opponent_balls_knocked_in"] == 2


def test_bonus_balls_outside_tiers_fail_validation(client: TestClient) -> None:
    response = client.put("/round/teams/A/bonus-balls", json={"count": 3})

    assert response.status_code == 422


def test_unknown_team_is_rejected(client: TestClient) -> None:
    assert client.post("/round/teams/C/winner").status_code == 422


def test_ledger_endpoint_reports_consistency(client: TestClient) -> None:
    a, b = _add(client, "A1"), _add(client, "B1")
    client.post("/round/teams/A/members", json={"player_id": a})
    client.post("/round/teams/B/members", json={"player_id": b})
    client.post("/round/teams/B/winner")
    client.post("/round/settle")

    ledger = client.get("/history/ledger").json()

    assert {entry["name"]: entry["derived"] for entry in ledger} == {"A1": 0.0, "B1": 100.0}
    assert all(entry["consistent"] for entry in ledger)
