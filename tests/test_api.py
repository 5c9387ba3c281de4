import pytest

from wichtel import create_app, parse_members

from .conftest import NoShuffle


def test_state_starts_with_everyone_available(client):
    res = client.get("/api/state")

    assert res.status_code == 200
    assert res.get_json() == {
        "members": ["A", "B", "C"],
        "availableMembers": ["A", "B", "C"],
        "revealedMembers": [],
    }


def test_draw_then_draw_again(client):
    res = client.post("/api/draw", json={"name": "A"})
    assert res.status_code == 200
    first = res.get_json()
    assert first["name"] == "A"
    assert first["giftee"] in {"B", "C"}
    assert first["alreadyRevealed"] is False

    second = client.post("/api/draw", json={"name": "A"}).get_json()
    assert second == {"name": "A", "giftee": first["giftee"], "alreadyRevealed": True}

    state = client.get("/api/state").get_json()
    assert state["availableMembers"] == ["B", "C"]
    assert state["revealedMembers"] == ["A"]


@pytest.mark.parametrize("kwargs", [
    {"json": {"name": "Z"}},
    {"json": {"name": ""}},
    {"json": {}},
    {"json": ["A"]},
    {"data": "name=A", "content_type": "application/x-www-form-urlencoded"},
    {},
])
def test_draw_rejects_bad_names(client, kwargs):
    res = client.post("/api/draw", **kwargs)

    assert res.status_code == 400
    assert "error" in res.get_json()


def test_reset(client):
    client.post("/api/draw", json={"name": "A"})
    client.post("/api/draw", json={"name": "B"})

    res = client.post("/api/reset")
    assert res.status_code == 200
    assert res.get_json()["ok"] is True

    state = client.get("/api/state").get_json()
    assert state["availableMembers"] == ["A", "B", "C"]
    assert state["revealedMembers"] == []


def test_debug_assignments(client):
    drawn = client.post("/api/draw", json={"name": "B"}).get_json()

    res = client.get("/api/debug-assignments")

    assert res.status_code == 200
    assignments = res.get_json()
    assert sorted(assignments) == ["A", "B", "C"]
    assert sorted(assignments.values()) == ["A", "B", "C"]
    assert assignments["B"] == drawn["giftee"]


def test_debug_assignments_can_be_disabled(app, client):
    app.config["SANTA_DEBUG_ENDPOINT"] = False
    assert client.get("/api/debug-assignments").status_code == 404


def test_generation_failure_is_an_internal_error(app, client):
    manager = app.extensions["round_manager"]
    manager.rng = NoShuffle()
    manager.max_attempts = 3

    res = client.post("/api/reset")

    assert res.status_code == 500
    assert "error" in res.get_json()


def test_landing_page_lists_available_members(client):
    client.post("/api/draw", json={"name": "C"})

    res = client.get("/")

    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert 'data-name="A"' in body
    assert 'data-name="B"' in body
    assert 'data-name="C"' not in body


def test_round_is_kept_between_app_instances(app):
    first = app.test_client().post("/api/draw", json={"name": "A"}).get_json()

    restarted = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": app.config["SQLALCHEMY_DATABASE_URI"],
        "SANTA_MEMBERS": "A, B, C",
    })
    again = restarted.test_client().post("/api/draw", json={"name": "A"}).get_json()

    assert again == {"name": "A", "giftee": first["giftee"], "alreadyRevealed": True}


def test_parse_members():
    assert parse_members(" A, B ,,C ") == ["A", "B", "C"]
    assert parse_members(["A", "B"]) == ["A", "B"]


@pytest.mark.parametrize("value", ["A", "A,B,A", ""])
def test_parse_members_rejects_bad_groups(value):
    with pytest.raises(ValueError):
        parse_members(value)
