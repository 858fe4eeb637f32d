from datetime import datetime, timezone


def _ts(value):
    return datetime.fromisoformat(value)


def test_create_event_defaults(client):
    response = client.post("/api/events", json={"title": "Launch Night", "start_": "2025-06-01T22:00:00Z"})

    assert response.status_code == 201
    body = response.json()
    assert isinstance(body["id"], int)
    assert body["category"] == "Concert"
    assert body["state"] is None
    assert body["warnings"] == []
    assert _ts(body["start_"]) == datetime(2025, 6, 1, 22, 0, tzinfo=timezone.utc)


def test_naive_times_are_treated_as_utc(client):
    body = client.post("/api/events", json={"title": "Naive", "start_": "2025-06-01T22:00:00"}).json()

    assert _ts(body["start_"]) == datetime(2025, 6, 1, 22, 0, tzinfo=timezone.utc)


def test_create_event_requires_title_and_start(client):
    for payload in ({"title": "No start"}, {"start_": "2025-06-01T22:00:00Z"}, {"title": "", "start_": ""}):
        response = client.post("/api/events", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"


def test_create_event_rejects_invalid_choices(client):
    base = {"title": "Bad", "start_": "2025-06-01T22:00:00Z"}

    assert client.post("/api/events", json={**base, "category": "Opera"}).json()["error"] == "Invalid event category"
    assert client.post("/api/events", json={**base, "state": "Maybe"}).json()["error"] == "Invalid event state"
    assert client.post("/api/events", json={**base, "floor": "Roof"}).json()["error"] == "Invalid floor"


def test_percentages_are_bounded(client):
    base = {"title": "Numbers", "start_": "2025-06-01T22:00:00Z"}

    assert client.post("/api/events", json={**base, "admission": 101}).status_code == 400
    assert client.post("/api/events", json={**base, "break_even": -1}).status_code == 400
    ok = client.post("/api/events", json={**base, "admission": 100, "break_even": 0})
    assert ok.status_code == 201
    assert ok.json()["admission"] == 100
    assert ok.json()["break_even"] == 0


def test_time_warnings_do_not_block_save(client):
    response = client.post(
        "/api/events",
        json={
            "title": "Backwards",
            "start_": "2025-06-01T22:00:00Z",
            "end_": "2025-06-01T21:00:00Z",
            "doors_open": "2025-06-01T23:00:00Z",
        },
    )

    assert response.status_code == 201
    assert response.json()["warnings"] == [
        "End time should be after start time",
        "Doors open should not be after start time",
        "Doors open should not be after end time",
    ]
    stored = client.get(f"/api/events/{response.json()['id']}").json()
    assert _ts(stored["end_"]) == datetime(2025, 6, 1, 21, 0, tzinfo=timezone.utc)


def test_update_with_end_equal_to_start_warns_and_persists(client, make_event):
    event = make_event()

    response = client.put(
        f"/api/events/{event['id']}",
        json={"title": "Launch Night", "start_": "2025-06-01T22:00:00Z", "end_": "2025-06-01T22:00:00Z"},
    )

    assert response.status_code == 200
    assert response.json()["warnings"] == ["End time should be after start time"]
    stored = client.get(f"/api/events/{event['id']}").json()
    assert stored["end_"] == response.json()["end_"]


def test_update_is_a_full_row_replace(client, make_event):
    event = make_event(category="Rave", state="Option", floor="Open Air", presstext="Loud")

    response = client.put(f"/api/events/{event['id']}", json={"title": "Quiet", "start_": event["start_"]})

    body = response.json()
    assert body["title"] == "Quiet"
    assert body["category"] == "Concert"
    assert body["state"] is None
    assert body["floor"] is None
    assert body["presstext"] is None


def test_update_missing_event_returns_404(client):
    response = client.put("/api/events/404", json={"title": "Ghost", "start_": "2025-06-01T22:00:00Z"})

    assert response.status_code == 404
    assert response.json() == {"error": "Event not found"}


def test_get_missing_event_returns_404(client):
    response = client.get("/api/events/31337")

    assert response.status_code == 404
    assert response.json() == {"error": "Event not found"}


def test_out_of_range_ids_are_rejected(client):
    huge = 2**70

    for response in (
        client.get(f"/api/events/{huge}"),
        client.put(f"/api/events/{huge}", json={"title": "Ghost", "start_": "2025-06-01T22:00:00Z"}),
        client.delete(f"/api/events/{huge}"),
        client.get(f"/api/events/{huge}/artists"),
        client.post(f"/api/events/{huge}/artists", json={"artist_ids": []}),
        client.get(f"/api/events/{huge}/images"),
        client.get(f"/api/artists/{huge}"),
        client.get(f"/api/artists/{-huge}/events"),
        client.delete(f"/api/users/{huge}"),
    ):
        assert response.status_code == 400
        assert "error" in response.json()


def test_user_assignments_carry_names(client, make_user, make_event):
    responsible = make_user(name="Resa")
    sound = make_user(name="Sonic")

    event = make_event(responsible_id=responsible["id"], sound_id=sound["id"], light_id=0, artist_care_id="0")

    assert event["responsible_name"] == "Resa"
    assert event["sound_name"] == "Sonic"
    assert event["light_id"] is None
    assert event["light_name"] is None
    assert event["artist_care_id"] is None
    listed = client.get("/api/events").json()
    assert listed[0]["responsible_name"] == "Resa"


def test_unknown_user_assignment_is_rejected(client):
    response = client.post(
        "/api/events",
        json={"title": "Orphan", "start_": "2025-06-01T22:00:00Z", "artist_care_id": 77},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Unknown user ID: 77"
    assert client.get("/api/events").json() == []


def test_list_events_newest_first(client, make_event):
    make_event(title="Past", start="2024-12-31T23:00:00Z")
    make_event(title="Future", start="2026-01-01T20:00:00Z")
    make_event(title="Middle", start="2025-07-01T20:00:00+02:00")

    titles = [event["title"] for event in client.get("/api/events").json()]

    assert titles == ["Future", "Middle", "Past"]


def test_delete_event_cascades(client, make_event, make_artist):
    event = make_event()
    artist = make_artist("Cascade")
    client.post(f"/api/events/{event['id']}/artists", json={"artist_ids": [artist["id"]]})

    response = client.delete(f"/api/events/{event['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Event deleted successfully"}
    assert client.get(f"/api/events/{event['id']}").status_code == 404
    assert client.get(f"/api/artists/{artist['id']}").json()["event_count"] == 0
    assert client.delete(f"/api/events/{event['id']}").status_code == 404


def test_event_body_must_be_an_object(client):
    response = client.post("/api/events", content="[1, 2]", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body"}


def test_calendar_endpoint(client, make_event):
    make_event(title="Late Show", start="2025-06-01T22:00:00Z")

    utc = client.get("/api/events/calendar", params={"view": "week", "date": "2025-06-03"}).json()
    berlin = client.get(
        "/api/events/calendar",
        params={"view": "week", "date": "2025-06-03", "tz": "Europe/Berlin"},
    ).json()

    assert [len(day["events"]) for day in utc["days"]] == [1, 0, 0, 0, 0, 0, 0]
    assert [len(day["events"]) for day in berlin["days"]] == [0, 1, 0, 0, 0, 0, 0]
    assert berlin["days"][1]["events"][0]["title"] == "Late Show"


def test_calendar_endpoint_rejects_bad_input(client):
    assert client.get("/api/events/calendar", params={"view": "decade"}).json() == {"error": "Invalid calendar view"}
    assert client.get("/api/events/calendar", params={"date": "June"}).json() == {"error": "Invalid date"}
    assert client.get("/api/events/calendar", params={"tz": "Mars/Olympus"}).json() == {"error": "Invalid time zone"}


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
