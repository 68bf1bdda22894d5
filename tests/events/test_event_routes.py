from __future__ import annotations


def test_create_list_and_delete_event(client, login):
    login()
    resp = client.post(
        "/api/events",
        json={"title": "팀 회의", "start_date": "2025-06-11", "start_time": "10:00", "end_time": "11:00"},
    )
    assert resp.status_code == 201
    event_id = resp.get_json()["event"]["id"]

    listed = client.get("/api/events").get_json()["events"]
    assert [e["id"] for e in listed] == [event_id]

    assert client.delete(f"/api/events/{event_id}").status_code == 200
    assert client.get("/api/events").get_json()["events"] == []


def test_bad_date_is_400(client, login):
    login()
    resp = client.post("/api/events", json={"title": "x", "start_date": "11/06/2025"})
    assert resp.status_code == 400


def test_calendar_month_endpoint(client, login):
    login()
    body = client.get("/api/calendar/2025/6?company=false").get_json()
    assert body["success"] is True
    assert len(body["days"]) == 35


def test_leave_types_endpoint(client, login):
    login()
    codes = [t["code"] for t in client.get("/api/leave-types").get_json()["leave_types"]]
    assert codes == ["1", "0.5", "0.25"]
