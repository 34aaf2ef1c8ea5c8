"""Tests for schedule, timeline and booth post endpoints."""
import re

from mitishirube.models.post import BoothPost
from tests.conftest import add_post, add_schedule_entry, create_booth, create_user, login


class TestSchedule:
    def test_event_id_required(self, client):
        resp = client.get("/api/schedule")
        assert resp.status_code == 400
        assert resp.json() == {"error": "eventId is required"}

    def test_sorted_by_start_time(self, client, db):
        add_schedule_entry(db, "E1", "Lunch", "12:00", "13:00")
        add_schedule_entry(db, "E1", "Opening", "09:00", "09:30")
        add_schedule_entry(db, "E1", "Talk", "10:30", "11:00")
        add_schedule_entry(db, "E2", "Other event", "08:00")

        resp = client.get("/api/schedule?eventId=E1")
        assert resp.status_code == 200
        items = resp.json()["items"]
        assert [i["title"] for i in items] == ["Opening", "Talk", "Lunch"]
        starts = [i["start_time"] for i in items]
        assert starts == sorted(starts)

    def test_unknown_entry(self, client):
        resp = client.get("/api/schedule/999")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Schedule entry not found"}

    def test_private_reads_need_login(self, make_client, db):
        private = make_client(AUTH_MODE="session", PUBLIC_READS=False)
        add_schedule_entry(db, "E1", "Opening", "09:00")
        assert private.get("/api/schedule?eventId=E1").status_code == 401
        assert private.get("/api/timeline").status_code == 401
        assert private.get("/api/events").status_code == 200

        create_booth(db)
        create_user(db, "booth1", booth_id="B1")
        login(private, "booth1")
        assert private.get("/api/schedule?eventId=E1").status_code == 200


class TestPostReads:
    def test_posts_event_id_required(self, client):
        resp = client.get("/api/posts")
        assert resp.status_code == 400
        assert resp.json() == {"error": "eventId is required"}

    def test_posts_newest_first_with_booth_name(self, client, db):
        create_booth(db, "B1", "E1", "Crepes")
        add_post(db, "E1", "2024-01-01 09:00", title="first", booth_id="B1")
        add_post(db, "E1", "2024-01-01 11:00", title="third", booth_id="B1")
        add_post(db, "E1", "2024-01-01 10:00", title="second", booth_id=None)
        add_post(db, "E2", "2024-01-01 12:00", title="elsewhere", booth_id="B1")

        items = client.get("/api/posts?eventId=E1").json()["items"]
        assert [i["title"] for i in items] == ["third", "second", "first"]
        posted = [i["posted_at"] for i in items]
        assert posted == sorted(posted, reverse=True)
        assert items[0]["booth_name"] == "Crepes"
        assert items[1]["booth_name"] is None

    def test_unresolvable_booth_still_listed(self, client, db):
        add_post(db, "E1", "2024-01-01 09:00", title="orphan", booth_id="gone")
        items = client.get("/api/posts?eventId=E1").json()["items"]
        assert len(items) == 1
        assert items[0]["booth_id"] == "gone"
        assert items[0]["booth_name"] is None

    def test_per_event_posts_unbounded(self, client, db):
        for minute in range(20):
            add_post(db, "E1", f"2024-01-01 10:{minute:02d}")
        assert len(client.get("/api/posts?eventId=E1").json()["items"]) == 20

    def test_timeline_latest_fifteen_across_events(self, client, db):
        for minute in range(20):
            add_post(db, "E1" if minute % 2 else "E2", f"2024-01-01 10:{minute:02d}")
        items = client.get("/api/timeline").json()["items"]
        assert len(items) == 15
        assert items[0]["posted_at"] == "2024-01-01 10:19"
        assert items[-1]["posted_at"] == "2024-01-01 10:05"
        assert {i["event_id"] for i in items} == {"E1", "E2"}

    def test_unknown_post(self, client):
        assert client.get("/api/posts/999").status_code == 404


class TestPostCreate:
    """Event and booth come from the caller's identity."""

    def test_booth_user_binding_wins_over_body(self, client, db):
        create_booth(db, "B1", "E1")
        create_user(db, "booth1", booth_id="B1")
        login(client, "booth1")

        resp = client.post("/api/posts", json={
            "title": "t", "body": "b", "posted_at": "2024-01-01 10:00",
            "eventId": "E9", "boothId": "B9",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["ok"] is True

        post = db.get(BoothPost, data["id"])
        assert post.event_id == "E1"
        assert post.booth_id == "B1"
        assert post.posted_at == "2024-01-01 10:00"

    def test_admin_may_target_event(self, client, db):
        create_user(db, "admin", is_admin=True)
        login(client, "admin")
        resp = client.post("/api/posts", json={"title": "t", "body": "b", "posted_at": "2024-01-01 10:00", "eventId": "E5"})
        assert resp.status_code == 200
        post = db.get(BoothPost, resp.json()["id"])
        assert post.event_id == "E5"
        assert post.booth_id is None

    def test_admin_without_event_rejected(self, client, db):
        create_user(db, "admin", is_admin=True)
        login(client, "admin")
        resp = client.post("/api/posts", json={"title": "t", "body": "b", "posted_at": "2024-01-01 10:00"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "missing fields"}
        assert db.query(BoothPost).count() == 0

    def test_missing_fields(self, client, db):
        create_booth(db)
        create_user(db, "booth1", booth_id="B1")
        login(client, "booth1")
        resp = client.post("/api/posts", json={"title": "t"})
        assert resp.status_code == 400
        assert db.query(BoothPost).count() == 0

    def test_anonymous_unauthorized(self, client):
        resp = client.post("/api/posts", json={"title": "t", "body": "b", "posted_at": "2024-01-01 10:00"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized. Please login."}

    def test_server_generated_timestamp(self, make_client, db):
        server_clock = make_client(AUTH_MODE="session")
        create_booth(db)
        create_user(db, "booth1", booth_id="B1")
        login(server_clock, "booth1")

        resp = server_clock.post("/api/posts", json={"title": "t", "body": "b", "posted_at": "1999-01-01 00:00"})
        assert resp.status_code == 200
        post = db.get(BoothPost, resp.json()["id"])
        assert post.posted_at != "1999-01-01 00:00"
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", post.posted_at)

    def test_token_mode_binding(self, token_client, db):
        create_booth(db, "B1", "E1")
        create_user(db, "booth1", booth_id="B1")
        token = login(token_client, "booth1")["token"]
        resp = token_client.post(
            "/api/posts",
            json={"title": "t", "body": "b", "posted_at": "2024-01-01 10:00", "eventId": "E9"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert resp.status_code == 200
        post = db.get(BoothPost, resp.json()["id"])
        assert (post.event_id, post.booth_id) == ("E1", "B1")
