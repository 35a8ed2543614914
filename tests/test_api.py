"""Integration tests for the REST API.

Uses FastAPI's TestClient against an in-memory SQLite database injected by
overriding ``get_db``. The startup hook is not run.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import add_person, log_in_as
from drama_tracker.core.config import settings
from drama_tracker.models.drama import Drama
from drama_tracker.models.person import Person
from drama_tracker.models.vote import Vote

# ── Health ────────────────────────────────────────────────────────────────────


class TestHealth:
    def test_health_is_public(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_root(self, client: TestClient) -> None:
        assert client.get("/").json()["status"] == "healthy"


# ── Authentication ────────────────────────────────────────────────────────────


class TestAuth:
    def test_login_sets_session_cookie(self, client: TestClient, db) -> None:
        add_person(db, "Lowri", password="secret", is_admin=True)
        resp = client.post("/api/auth/login", json={"name": "lowri", "password": "secret"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["user"]["name"] == "Lowri"
        assert body["user"]["is_admin"] is True
        assert settings.SESSION_COOKIE_NAME in resp.cookies

        me = client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.json()["name"] == "Lowri"

    def test_wrong_password(self, client: TestClient, db) -> None:
        add_person(db, "Lowri", password="secret")
        resp = client.post("/api/auth/login", json={"name": "Lowri", "password": "nope"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "unauthenticated", "detail": "Invalid name or password"}

    def test_person_without_password_cannot_log_in(self, client: TestClient, db) -> None:
        add_person(db, "Emma")
        resp = client.post("/api/auth/login", json={"name": "Emma", "password": "anything"})
        assert resp.status_code == 401

    def test_missing_fields(self, client: TestClient) -> None:
        resp = client.post("/api/auth/login", json={"name": "Lowri"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "invalid_input"

    def test_logout_clears_cookie(self, client: TestClient, db) -> None:
        add_person(db, "Lowri", password="secret")
        client.post("/api/auth/login", json={"name": "Lowri", "password": "secret"})
        assert client.get("/api/auth/me").status_code == 200

        resp = client.post("/api/auth/logout")
        assert resp.status_code == 200
        assert client.get("/api/auth/me").status_code == 401

    def test_protected_routes_need_session(self, client: TestClient, friends) -> None:
        for path in ("/api/people", "/api/dramas", "/api/statistics"):
            resp = client.get(path)
            assert resp.status_code == 401
            assert resp.json()["error"] == "unauthenticated"

    def test_tampered_cookie_is_rejected(self, client: TestClient, friends) -> None:
        client.cookies.set(settings.SESSION_COOKIE_NAME, f"{friends[0].id}.forged")
        assert client.get("/api/people").status_code == 401


# ── People ────────────────────────────────────────────────────────────────────


class TestPeople:
    def test_list_is_sorted_by_name(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        names = [p["name"] for p in client.get("/api/people").json()]
        assert names == ["Alice", "Bella", "Cara", "Dani"]

    def test_create_with_default_icon(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.post("/api/people", json={"name": "  Sofia  "})
        assert resp.status_code == 201
        assert resp.json()["name"] == "Sofia"
        assert resp.json()["icon"] == "👤"

    def test_duplicate_name_ignores_case(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.post("/api/people", json={"name": "bella"})
        assert resp.status_code == 409
        assert resp.json()["error"] == "conflict"

    def test_empty_name(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.post("/api/people", json={"name": "   "})
        assert resp.status_code == 400

    def test_get_includes_dramas(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        body = client.get(f"/api/people/{friends[1].id}").json()
        assert [d["title"] for d in body["dramas"]] == ["Group chat meltdown"]

    def test_get_missing(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        assert client.get("/api/people/999").status_code == 404

    def test_update_keeps_icon_when_omitted(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.put(f"/api/people/{friends[1].id}", json={"name": "Bells"})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Bells"
        assert resp.json()["icon"] == "💅"

    def test_update_to_own_name_in_other_case(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.put(f"/api/people/{friends[1].id}", json={"name": "BELLA"})
        assert resp.status_code == 200

    def test_update_to_taken_name(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.put(f"/api/people/{friends[1].id}", json={"name": "cara"})
        assert resp.status_code == 409

    def test_cannot_delete_person_in_a_drama(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        resp = client.delete(f"/api/people/{friends[1].id}")
        assert resp.status_code == 400

    def test_delete_removes_votes_and_recomputes(self, client: TestClient, db, friends, drama) -> None:
        log_in_as(client, friends[0])
        client.post(f"/api/dramas/{drama.id}/vote", json={"severity": 1})
        log_in_as(client, friends[3])
        client.post(f"/api/dramas/{drama.id}/vote", json={"severity": 5})

        log_in_as(client, friends[0])
        resp = client.delete(f"/api/people/{friends[3].id}")
        assert resp.status_code == 200

        db.expire_all()
        assert db.query(Vote).count() == 1
        assert db.get(Drama, drama.id).severity == 1


class TestPasswordChange:
    def test_own_password(self, client: TestClient, db, friends) -> None:
        log_in_as(client, friends[1])
        resp = client.patch(f"/api/people/{friends[1].id}/password", json={"password": "hunter2"})
        assert resp.status_code == 200

        client.cookies.clear()
        login = client.post("/api/auth/login", json={"name": "Bella", "password": "hunter2"})
        assert login.status_code == 200

    def test_admin_can_change_anyone(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.patch(f"/api/people/{friends[2].id}/password", json={"password": "abcd"})
        assert resp.status_code == 200

    def test_non_admin_cannot_change_others(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[1])
        resp = client.patch(f"/api/people/{friends[2].id}/password", json={"password": "abcd"})
        assert resp.status_code == 403
        assert resp.json()["error"] == "forbidden"

    def test_too_short(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[1])
        resp = client.patch(f"/api/people/{friends[1].id}/password", json={"password": "abc"})
        assert resp.status_code == 400


# ── Dramas ────────────────────────────────────────────────────────────────────


class TestDramas:
    def test_create(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.post(
            "/api/dramas",
            json={
                "title": "  Birthday planning disaster ",
                "details": "Nobody agreed on a venue.",
                "participant_ids": [friends[3].id, friends[2].id],
            },
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["title"] == "Birthday planning disaster"
        assert body["severity"] == 3
        assert body["is_finished"] is False
        assert [p["name"] for p in body["participants"]] == ["Cara", "Dani"]
        assert body["created_at"].endswith("Z")

    def test_needs_two_participants(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.post("/api/dramas", json={"title": "Solo", "participant_ids": [friends[0].id]})
        assert resp.status_code == 400
        assert "at least 2 participants" in resp.json()["detail"]

    def test_unknown_participant(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.post("/api/dramas", json={"title": "Ghost", "participant_ids": [friends[0].id, 999]})
        assert resp.status_code == 400

    def test_title_required(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.post("/api/dramas", json={"title": " ", "participant_ids": [1, 2]})
        assert resp.status_code == 400

    def test_severity_out_of_range(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.post(
            "/api/dramas",
            json={"title": "Too much", "severity": 9, "participant_ids": [friends[0].id, friends[1].id]},
        )
        assert resp.status_code == 400

    def test_list_newest_first_with_votes(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        client.post(f"/api/dramas/{drama.id}/vote", json={"severity": 4})
        client.post("/api/dramas", json={"title": "Later", "participant_ids": [friends[0].id, friends[1].id]})

        body = client.get("/api/dramas").json()
        assert [d["title"] for d in body] == ["Later", "Group chat meltdown"]
        assert body[1]["votes"][0]["person"]["name"] == "Alice"

    def test_update_replaces_participants(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        resp = client.put(
            f"/api/dramas/{drama.id}",
            json={"title": "Renamed", "participant_ids": [friends[2].id, friends[3].id]},
        )
        assert resp.status_code == 200
        assert resp.json()["title"] == "Renamed"
        assert resp.json()["severity"] == 3
        assert [p["name"] for p in resp.json()["participants"]] == ["Cara", "Dani"]

    def test_update_missing(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.put("/api/dramas/999", json={"title": "x", "participant_ids": [1, 2]})
        assert resp.status_code == 404

    def test_delete_cascades_votes(self, client: TestClient, db, friends, drama) -> None:
        log_in_as(client, friends[0])
        client.post(f"/api/dramas/{drama.id}/vote", json={"severity": 2})
        assert client.delete(f"/api/dramas/{drama.id}").status_code == 200
        assert client.get(f"/api/dramas/{drama.id}").status_code == 404
        db.expire_all()
        assert db.query(Vote).count() == 0

    def test_finish_and_reopen(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        done = client.patch(f"/api/dramas/{drama.id}/finish", json={"is_finished": True}).json()
        assert done["is_finished"] is True
        assert done["finished_at"] is not None

        reopened = client.patch(f"/api/dramas/{drama.id}/finish", json={"is_finished": False}).json()
        assert reopened["is_finished"] is False
        assert reopened["finished_at"] is None

    def test_finish_needs_boolean(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        resp = client.patch(f"/api/dramas/{drama.id}/finish", json={"is_finished": "yes"})
        assert resp.status_code == 400


# ── Votes ─────────────────────────────────────────────────────────────────────


class TestVoteEndpoints:
    def test_submit_and_read_back(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        resp = client.post(f"/api/dramas/{drama.id}/vote", json={"severity": 4, "comment": "Messy"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["average_severity"] == 4
        assert body["total_votes"] == 1
        assert body["vote"]["person"]["name"] == "Alice"

        state = client.get(f"/api/dramas/{drama.id}/vote").json()
        assert state["current_user_vote"]["severity"] == 4
        assert state["current_user_vote"]["comment"] == "Messy"
        assert state["total_people"] == 4
        assert [p["name"] for p in state["pending_voters"]] == ["Bella", "Cara", "Dani"]

    def test_display_average_is_not_rounded(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        client.post(f"/api/dramas/{drama.id}/vote", json={"severity": 1})
        log_in_as(client, friends[1])
        submitted = client.post(f"/api/dramas/{drama.id}/vote", json={"severity": 2}).json()
        assert submitted["average_severity"] == 2

        state = client.get(f"/api/dramas/{drama.id}/vote").json()
        assert state["average_severity"] == 1.5
        assert client.get(f"/api/dramas/{drama.id}").json()["severity"] == 2

    def test_second_vote_replaces_first(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        client.post(f"/api/dramas/{drama.id}/vote", json={"severity": 1})
        resp = client.post(f"/api/dramas/{drama.id}/vote", json={"severity": 5})
        assert resp.json()["total_votes"] == 1
        assert resp.json()["average_severity"] == 5

    def test_requires_session(self, client: TestClient, friends, drama) -> None:
        resp = client.post(f"/api/dramas/{drama.id}/vote", json={"severity": 3})
        assert resp.status_code == 401

    def test_missing_drama(self, client: TestClient, friends) -> None:
        log_in_as(client, friends[0])
        resp = client.post("/api/dramas/999/vote", json={"severity": 3})
        assert resp.status_code == 404
        assert resp.json() == {"error": "not_found", "detail": "Drama not found"}

    def test_rejects_out_of_range(self, client: TestClient, db, friends, drama) -> None:
        log_in_as(client, friends[0])
        for severity in (0, 6):
            resp = client.post(f"/api/dramas/{drama.id}/vote", json={"severity": severity})
            assert resp.status_code == 400
            assert resp.json()["error"] == "invalid_input"
        db.expire_all()
        assert db.query(Vote).count() == 0

    def test_rejects_non_integer(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        for severity in (3.5, "3", True):
            resp = client.post(f"/api/dramas/{drama.id}/vote", json={"severity": severity})
            assert resp.status_code == 400

    def test_rejects_missing_severity(self, client: TestClient, friends, drama) -> None:
        log_in_as(client, friends[0])
        resp = client.post(f"/api/dramas/{drama.id}/vote", json={"comment": "no number"})
        assert resp.status_code == 400


# ── Statistics ────────────────────────────────────────────────────────────────


class TestStatisticsEndpoint:
    def test_bundle_with_roster_leaderboard(self, client: TestClient, db, friends, drama) -> None:
        log_in_as(client, friends[0])
        client.post(
            "/api/dramas",
            json={"title": "Round two", "participant_ids": [friends[0].id, friends[1].id]},
        )

        body = client.get("/api/statistics").json()
        assert body["total_dramas"] == 2
        assert body["per_person"][0]["count"] == 2
        assert sum(w["count"] for w in body["per_week"]) == 2
        assert body["monthly_queens"][0]["is_current_month"] is True

        leaderboard = body["leaderboard"]
        assert len(leaderboard) == db.query(Person).count()
        assert [(e["name"], e["rank"]) for e in leaderboard] == [
            ("Alice", 1),
            ("Bella", 1),
            ("Cara", 3),
            ("Dani", 4),
        ]
