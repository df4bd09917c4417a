"""
Tests for the admin command center: role gate, stats, telemetry feed,
user lookup, and indexing triggers.
"""

import pytest

from academy.features.admin import router as admin_router
from academy.features.admin.service import AdminService

from conftest import USER_ID


@pytest.fixture
def admin_client(client, fake_db):
    """The default test user, promoted to admin."""
    fake_db.rows("profiles").append(
        {"id": USER_ID, "email": "coach@example.com", "role": "admin", "is_paid": True}
    )
    return client


def _seed_videos(db):
    db.rows("videos").extend([
        {"id": "v1", "title": "Squat", "transcript_text": "[00:00] Depth.", "embedding": [0.1],
         "is_published": True},
        {"id": "v2", "title": "Hinge", "transcript_text": "[00:00] Hips back.", "embedding": None,
         "is_published": True},
        {"id": "v3", "title": "Draft", "transcript_text": None, "embedding": None,
         "is_published": False},
    ])


# -- role gate --

class TestRequireAdmin:
    def test_student_is_forbidden(self, client, fake_db):
        fake_db.rows("profiles").append({"id": USER_ID, "role": "student"})
        response = client.get("/api/admin/stats")
        assert response.status_code == 403
        assert response.json()["detail"] == "Root clearance required for this node."

    def test_missing_profile_is_forbidden(self, client):
        response = client.get("/api/admin/stats")
        assert response.status_code == 403

    def test_anonymous_is_rejected(self, anon_client):
        response = anon_client.get("/api/admin/stats")
        assert response.status_code in (401, 403)


# -- stats --

class TestStats:
    def test_counts(self, admin_client, fake_db):
        _seed_videos(fake_db)
        response = admin_client.get("/api/admin/stats")
        assert response.status_code == 200
        assert response.json() == {
            "users": 1,
            "videos": 3,
            "pending_embeddings": 2,
            "indexed_videos": 1,
        }


# -- telemetry feed --

class TestLogs:
    def _seed_logs(self, db):
        db.rows("activity_logs").extend([
            {"id": 1, "event_type": "AI_EMBEDDING_START", "context": "gemini_pipeline",
             "metadata": {"video_id": "v1"}, "created_at": "2026-01-01T10:00:00+00:00"},
            {"id": 2, "event_type": "AI_EMBEDDING_FAILURE", "context": "gemini_pipeline",
             "metadata": {"video_id": "v1", "error": "quota"}, "created_at": "2026-01-01T10:00:05+00:00"},
            {"id": 3, "event_type": "STUDY_ASSET_DOWNLOAD", "context": "transcript_reader",
             "metadata": None, "user_id": USER_ID, "created_at": "2026-01-01T09:00:00+00:00"},
        ])

    def test_newest_first_with_failure_flag(self, fake_db):
        self._seed_logs(fake_db)
        logs = AdminService(fake_db).get_recent_logs(10)

        assert [log.id for log in logs] == [2, 1, 3]
        assert [log.is_failure for log in logs] == [True, False, False]
        assert logs[2].metadata == {}

    def test_limit(self, admin_client, fake_db):
        self._seed_logs(fake_db)
        response = admin_client.get("/api/admin/logs", params={"limit": 1})
        assert response.status_code == 200
        assert [log["id"] for log in response.json()] == [2]

    def test_limit_bounds(self, admin_client):
        response = admin_client.get("/api/admin/logs", params={"limit": 500})
        assert response.status_code == 422


# -- user lookup --

class TestUserLookup:
    def _seed(self, db):
        db.rows("profiles").extend([
            {"id": "33333333-3333-3333-3333-333333333333", "email": "Runner@Example.com",
             "role": "student", "is_paid": False},
            {"id": "44444444-4444-4444-4444-444444444444", "email": "lifter@example.com",
             "role": "student", "is_paid": True},
        ])

    def test_by_uuid(self, fake_db):
        self._seed(fake_db)
        (user,) = AdminService(fake_db).lookup_user("44444444-4444-4444-4444-444444444444")
        assert user.email == "lifter@example.com"
        assert fake_db.calls[-1]["filters"][0][0] == "eq"

    def test_by_partial_email_case_insensitive(self, fake_db):
        self._seed(fake_db)
        users = AdminService(fake_db).lookup_user("runner@")
        assert [u.email for u in users] == ["Runner@Example.com"]
        assert fake_db.calls[-1]["filters"][0] == ("ilike", "email", "%runner@%")

    def test_wildcards_in_query_are_literal(self, fake_db):
        fake_db.rows("profiles").extend([
            {"id": "55555555-5555-5555-5555-555555555555", "email": "a_b@example.com"},
            {"id": "66666666-6666-6666-6666-666666666666", "email": "axb@example.com"},
        ])
        service = AdminService(fake_db)

        assert [u.email for u in service.lookup_user("a_b")] == ["a_b@example.com"]
        assert fake_db.calls[-1]["filters"][0] == ("ilike", "email", "%a\\_b%")
        assert service.lookup_user("100%") == []

    def test_blank_query(self, fake_db):
        assert AdminService(fake_db).lookup_user("   ") == []
        assert fake_db.calls == []

    def test_route(self, admin_client, fake_db):
        self._seed(fake_db)
        response = admin_client.get("/api/admin/users", params={"q": "example.com"})
        assert response.status_code == 200
        # the admin's own profile matches too
        assert len(response.json()) == 3


# -- indexing triggers --

class TestIndexing:
    def test_single_video(self, admin_client, fake_db, fake_embeddings):
        _seed_videos(fake_db)
        response = admin_client.post("/api/admin/videos/v2/embedding")
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Successfully generated embedding for: Hinge",
        }
        assert len(fake_db.rows("videos")[1]["embedding"]) == 1536

    def test_single_video_without_transcript(self, admin_client, fake_db):
        _seed_videos(fake_db)
        response = admin_client.post("/api/admin/videos/v3/embedding")
        assert response.json()["success"] is False
        assert response.json()["message"] == "Video has no transcript to process."

    def test_bulk_is_scheduled_in_background(self, admin_client, fake_db, monkeypatch):
        _seed_videos(fake_db)
        ran = []
        monkeypatch.setattr(admin_router, "run_bulk_indexing", lambda: ran.append(True))

        response = admin_client.post("/api/admin/embeddings/bulk")

        assert response.status_code == 202
        assert response.json() == {
            "success": True,
            "message": "Indexing 1 videos in the background.",
            "pending": 1,
        }
        assert ran == [True]

    def test_bulk_with_nothing_pending(self, admin_client, fake_db, monkeypatch):
        ran = []
        monkeypatch.setattr(admin_router, "run_bulk_indexing", lambda: ran.append(True))

        response = admin_client.post("/api/admin/embeddings/bulk")

        assert response.json()["message"] == "All videos indexed."
        assert response.json()["pending"] == 0
        assert ran == []
