from readability_study.db import models
from readability_study.services import study_text_service


def _active_versions(db_session):
    db_session.expire_all()
    rows = db_session.query(models.StudyText).filter(models.StudyText.active.is_(True)).all()
    return sorted(row.version for row in rows)


def test_create_applies_defaults(client, db_session):
    response = client.post("/api/admin/study-text", json={"content": "Hello"})
    assert response.status_code == 201
    assert response.json()["message"] == "Study text created successfully"
    row = db_session.get(models.StudyText, response.json()["id"])
    assert row.version == "default"
    assert row.font_left == "serif"
    assert row.font_right == "sans"
    assert row.active is False


def test_create_same_version_twice_is_idempotent(client, db_session):
    first = client.post("/api/admin/study-text", json={"version": "v1", "content": "one"})
    second = client.post("/api/admin/study-text", json={"version": "v1", "content": "two"})

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["message"] == "Study text with this version already exists"
    assert db_session.query(models.StudyText).filter(models.StudyText.version == "v1").count() == 1
    assert db_session.get(models.StudyText, first.json()["id"]).content == "one"


def test_creating_active_text_deactivates_others(make_study_text, db_session):
    make_study_text("a", active=True)
    make_study_text("b", active=True)
    assert _active_versions(db_session) == ["b"]


def test_update_activation_is_exclusive(client, make_study_text, db_session):
    first = make_study_text("a", active=True)
    second = make_study_text("b")

    response = client.put("/api/admin/study-text", json={"id": second, "active": True})
    assert response.status_code == 200
    assert response.json()["message"] == "Study text updated successfully"
    assert _active_versions(db_session) == ["b"]

    client.put("/api/admin/study-text", json={"id": first, "active": True})
    assert _active_versions(db_session) == ["a"]


def test_update_keeps_fields_sent_empty(client, make_study_text, db_session):
    text_id = make_study_text("keep", active=True, font_left="mono")
    response = client.put(
        "/api/admin/study-text",
        json={"id": text_id, "version": "", "content": "", "font_right": "serif"},
    )
    assert response.status_code == 200
    row = db_session.get(models.StudyText, text_id)
    assert row.version == "keep"
    assert row.content == "keep content"
    assert row.font_left == "mono"
    assert row.font_right == "serif"
    assert row.active is True


def test_update_can_deactivate(client, make_study_text, db_session):
    text_id = make_study_text("solo", active=True)
    client.put("/api/admin/study-text", json={"id": text_id, "active": False})
    assert _active_versions(db_session) == []


def test_update_requires_existing_id(client):
    assert client.put("/api/admin/study-text", json={"content": "x"}).status_code == 400
    missing = client.put("/api/admin/study-text", json={"id": 999, "content": "x"})
    assert missing.status_code == 404
    assert missing.json() == {"error": "Study text not found"}


def test_update_to_taken_version_conflicts(client, make_study_text):
    make_study_text("taken")
    other = make_study_text("other")
    response = client.put("/api/admin/study-text", json={"id": other, "version": "taken"})
    assert response.status_code == 409
    assert "taken" in response.json()["error"]


def test_list_returns_newest_first(client, make_study_text):
    make_study_text("first")
    make_study_text("second")
    response = client.get("/api/admin/study-text")
    assert response.status_code == 200
    versions = [item["version"] for item in response.json()["data"]]
    assert versions == ["second", "first"]


def test_public_study_text_returns_legacy_content(client, make_study_text):
    text_id = make_study_text("default", active=True)
    response = client.get("/api/study-text")
    assert response.status_code == 200
    assert response.json() == {
        "id": text_id,
        "version": "default",
        "font_left": "serif",
        "font_right": "sans",
        "content": "default content",
    }


def test_public_study_text_falls_back_to_any_active(client, make_study_text):
    make_study_text("v2", active=True)
    response = client.get("/api/study-text", params={"version": "missing"})
    assert response.status_code == 200
    assert response.json()["version"] == "v2"


def test_public_study_text_ignores_inactive_version(client, make_study_text):
    make_study_text("v1")
    make_study_text("v2", active=True)
    response = client.get("/api/study-text", params={"version": "v1"})
    assert response.json()["version"] == "v2"


def test_public_study_text_not_found_without_active(client, make_study_text):
    make_study_text("idle")
    response = client.get("/api/study-text")
    assert response.status_code == 404
    assert response.json() == {"error": "No study text found"}


def test_public_study_text_prefers_passages(client, make_study_text):
    text_id = make_study_text("default", active=True)
    for order, title in [(3, "third"), (1, "first"), (2, "second")]:
        client.post(
            "/api/admin/passage",
            json={"study_text_id": text_id, "order": order, "title": title, "content": title},
        )

    data = client.get("/api/study-text").json()
    assert "content" not in data
    assert [passage["title"] for passage in data["passages"]] == ["first", "second", "third"]
    assert all(passage["study_text_id"] == text_id for passage in data["passages"])


def test_unsupported_method_is_rejected(client):
    response = client.delete("/api/admin/study-text")
    assert response.status_code == 405
    assert "error" in response.json()


def test_version_collision_on_insert_is_a_conflict(client, make_study_text, monkeypatch):
    make_study_text("v1")
    # the lookup misses, as when another request inserts the same version concurrently
    monkeypatch.setattr(study_text_service, "find_study_text_by_version", lambda db, version: None)

    response = client.post("/api/admin/study-text", json={"version": "v1", "content": "again"})
    assert response.status_code == 409
    assert response.json() == {"error": "Study text with version 'v1' already exists"}
