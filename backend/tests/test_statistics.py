from sqlalchemy.exc import OperationalError

from readability_study.services import statistics_service


def _stats(client):
    response = client.get("/api/admin/statistics")
    assert response.status_code == 200
    assert response.json()["success"] is True
    return response.json()["data"]


def test_empty_store_reports_zeroes(client):
    data = _stats(client)
    assert data["participants"] == {"total": 0, "by_source": {}}
    assert data["quiz_performance"]["average_accuracy"] == 0.0
    assert data["reading_times"] == {"average_serif_ms": 0.0, "average_sans_ms": 0.0, "total_sessions": 0}
    assert data["gaze_points"] == {"total": 0, "by_phase": {}, "by_panel": {}}


def test_quiz_accuracy_per_question(client):
    for is_correct in (True, True, False):
        client.post("/api/quiz-response", json={"question_id": "q1", "is_correct": is_correct})
    client.post("/api/quiz-response", json={"question_id": "q2", "is_correct": False})

    performance = _stats(client)["quiz_performance"]
    assert performance["total_responses"] == 4
    assert performance["correct_answers"] == 2
    assert performance["average_accuracy"] == 50.0
    assert performance["by_question"]["q1"] == {"total": 3, "correct": 2, "accuracy": 66.67}
    assert performance["by_question"]["q2"] == {"total": 1, "correct": 0, "accuracy": 0.0}


def test_participants_and_font_preferences(client):
    for source in ("web", "web", "lab"):
        client.post("/api/participant", json={"source": source})
    for preferred in ("serif", "sans", "sans", "none"):
        client.post("/api/session", json={"preferred_font_type": preferred})

    data = _stats(client)
    assert data["participants"] == {"total": 3, "by_source": {"web": 2, "lab": 1}}
    assert data["sessions"]["total"] == 4
    assert data["font_preferences"] == {"serif": 1, "sans": 2, "total": 3}


def test_reading_times_pool_both_panels(client):
    client.post(
        "/api/session",
        json={"font_left": "serif", "font_right": "sans", "time_left_ms": 1000, "time_right_ms": 2000},
    )
    client.post(
        "/api/session",
        json={"font_left": "sans", "font_right": "serif", "time_left_ms": 3000, "time_right_ms": 0},
    )
    client.post("/api/session", json={"font_left": "serif", "font_right": "sans"})

    times = _stats(client)["reading_times"]
    assert times["total_sessions"] == 2
    assert times["average_serif_ms"] == 1000.0
    assert times["average_sans_ms"] == 2500.0


def test_accuracy_gaze_and_calibration(client):
    client.post("/api/accuracy", json={"accuracy": 90.0, "passed": True})
    client.post("/api/accuracy", json={"accuracy": 60.0, "passed": False})
    client.post("/api/gaze-point", json={"phase": "reading", "panel": "left"})
    client.post("/api/gaze-point", json={"phase": "reading", "panel": ""})
    client.post("/api/gaze-point", json={"phase": "calibration"})
    client.post("/api/calibration", json={"point_index": 0})

    data = _stats(client)
    assert data["accuracy_measurements"] == {"total": 2, "average_accuracy": 75.0, "passed": 1, "failed": 1}
    assert data["gaze_points"] == {
        "total": 3,
        "by_phase": {"reading": 2, "calibration": 1},
        "by_panel": {"left": 1},
    }
    assert data["calibration_data"] == {"total": 1}


def test_failing_section_is_left_at_zero(client, monkeypatch):
    def broken(db, report):
        raise OperationalError("SELECT", {}, Exception("table is locked"))

    monkeypatch.setattr(statistics_service, "COLLECTORS", [broken, *statistics_service.COLLECTORS[1:]])
    client.post("/api/participant", json={})
    client.post("/api/session", json={})

    data = _stats(client)
    assert data["participants"]["total"] == 0
    assert data["sessions"]["total"] == 1
