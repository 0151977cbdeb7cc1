from readability_study.db import models


def test_orders_are_assigned_sequentially(client, make_study_text):
    text_id = make_study_text("v1")
    ids = []
    for content in ("one", "two", "three"):
        response = client.post("/api/admin/passage", json={"study_text_id": text_id, "content": content})
        assert response.status_code == 201
        assert response.json()["message"] == "Passage created successfully"
        ids.append(response.json()["id"])

    data = client.get("/api/admin/passage", params={"study_text_id": text_id}).json()["data"]
    assert [item["order"] for item in data] == [0, 1, 2]
    assert [item["id"] for item in data] == ids


def test_orders_are_per_study_text(client, make_study_text):
    first = make_study_text("v1")
    second = make_study_text("v2")
    client.post("/api/admin/passage", json={"study_text_id": first, "content": "a"})
    client.post("/api/admin/passage", json={"study_text_id": first, "content": "b"})
    response = client.post("/api/admin/passage", json={"study_text_id": second, "content": "c"})
    passage = client.get("/api/admin/passage", params={"id": response.json()["id"]}).json()["data"]
    assert passage["order"] == 0


def test_list_is_sorted_regardless_of_creation(client, make_study_text):
    text_id = make_study_text("v1")
    for order in (5, 1, 3):
        client.post(
            "/api/admin/passage",
            json={"study_text_id": text_id, "content": f"p{order}", "order": order},
        )
    data = client.get("/api/admin/passage", params={"study_text_id": text_id}).json()["data"]
    assert [item["order"] for item in data] == [1, 3, 5]


def test_create_requires_fields(client, make_study_text):
    text_id = make_study_text("v1")
    missing_content = client.post("/api/admin/passage", json={"study_text_id": text_id})
    missing_text = client.post("/api/admin/passage", json={"content": "body"})
    assert missing_content.status_code == 400
    assert missing_text.status_code == 400
    assert missing_text.json() == {"error": "study_text_id and content are required"}


def test_create_for_unknown_study_text(client):
    response = client.post("/api/admin/passage", json={"study_text_id": 404, "content": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Study text not found"}


def test_update_overwrites_only_provided_fields(client, make_study_text, db_session):
    text_id = make_study_text("v1")
    created = client.post(
        "/api/admin/passage",
        json={"study_text_id": text_id, "content": "body", "title": "Intro", "order": 4},
    )
    passage_id = created.json()["id"]

    response = client.put(
        "/api/admin/passage",
        json={"id": passage_id, "content": "", "font_left": "mono", "order": 0},
    )
    assert response.status_code == 200
    row = db_session.get(models.Passage, passage_id)
    assert row.content == "body"
    assert row.title == "Intro"
    assert row.font_left == "mono"
    assert row.order == 0


def test_update_without_order_keeps_order(client, make_study_text, db_session):
    text_id = make_study_text("v1")
    created = client.post("/api/admin/passage", json={"study_text_id": text_id, "content": "x", "order": 7})
    client.put("/api/admin/passage", json={"id": created.json()["id"], "title": "New"})
    assert db_session.get(models.Passage, created.json()["id"]).order == 7


def test_update_errors(client):
    assert client.put("/api/admin/passage", json={"content": "x"}).json() == {"error": "ID is required"}
    response = client.put("/api/admin/passage", json={"id": 12, "content": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Passage not found"}


def test_delete_removes_passage(client, make_study_text, db_session):
    text_id = make_study_text("v1")
    created = client.post("/api/admin/passage", json={"study_text_id": text_id, "content": "x"})
    response = client.delete("/api/admin/passage", params={"id": created.json()["id"]})
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Passage deleted successfully"}
    assert db_session.get(models.Passage, created.json()["id"]) is None


def test_delete_of_missing_passage_still_succeeds(client):
    # deletion does not check existence first
    response = client.delete("/api/admin/passage", params={"id": 9999})
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_delete_requires_id(client):
    response = client.delete("/api/admin/passage")
    assert response.status_code == 400
    assert response.json() == {"error": "ID parameter is required"}


def test_get_requires_a_selector(client):
    response = client.get("/api/admin/passage")
    assert response.status_code == 400
    assert response.json() == {"error": "Either id or study_text_id parameter is required"}


def test_get_single_missing_passage(client):
    response = client.get("/api/admin/passage", params={"id": 3})
    assert response.status_code == 404
