import pytest


@pytest.fixture
def assignment_refs(make_user, make_book, statuses):
    reader = make_user("Paul Lecteur", email="paul@example.org")
    book = make_book()
    return {"readerId": reader["id"], "catalogueId": book["id"], "statusId": statuses[0]["id"]}


def test_create_assignment_returns_joined_summaries(client, make_user, make_book, statuses):
    # admin is user 1, statuses are seeded first
    readers = [make_user(f"Lecteur {i}") for i in range(4)]
    books = [make_book(title=f"Livre {i}") for i in range(10)]
    assert readers[-1]["id"] == 5
    assert books[-1]["id"] == 10

    response = client.post(
        "/assignments", json={"readerId": 5, "catalogueId": 10, "statusId": 1}
    )
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["reader"]["id"] == 5
    assert body["catalogue"]["id"] == 10
    assert body["status"]["id"] == 1
    assert body["order"] is None
    assert body["returnedToECADate"] is None


@pytest.mark.parametrize(
    "missing, label",
    [("readerId", "readerId"), ("catalogueId", "catalogueId"), ("statusId", "statusId")],
)
def test_create_assignment_requires_field(client, assignment_refs, missing, label):
    payload = {k: v for k, v in assignment_refs.items() if k != missing}
    response = client.post("/assignments", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": f"{label} is required"}


def test_create_assignment_with_unknown_reader(client, assignment_refs):
    payload = {**assignment_refs, "readerId": 999}
    response = client.post("/assignments", json=payload)
    assert response.status_code == 404
    assert "Reader 999" in response.json()["error"]
    assert client.get("/assignments").json() == []


def test_create_assignment_writes_initial_history(client, assignment_refs):
    created = client.post("/assignments", json=assignment_refs).json()
    history = client.get(f"/assignments/{created['id']}/readers").json()
    assert len(history) == 1
    assert history[0]["readerId"] == assignment_refs["readerId"]
    assert history[0]["notes"] == "Affectation initiale"


def test_read_assignment(client, assignment_refs):
    created = client.post("/assignments", json=assignment_refs).json()

    assert client.get(f"/assignments/{created['id']}").json()["id"] == created["id"]
    assert client.get("/assignments", params={"id": created["id"]}).json()["id"] == created["id"]

    missing = client.get("/assignments/999")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Assignment not found"}


def test_non_numeric_id_is_rejected(client):
    assert client.get("/assignments/abc").status_code == 400
    assert client.get("/assignments", params={"id": "abc"}).status_code == 400


def test_list_assignments_newest_first(client, assignment_refs):
    first = client.post("/assignments", json=assignment_refs).json()
    second = client.post("/assignments", json=assignment_refs).json()
    ids = [a["id"] for a in client.get("/assignments").json()]
    assert ids == [second["id"], first["id"]]


def test_partial_update(client, assignment_refs, statuses):
    created = client.post(
        "/assignments",
        json={**assignment_refs, "notes": "urgent", "receptionDate": "2024-03-01T10:00:00"},
    ).json()

    response = client.patch(
        f"/assignments/{created['id']}",
        json={"statusId": statuses[1]["id"], "receptionDate": None},
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["status"]["id"] == statuses[1]["id"]
    assert body["receptionDate"] is None
    assert body["notes"] == "urgent"
    assert body["reader"]["id"] == assignment_refs["readerId"]


def test_update_with_dates_and_put(client, assignment_refs):
    created = client.post("/assignments", json=assignment_refs).json()
    response = client.put(
        f"/assignments/{created['id']}",
        json={"sentToReaderDate": "2024-05-02T09:30:00", "returnedToECADate": "2024-06-01T00:00:00"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["sentToReaderDate"].startswith("2024-05-02T09:30:00")
    assert body["returnedToECADate"].startswith("2024-06-01")


def test_update_rejects_null_reference_and_unknown_ids(client, assignment_refs):
    created = client.post("/assignments", json=assignment_refs).json()
    url = f"/assignments/{created['id']}"

    assert client.patch(url, json={"readerId": None}).status_code == 400
    assert client.patch(url, json={"statusId": 999}).status_code == 404
    assert client.patch("/assignments/999", json={"notes": "x"}).status_code == 404


def test_delete_keeps_history(client, assignment_refs):
    created = client.post("/assignments", json=assignment_refs).json()
    assert client.delete(f"/assignments/{created['id']}").status_code == 204
    assert client.get(f"/assignments/{created['id']}").status_code == 404
    assert client.delete(f"/assignments/{created['id']}").status_code == 404
