import pytest


@pytest.fixture
def assignment(client, make_user, make_book, statuses):
    reader = make_user("Premier Lecteur")
    book = make_book()
    response = client.post(
        "/assignments",
        json={"readerId": reader["id"], "catalogueId": book["id"], "statusId": statuses[0]["id"]},
    )
    assert response.status_code == 201
    return response.json()


def test_history_lists_newest_first(client, assignment, make_user):
    readers = [make_user(f"Lecteur {i}", email=f"lecteur{i}@example.org") for i in range(3)]
    for reader in readers:
        response = client.post(
            f"/assignments/{assignment['id']}/readers",
            json={"readerId": reader["id"], "notes": f"pour {reader['name']}"},
        )
        assert response.status_code == 201, response.text
        assert response.json()["reader"]["email"] == reader["email"]

    history = client.get(f"/assignments/{assignment['id']}/readers").json()
    # the initial entry is written at creation
    assert len(history) == 4
    assert [h["readerId"] for h in history] == [r["id"] for r in reversed(readers)] + [
        assignment["readerId"]
    ]
    dates = [h["assignedDate"] for h in history]
    assert dates == sorted(dates, reverse=True)


def test_recording_does_not_move_current_reader(client, assignment, make_user):
    other = make_user("Autre Lecteur")
    client.post(f"/assignments/{assignment['id']}/readers", json={"readerId": other["id"]})
    current = client.get(f"/assignments/{assignment['id']}").json()
    assert current["readerId"] == assignment["readerId"]


def test_history_of_unknown_assignment(client):
    response = client.get("/assignments/999/readers")
    assert response.status_code == 404
    assert response.json() == {"error": "Assignment not found"}


def test_record_requires_reader(client, assignment):
    response = client.post(f"/assignments/{assignment['id']}/readers", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "readerId is required"}


def test_record_unknown_reader_or_assignment(client, assignment):
    response = client.post(f"/assignments/{assignment['id']}/readers", json={"readerId": 999})
    assert response.status_code == 404

    response = client.post("/assignments/999/readers", json={"readerId": assignment["readerId"]})
    assert response.status_code == 404
