def test_statuses_are_seeded_in_order(client, statuses):
    assert [s["sortOrder"] for s in statuses] == sorted(s["sortOrder"] for s in statuses)
    assert statuses[0]["name"] == "En attente de validation"


def test_create_and_filter_orders(client, make_user, make_book, statuses):
    member = make_user("Lecteur Aveugle")
    book = make_book()
    first = client.post(
        "/orders",
        json={
            "aveugleId": member["id"],
            "catalogueId": book["id"],
            "statusId": statuses[0]["id"],
            "deliveryMethod": "envoi_postal",
        },
    )
    assert first.status_code == 201, first.text
    assert first.json()["aveugle"]["id"] == member["id"]
    assert first.json()["deliveryMethod"] == "envoi_postal"

    second = client.post(
        "/orders",
        json={"aveugleId": member["id"], "catalogueId": book["id"], "statusId": statuses[1]["id"]},
    ).json()

    assert [o["id"] for o in client.get("/orders").json()] == [second["id"], first.json()["id"]]
    filtered = client.get("/orders", params={"statusId": statuses[1]["id"]}).json()
    assert [o["id"] for o in filtered] == [second["id"]]
    assert client.get(f"/orders/{second['id']}").json()["status"]["id"] == statuses[1]["id"]


def test_order_validation(client, make_user, statuses):
    member = make_user()
    response = client.post("/orders", json={"aveugleId": member["id"], "statusId": statuses[0]["id"]})
    assert response.status_code == 400
    assert response.json() == {"error": "catalogueId is required"}

    response = client.post(
        "/orders", json={"aveugleId": member["id"], "catalogueId": 999, "statusId": statuses[0]["id"]}
    )
    assert response.status_code == 404
    assert client.get("/orders/999").status_code == 404


def test_assignment_linked_to_order(client, make_user, make_book, statuses):
    member = make_user("Membre")
    reader = make_user("Lecteur")
    book = make_book()
    order = client.post(
        "/orders",
        json={"aveugleId": member["id"], "catalogueId": book["id"], "statusId": statuses[0]["id"]},
    ).json()

    assignment = client.post(
        "/assignments",
        json={
            "readerId": reader["id"],
            "catalogueId": book["id"],
            "orderId": order["id"],
            "statusId": statuses[2]["id"],
        },
    ).json()
    assert assignment["order"]["id"] == order["id"]

    assert client.post(
        "/assignments",
        json={"readerId": reader["id"], "catalogueId": book["id"], "orderId": 999, "statusId": 1},
    ).status_code == 404
