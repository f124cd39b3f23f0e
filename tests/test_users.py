ADMIN_EMAIL = "admin@example.org"


def login(client, email, password):
    return client.post("/auth/login", json={"email": email, "password": password})


def test_create_reader(client):
    response = client.post(
        "/users",
        json={"firstName": "Marie", "lastName": "Curie", "cellPhone": "0600000000"},
    )
    assert response.status_code == 201, response.text
    user = response.json()
    assert user["name"] == "Marie Curie"
    assert user["role"] == "user"
    assert user["temporaryPassword"] is None
    assert user["passwordNeedsChange"] is False
    assert "passwordHash" not in user


def test_create_staff_gets_temporary_password(client):
    response = client.post(
        "/users", json={"email": "staff@example.org", "name": "Staff", "role": "admin"}
    )
    assert response.status_code == 201
    staff = response.json()
    assert staff["passwordNeedsChange"] is True
    assert staff["temporaryPassword"]

    login_response = login(client, "staff@example.org", staff["temporaryPassword"])
    assert login_response.status_code == 200
    assert login_response.json()["passwordNeedsChange"] is True


def test_staff_account_needs_email(client):
    response = client.post("/users", json={"name": "Sans Email", "role": "admin"})
    assert response.status_code == 400


def test_duplicate_email(client):
    client.post("/users", json={"name": "A", "email": "dup@example.org"})
    response = client.post("/users", json={"name": "B", "email": "DUP@example.org"})
    assert response.status_code == 409


def test_only_super_admin_creates_staff(client, anonymous):
    staff = client.post(
        "/users", json={"email": "admin2@example.org", "name": "Admin", "role": "admin"}
    ).json()
    token = login(anonymous, "admin2@example.org", staff["temporaryPassword"]).json()["accessToken"]
    headers = {"Authorization": f"Bearer {token}"}

    forbidden = client.post(
        "/users",
        json={"email": "admin3@example.org", "name": "Admin 3", "role": "admin"},
        headers=headers,
    )
    assert forbidden.status_code == 403

    reader = client.post("/users", json={"name": "Lecteur"}, headers=headers)
    assert reader.status_code == 201


def test_list_search_update_delete(client, make_user):
    marie = make_user("Marie Curie", email="marie@example.org")
    make_user("Pierre Curie")

    ids = [u["id"] for u in client.get("/users").json()]
    assert ids == sorted(ids, reverse=True)

    found = client.get("/users/search", params={"q": "marie"}).json()
    assert [u["id"] for u in found] == [marie["id"]]

    response = client.put(f"/users/{marie['id']}", json={"notes": "Préfère les romans", "isActive": False})
    assert response.status_code == 200
    assert response.json()["notes"] == "Préfère les romans"
    assert response.json()["isActive"] is False

    assert client.delete(f"/users/{marie['id']}").status_code == 204
    assert client.get(f"/users/{marie['id']}").status_code == 404


def test_cannot_delete_self(client):
    me = client.get("/auth/me").json()
    assert me["email"] == ADMIN_EMAIL
    response = client.delete(f"/users/{me['id']}")
    assert response.status_code == 400


def test_delete_reader_with_assignment_conflicts(client, make_user, make_book, statuses):
    reader = make_user()
    book = make_book()
    client.post(
        "/assignments",
        json={"readerId": reader["id"], "catalogueId": book["id"], "statusId": statuses[0]["id"]},
    )
    assert client.delete(f"/users/{reader['id']}").status_code == 409
