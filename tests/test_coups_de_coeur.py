import pytest


@pytest.fixture
def books(make_book):
    return [
        make_book(title="Le Petit Prince", author="Antoine de Saint-Exupéry"),
        make_book(title="L'Étranger", author="Albert Camus"),
        make_book(title="Germinal", author="Émile Zola"),
    ]


@pytest.fixture
def make_coup(client):
    def _make_coup(book_ids, title="Coups de coeur de mars", **fields):
        payload = {
            "title": title,
            "description": "La sélection du mois",
            "audioPath": "/audio/mars.mp3",
            "bookIds": book_ids,
            **fields,
        }
        response = client.post("/coups-de-coeur", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_coup


def book_ids(coup):
    return sorted(book["id"] for book in coup["books"])


def test_create_with_books(client, books, make_coup):
    coup = make_coup([books[0]["id"], books[1]["id"]])
    assert book_ids(coup) == [books[0]["id"], books[1]["id"]]
    assert coup["active"] is True
    assert coup["addedBy"]["id"] == 1


@pytest.mark.parametrize(
    "missing, label", [("title", "title"), ("description", "description"), ("audioPath", "audioPath")]
)
def test_create_requires_fields(client, books, missing, label):
    payload = {
        "title": "Sélection",
        "description": "desc",
        "audioPath": "/audio/a.mp3",
        "bookIds": [books[0]["id"]],
    }
    del payload[missing]
    response = client.post("/coups-de-coeur", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": f"{label} is required"}


def test_replace_books(client, books, make_coup):
    one, two, three = (b["id"] for b in books)
    coup = make_coup([one, two])

    response = client.put(
        f"/coups-de-coeur/{coup['id']}", json={"title": "Nouveau titre", "bookIds": [two, three]}
    )
    assert response.status_code == 200, response.text

    reread = client.get(f"/coups-de-coeur/{coup['id']}").json()
    assert book_ids(reread) == [two, three]
    assert reread["title"] == "Nouveau titre"
    assert reread["description"] == "La sélection du mois"


def test_replace_with_empty_list_clears_books(client, books, make_coup):
    coup = make_coup([b["id"] for b in books])
    response = client.put(f"/coups-de-coeur/{coup['id']}", json={"title": "Vide", "bookIds": []})
    assert response.status_code == 200
    assert client.get(f"/coups-de-coeur/{coup['id']}").json()["books"] == []


def test_replace_with_unknown_book_keeps_membership(client, books, make_coup):
    one, two, _ = (b["id"] for b in books)
    coup = make_coup([one, two], active=False)

    response = client.put(
        f"/coups-de-coeur/{coup['id']}", json={"title": "Changé", "bookIds": [two, 999]}
    )
    assert response.status_code == 404

    reread = client.get(f"/coups-de-coeur/{coup['id']}").json()
    assert book_ids(reread) == [one, two]
    assert reread["title"] == "Coups de coeur de mars"
    assert reread["active"] is False


def test_replace_validation(client, books, make_coup):
    coup = make_coup([books[0]["id"]])
    url = f"/coups-de-coeur/{coup['id']}"

    assert client.put(url, json={"bookIds": []}).json() == {"error": "title is required"}
    response = client.put(url, json={"title": "x", "bookIds": "1,2"})
    assert response.status_code == 400
    assert response.json() == {"error": "bookIds must be an array"}
    assert client.put("/coups-de-coeur/999", json={"title": "x", "bookIds": []}).status_code == 404


@pytest.mark.parametrize(
    "ids, message",
    [
        ([1.7], "bookIds must contain numeric ids"),
        (["1.7"], "bookIds must contain numeric ids"),
        ([True], "bookIds must contain numeric ids"),
        ([0], "bookIds must contain positive ids"),
        ([2**63], "bookIds contains an id out of range"),
    ],
)
def test_book_ids_must_be_whole_positive_numbers(client, books, make_coup, ids, message):
    coup = make_coup([books[0]["id"]])

    response = client.put(f"/coups-de-coeur/{coup['id']}", json={"title": "x", "bookIds": ids})
    assert response.status_code == 400
    assert response.json() == {"error": message}
    created = client.post(
        "/coups-de-coeur",
        json={"title": "y", "description": "d", "audioPath": "/audio/y.mp3", "bookIds": ids},
    )
    assert created.status_code == 400
    assert created.json() == {"error": message}
    assert [c["id"] for c in client.get("/coups-de-coeur").json()["items"]] == [coup["id"]]


def test_whole_float_ids_are_accepted(client, books, make_coup):
    coup = make_coup([float(books[1]["id"])])
    assert book_ids(coup) == [books[1]["id"]]


def test_replace_defaults_active_to_true(client, books, make_coup):
    coup = make_coup([books[0]["id"]], active=False)
    response = client.put(
        f"/coups-de-coeur/{coup['id']}", json={"title": "x", "bookIds": ["1"]}
    )
    assert response.json()["active"] is True
    assert book_ids(response.json()) == [1]


def test_single_membership(client, books, make_coup):
    one, two, three = (b["id"] for b in books)
    coup = make_coup([one])
    base = f"/coups-de-coeur/{coup['id']}/books"

    assert client.get(f"{base}/{one}").status_code == 200
    assert client.get(f"{base}/{two}").status_code == 404

    response = client.post(f"{base}/{two}")
    assert response.status_code == 201
    assert response.json() == {"coupsDeCoeurId": coup["id"], "bookId": two}

    response = client.post(base, json={"bookId": three})
    assert response.status_code == 201

    duplicate = client.post(base, json={"bookId": one})
    assert duplicate.status_code == 409

    assert client.post(f"{base}/999").status_code == 404
    assert client.post("/coups-de-coeur/999/books/1").status_code == 404

    assert client.delete(f"{base}/{two}").status_code == 204
    assert client.request("DELETE", base, json={"bookId": three}).status_code == 204
    assert client.delete(f"{base}/{two}").status_code == 404

    assert book_ids(client.get(f"/coups-de-coeur/{coup['id']}").json()) == [one]


def test_delete_coup_de_coeur(client, books, make_coup):
    coup = make_coup([books[0]["id"]])
    assert client.delete(f"/coups-de-coeur/{coup['id']}").status_code == 204
    assert client.get(f"/coups-de-coeur/{coup['id']}").status_code == 404
    # books are untouched
    assert client.get(f"/books/{books[0]['id']}").status_code == 200


def test_list_search_and_pagination(client, books, make_coup):
    make_coup([books[0]["id"]], title="Printemps")
    make_coup([books[1]["id"]], title="Été")
    latest = make_coup([books[2]["id"]], title="Automne")

    page = client.get("/coups-de-coeur", params={"limit": 2}).json()
    assert page["total"] == 3
    assert page["totalPages"] == 2
    assert page["page"] == 1
    assert [c["title"] for c in page["items"]] == ["Automne", "Été"]

    found = client.get("/coups-de-coeur", params={"search": "camus"}).json()
    assert [c["title"] for c in found["items"]] == ["Été"]

    recent = client.get("/coups-de-coeur", params={"recent": "true"}).json()
    assert [c["id"] for c in recent["items"]] == [latest["id"]]


def test_position(client, books, make_coup):
    first = make_coup([books[0]["id"]], title="Premier")
    make_coup([books[1]["id"]], title="Second")

    assert client.get("/coups-de-coeur/position", params={"id": first["id"]}).json() == {"page": 2}
    assert client.get("/coups-de-coeur/position", params={"id": 999}).status_code == 404
    assert client.get("/coups-de-coeur/position", params={"id": "abc"}).status_code == 400


def test_preview(client, books, make_coup):
    for i in range(6):
        make_coup([books[0]["id"]], title=f"Sélection {i}")

    preview = client.get("/coups-de-coeur/preview", params={"search": "sélection"}).json()
    assert len(preview) == 5
    assert set(preview[0]) == {"id", "title", "description"}
    assert client.get("/coups-de-coeur/preview", params={"search": ""}).json() == []
