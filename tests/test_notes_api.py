from bson import ObjectId

from smartnotes.services.summarize_service import FALLBACK_CHARS

LONG_TEXT = (
    "Meeting notes: we agreed to migrate the billing service to the new cluster next sprint, "
    "keep the legacy endpoint alive for two releases, and document the rollback procedure "
    "before anyone touches production traffic."
)


def _create(client, headers, **body):
    payload = {"noteText": "", "noteHtml": "", "tags": []}
    payload.update(body)
    response = client.post("/api/note", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_note_wire_format(client, auth_headers) -> None:
    headers = auth_headers()

    note = _create(client, headers, noteText="  Buy milk  ", tags=["home"])

    assert set(note) == {"_id", "userId", "noteText", "noteHtml", "summary", "tags", "createdAt", "updatedAt"}
    assert note["noteText"] == "Buy milk"
    assert note["noteHtml"] == ""
    assert note["tags"] == ["home"]
    # Menos de 10 palabras: el resumen es el texto tal cual
    assert note["summary"] == "Buy milk"


def test_create_note_derives_text_from_html(client, auth_headers) -> None:
    note = _create(client, auth_headers(), noteText="   ", noteHtml="<p>Hello <b>world</b></p>")

    assert note["noteText"] == "Hello world"
    assert note["noteHtml"] == "<p>Hello <b>world</b></p>"


def test_create_note_without_text_or_html_is_rejected(client, auth_headers) -> None:
    response = client.post("/api/note", json={"noteText": "", "noteHtml": "", "tags": []}, headers=auth_headers())

    assert response.status_code == 400
    assert response.json()["message"] == "noteText required"


def test_create_note_with_markup_only_html_is_rejected(client, auth_headers) -> None:
    response = client.post("/api/note", json={"noteHtml": "<p> <br/> </p>"}, headers=auth_headers())

    assert response.status_code == 400


def test_create_note_truncates_tags_to_ten(client, auth_headers) -> None:
    tags = [f"t{i}" for i in range(15)]

    note = _create(client, auth_headers(), noteText="tagged", tags=tags)

    assert note["tags"] == tags[:10]


def test_create_note_keeps_duplicate_tags_and_trims(client, auth_headers) -> None:
    note = _create(client, auth_headers(), noteText="tagged", tags=[" a ", "a", "", None, "  ", 7])

    assert note["tags"] == ["a", "a", "7"]


def test_create_note_non_list_tags_become_empty(client, auth_headers) -> None:
    note = _create(client, auth_headers(), noteText="tagged", tags="a,b")

    assert note["tags"] == []


def test_long_note_falls_back_to_truncated_summary(client, auth_headers) -> None:
    note = _create(client, auth_headers(), noteText=LONG_TEXT)

    assert note["summary"] == LONG_TEXT[:FALLBACK_CHARS]


def test_notes_require_bearer_token(client) -> None:
    assert client.get("/api/notes").status_code == 401
    assert client.post("/api/note", json={"noteText": "x"}).status_code == 401
    assert client.get("/api/notes", headers={"Authorization": "Token abc"}).status_code == 401
    response = client.get("/api/notes", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_list_filters_by_tag_newest_first(client, auth_headers) -> None:
    headers = auth_headers()
    first = _create(client, headers, noteText="first", tags=["foo"])
    _create(client, headers, noteText="second", tags=["bar"])
    third = _create(client, headers, noteText="third", tags=["bar", "foo"])

    response = client.get("/api/notes", params={"tag": "foo"}, headers=headers)

    assert response.status_code == 200
    assert [n["_id"] for n in response.json()] == [third["_id"], first["_id"]]


def test_list_passes_query_and_tag_to_the_store(client, register, monkeypatch) -> None:
    from smartnotes.repositories import note_repo

    data = register()
    headers = {"Authorization": f"Bearer {data['token']}"}
    seen = {}

    class Cursor:
        def sort(self, keys):
            seen["sort"] = keys
            return []

    class Notes:
        def find(self, filtro):
            seen["filter"] = filtro
            return Cursor()

    monkeypatch.setattr(note_repo, "get_db", lambda: {note_repo.COLLECTION: Notes()})

    response = client.get("/api/notes", params={"q": " groceries ", "tag": "home"}, headers=headers)

    assert response.status_code == 200
    assert response.json() == []
    assert seen["filter"] == {
        "user_id": data["user"]["id"],
        "$text": {"$search": "groceries"},
        "tags": "home",
    }
    assert seen["sort"][0][0] == "created_at"


def test_list_without_filters_is_newest_first(client, auth_headers) -> None:
    headers = auth_headers()
    ids = [_create(client, headers, noteText=f"note {i}")["_id"] for i in range(3)]

    response = client.get("/api/notes", headers=headers)

    assert [n["_id"] for n in response.json()] == list(reversed(ids))


def test_list_only_returns_own_notes(client, auth_headers) -> None:
    ana = auth_headers("ana@example.com")
    bob = auth_headers("bob@example.com")
    _create(client, ana, noteText="ana's note")

    assert client.get("/api/notes", headers=bob).json() == []
    assert len(client.get("/api/notes", headers=ana).json()) == 1


def test_update_note_replaces_fields(client, auth_headers) -> None:
    headers = auth_headers()
    note = _create(client, headers, noteText="draft", noteHtml="<p>draft</p>", tags=["old"])

    response = client.put(
        f"/api/note/{note['_id']}", json={"noteText": "final", "tags": ["new"]}, headers=headers
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["_id"] == note["_id"]
    assert updated["noteText"] == "final"
    assert updated["noteHtml"] == ""
    assert updated["tags"] == ["new"]
    assert updated["summary"] == "final"
    assert updated["createdAt"] == note["createdAt"]


def test_update_note_validates_text(client, auth_headers) -> None:
    headers = auth_headers()
    note = _create(client, headers, noteText="draft")

    response = client.put(f"/api/note/{note['_id']}", json={"noteText": " "}, headers=headers)

    assert response.status_code == 400


def test_other_users_note_is_not_found(client, auth_headers) -> None:
    ana = auth_headers("ana@example.com")
    bob = auth_headers("bob@example.com")
    note = _create(client, ana, noteText="private")
    missing = str(ObjectId())

    for note_id in (note["_id"], missing, "not-an-object-id"):
        put = client.put(f"/api/note/{note_id}", json={"noteText": "hijack"}, headers=bob)
        delete = client.delete(f"/api/note/{note_id}", headers=bob)
        assert put.status_code == 404
        assert delete.status_code == 404
        assert put.json()["message"] == delete.json()["message"] == "Note not found"

    # La nota de Ana sigue intacta
    notes = client.get("/api/notes", headers=ana).json()
    assert [n["noteText"] for n in notes] == ["private"]


def test_delete_then_list(client, auth_headers) -> None:
    headers = auth_headers()
    keep = _create(client, headers, noteText="keep")
    drop = _create(client, headers, noteText="drop")

    response = client.delete(f"/api/note/{drop['_id']}", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Deleted"}
    assert [n["_id"] for n in client.get("/api/notes", headers=headers).json()] == [keep["_id"]]
    assert client.delete(f"/api/note/{drop['_id']}", headers=headers).status_code == 404


def test_database_unavailable_is_generic_500(client, auth_headers, monkeypatch) -> None:
    headers = auth_headers()
    from smartnotes.infrastructure.db import mongo

    monkeypatch.setattr(mongo, "_db", None)

    response = client.get("/api/notes", headers=headers)

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to fetch notes"
