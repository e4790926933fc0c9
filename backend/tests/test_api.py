from lesson_notes.config import settings
from lesson_notes.core.repositories import keys

from .conftest import OTHER_USER_ID, make_lesson

API = settings.api_prefix


def create_lesson(client, lesson_id="class:1000", **overrides):
    resp = client.post(f"{API}/classes/", json=make_lesson(lesson_id, **overrides))
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_health(client):
    resp = client.get(f"{API}/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["Content-Security-Policy"].startswith("default-src 'none'")


def test_note_lifecycle(client):
    create_lesson(client)

    resp = client.post(f"{API}/notes/", json={"lessonId": "class:1000", "topicId": "greetings"})
    assert resp.status_code == 201, resp.text
    note = resp.json()
    assert note["lessonId"] == "class:1000"
    assert note["classInfo"]["lessonTitle"] == "Dutch Greetings"
    assert note["content"].startswith("# Dutch Greetings")

    resp = client.get(f"{API}/notes/{note['id']}")
    assert resp.status_code == 200
    assert resp.json()["id"] == note["id"]

    resp = client.patch(f"{API}/notes/{note['id']}", json={"content": "Eigen tekst"})
    assert resp.status_code == 200
    assert resp.json()["content"] == "Eigen tekst"

    resp = client.get(f"{API}/notes/", params={"lessonId": "class:1000"})
    assert [n["id"] for n in resp.json()] == [note["id"]]

    assert client.delete(f"{API}/notes/{note['id']}").status_code == 204
    assert client.get(f"{API}/notes/{note['id']}").status_code == 404


def test_create_note_for_unknown_lesson_is_404(client):
    resp = client.post(f"{API}/notes/", json={"lessonId": "class:404"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Lesson not found"


def test_patch_rejects_lesson_derived_fields(client):
    create_lesson(client)
    note = client.post(f"{API}/notes/", json={"lessonId": "class:1000"}).json()

    resp = client.patch(
        f"{API}/notes/{note['id']}",
        json={"classInfo": {"lessonTitle": "Forged"}},
    )

    assert resp.status_code == 422


def test_lesson_update_syncs_notes_but_not_content(client):
    create_lesson(client)
    note = client.post(
        f"{API}/notes/",
        json={"lessonId": "class:1000", "content": "Mijn aantekeningen"},
    ).json()

    resp = client.post(
        f"{API}/classes/",
        json=make_lesson(
            "class:1000",
            title="Y",
            topic="X",
            pages=[{"type": "vocabulary", "content": {"words": [{"dutch": "hond", "english": "dog"}]}}],
        ),
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["notesSynced"] == 1

    synced = client.get(f"{API}/notes/{note['id']}").json()
    assert synced["classInfo"]["lessonTitle"] == "Y"
    assert synced["classInfo"]["topicName"] == "X"
    assert [(v["word"], v["translation"]) for v in synced["vocabulary"]] == [("hond", "dog")]
    assert synced["content"] == "Mijn aantekeningen"


def test_lesson_patch_and_manual_sync(client):
    create_lesson(client)
    client.post(f"{API}/notes/", json={"lessonId": "class:1000"})

    resp = client.patch(f"{API}/classes/class:1000", json={"level": "B1"})
    assert resp.status_code == 200
    assert resp.json()["notesSynced"] == 1

    resp = client.post(f"{API}/classes/class:1000/sync-notes")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert resp.json()["updatedCount"] == 1

    assert client.patch(f"{API}/classes/class:404", json={"level": "B1"}).status_code == 404
    assert client.post(f"{API}/classes/class:404/sync-notes").status_code == 404


def test_lesson_read_list_and_delete(client):
    create_lesson(client)

    resp = client.get(f"{API}/classes/class:1000")
    assert resp.status_code == 200
    assert resp.json()["title"] == "Dutch Greetings"
    assert [lesson["id"] for lesson in client.get(f"{API}/classes/").json()] == ["class:1000"]

    assert client.delete(f"{API}/classes/class:1000").status_code == 204
    assert client.get(f"{API}/classes/class:1000").status_code == 404


def test_lesson_import_rejects_invalid_document(client):
    resp = client.post(f"{API}/classes/import", json={"title": "T", "pages": [{"type": "intro"}]})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Page 1 is missing required field: content"


def test_lesson_import(client):
    resp = client.post(
        f"{API}/classes/import",
        json={"title": "Imported", "pages": [{"type": "intro", "content": {"text": "Welkom"}}]},
    )
    assert resp.status_code == 200
    assert resp.json()["id"].startswith("class:")


def test_template_endpoint(client):
    create_lesson(client)

    blank = client.get(f"{API}/notes/template").json()
    assert blank["template"].startswith("# New Note")

    filled = client.get(f"{API}/notes/template", params={"lessonId": "class:1000"}).json()
    assert filled["lessonId"] == "class:1000"
    assert "| hallo | hello |" in filled["template"]

    assert client.get(f"{API}/notes/template", params={"lessonId": "class:404"}).status_code == 404


def test_search_endpoint(client):
    create_lesson(client)
    client.post(f"{API}/notes/", json={"lessonId": "class:1000", "title": "Dieren", "content": "De hond blaft."})

    results = client.get(f"{API}/notes/search", params={"query": "HOND"}).json()
    assert len(results) == 1
    assert results[0]["highlightedSnippet"] == "De <mark>hond</mark> blaft."
    assert results[0]["note"]["title"] == "Dieren"

    assert client.get(f"{API}/notes/search", params={"query": ""}).json() == []


def test_tags_endpoints(client):
    create_lesson(client)

    resp = client.post(f"{API}/notes/tags", json={"name": "Verbs", "color": "#f00"})
    assert resp.status_code == 201
    tag = resp.json()
    assert tag["userId"]

    note = client.post(f"{API}/notes/", json={"lessonId": "class:1000", "tags": [tag["id"]]}).json()
    assert [t["id"] for t in client.get(f"{API}/notes/tags").json()] == [tag["id"]]
    tagged = client.get(f"{API}/notes/", params={"tags": tag["id"]}).json()
    assert [n["id"] for n in tagged] == [note["id"]]

    assert client.delete(f"{API}/notes/tags/{tag['id']}").status_code == 204
    assert client.get(f"{API}/notes/{note['id']}").json()["tags"] == []
    assert client.delete(f"{API}/notes/tags/{tag['id']}").status_code == 404

    resp = client.post(f"{API}/notes/tags", json={"name": " ", "color": "#f00"})
    assert resp.status_code == 400


def test_notes_require_authentication(client):
    from lesson_notes.dependencies import get_current_user
    from lesson_notes.main import app

    app.dependency_overrides.pop(get_current_user)

    resp = client.get(f"{API}/notes/")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Authentication required"

    # Lessons are readable without signing in
    assert client.get(f"{API}/classes/").status_code == 200


def test_lesson_routes_refuse_keys_outside_lesson_space(client, store):
    owner = str(OTHER_USER_ID)
    key = keys.note_key(owner, "note-foreign")
    store.data[key] = {"id": "note-foreign", "userId": owner, "lessonId": "class:1", "content": "Van mij"}

    resp = client.post(f"{API}/classes/", json={"id": key, "title": "Overwritten"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == f"Invalid lesson id: {key}"

    assert client.patch(f"{API}/classes/{key}", json={"title": "Overwritten"}).status_code == 400
    assert client.get(f"{API}/classes/{key}").status_code == 404
    assert client.post(f"{API}/classes/{key}/sync-notes").status_code == 404
    assert client.delete(f"{API}/classes/{key}").status_code == 404

    assert store.data[key]["content"] == "Van mij"


def test_notes_cannot_be_created_against_foreign_keys(client, store):
    key = keys.tags_key(str(OTHER_USER_ID))
    store.data[key] = [{"id": "tag-1", "name": "Verbs", "color": "#f00", "userId": str(OTHER_USER_ID)}]

    resp = client.post(f"{API}/notes/", json={"lessonId": key})

    assert resp.status_code == 404
