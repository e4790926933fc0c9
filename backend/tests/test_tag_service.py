import pytest

from lesson_notes.api.v1.schemas.tag import TagCreate
from lesson_notes.core.models.note import Note
from lesson_notes.core.models.tag import NoteTag
from lesson_notes.core.repositories import keys
from lesson_notes.core.services.tag_service import TagService, resolve_note_tags

from .conftest import OTHER_USER_ID, USER_ID

pytestmark = pytest.mark.anyio


@pytest.fixture
def service(tag_repo, note_repo) -> TagService:
    return TagService(tag_repo, note_repo)


async def test_create_and_list_tags(service):
    created = await service.create_tag(TagCreate(name="  Grammar ", color="#3b82f6"), user_id=USER_ID)

    assert created.id.startswith("tag-")
    assert created.name == "Grammar"
    assert created.user_id == str(USER_ID)
    assert [t.id for t in await service.list_tags(USER_ID)] == [created.id]
    assert await service.list_tags(OTHER_USER_ID) == []


@pytest.mark.parametrize("name,color", [("", "#fff"), ("   ", "#fff"), ("Verbs", " ")])
async def test_create_tag_requires_name_and_color(service, name, color):
    with pytest.raises(ValueError, match="Name and color are required"):
        await service.create_tag(TagCreate(name=name, color=color), user_id=USER_ID)


async def test_delete_tag_detaches_it_but_keeps_notes(service, note_repo, store):
    tag = await service.create_tag(TagCreate(name="Verbs", color="#f00"), user_id=USER_ID)
    keep = await service.create_tag(TagCreate(name="Nouns", color="#0f0"), user_id=USER_ID)
    owner = str(USER_ID)
    await note_repo.save(Note(id="n1", user_id=owner, lesson_id="class:1", tags=[tag.id, keep.id]))
    await note_repo.save(Note(id="n2", user_id=owner, lesson_id="class:1", tags=["Verbs"]))
    await note_repo.add_to_tag_index(owner, tag.id, "n1")

    assert await service.delete_tag(tag.id, user_id=USER_ID) is True

    assert [t.id for t in await service.list_tags(USER_ID)] == [keep.id]
    assert (await note_repo.get(owner, "n1")).tags == [keep.id]
    assert (await note_repo.get(owner, "n2")).tags == []
    assert keys.tag_index_key(owner, tag.id) not in store.data


async def test_delete_missing_tag_returns_false(service):
    assert await service.delete_tag("tag-unknown", user_id=USER_ID) is False


async def test_tags_of_other_users_cannot_be_deleted(service):
    tag = await service.create_tag(TagCreate(name="Verbs", color="#f00"), user_id=USER_ID)
    assert await service.delete_tag(tag.id, user_id=OTHER_USER_ID) is False
    assert len(await service.list_tags(USER_ID)) == 1


def test_resolve_note_tags_skips_dangling_references():
    verbs = NoteTag(id="tag-1", name="Verbs", color="#f00", user_id="u")
    nouns = NoteTag(id="tag-2", name="Nouns", color="#0f0", user_id="u")
    note = Note(user_id="u", lesson_id="class:1", tags=["tag-2", "tag-gone", "tag-1"])

    assert resolve_note_tags(note, [verbs, nouns]) == [nouns, verbs]


async def test_delete_tag_keeps_unmodelled_note_keys(service, note_repo, store):
    tag = await service.create_tag(TagCreate(name="Verbs", color="#f00"), user_id=USER_ID)
    owner = str(USER_ID)
    await note_repo.save(Note(id="n1", user_id=owner, lesson_id="class:1", tags=[tag.id]))
    store.data[keys.note_key(owner, "n1")]["isPinned"] = True

    await service.delete_tag(tag.id, user_id=USER_ID)

    stored = store.data[keys.note_key(owner, "n1")]
    assert stored["tags"] == []
    assert stored["isPinned"] is True
