from modules.storage import MixedFileRepository


def test_create_and_get(repository):
    created = repository.create(
        path="/data/uploads/mix_1.wav",
        original_files=["beat.mp3", "take.webm"],
        duration=12.5,
        size=2205044,
    )

    fetched = repository.get(created.id)

    assert fetched == created
    assert fetched.original_files == ["beat.mp3", "take.webm"]
    assert fetched.duration == 12.5
    assert fetched.size == 2205044
    assert fetched.created_at


def test_optional_fields_default_to_none(repository):
    record = repository.create(path="/data/uploads/mix_2.wav")

    fetched = repository.get(record.id)
    assert fetched.original_files == []
    assert fetched.duration is None
    assert fetched.size is None


def test_get_missing_returns_none(repository):
    assert repository.get("does-not-exist") is None


def test_list_newest_first(repository):
    repository.create(path="a.wav", record_id="a", created_at="2026-01-01T10:00:00+00:00")
    repository.create(path="c.wav", record_id="c", created_at="2026-03-01T10:00:00+00:00")
    repository.create(path="b.wav", record_id="b", created_at="2026-02-01T10:00:00+00:00")

    assert [r.id for r in repository.list_all()] == ["c", "b", "a"]


def test_delete(repository):
    record = repository.create(path="x.wav")

    assert repository.delete(record.id) is True
    assert repository.get(record.id) is None
    assert repository.delete(record.id) is False


def test_records_persist_across_instances(tmp_path):
    url = f"sqlite:///{tmp_path / 'shared.sqlite'}"
    first = MixedFileRepository(url)
    record = first.create(path="kept.wav", original_files=["a.wav"])
    first.dispose()

    second = MixedFileRepository(url)
    try:
        assert second.get(record.id) == record
    finally:
        second.dispose()
