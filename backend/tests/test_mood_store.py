"""Mood store tests."""

import threading

import pytest

from conftest import day, make_record
from moodscape.core.errors import NotFound, StorageUnavailable
from moodscape.schemas.category import CategoryIn


def test_upsert_same_day_keeps_latest_payload(store):
    store.upsert_record(make_record(0, score=2, note="first draft", symbol="😢"))
    store.upsert_record(make_record(0, score=5, note="second thoughts", symbol="😊"))

    views = store.list_records_with_category()
    assert len(views) == 1
    assert views[0].day_key == day(0)
    assert views[0].score == 5
    assert views[0].symbol == "😊"
    assert views[0].note == "second thoughts"


def test_upsert_replaces_search_index(store):
    store.upsert_record(make_record(0, note="first draft"))
    store.upsert_record(make_record(0, note="second thoughts"))

    assert store.search_notes("draft") == []
    assert [r.day_key for r in store.search_notes("second")] == [day(0)]


def test_list_records_newest_first(store):
    for offset in (3, 0, 5, 1):
        store.upsert_record(make_record(offset))

    assert [v.day_key for v in store.list_records_with_category()] == [day(5), day(3), day(1), day(0)]


def test_has_record_for_day_tracks_upserts_and_deletes(store):
    assert store.has_record_for_day(day(0)) is False

    store.upsert_record(make_record(0))
    assert store.has_record_for_day(day(0)) is True
    # Exact day match only, not "anything since"
    assert store.has_record_for_day(day(-1)) is False
    assert store.has_record_for_day(day(1)) is False

    store.delete_record(day(0))
    assert store.has_record_for_day(day(0)) is False


def test_delete_record_is_idempotent(store):
    store.upsert_record(make_record(0, note="walk"))
    store.delete_record(day(0))
    store.delete_record(day(0))

    assert store.list_records_with_category() == []
    assert store.search_notes("walk") == []


def test_get_record_raises_not_found(store):
    with pytest.raises(NotFound):
        store.get_record(day(0))

    store.upsert_record(make_record(0, score=4))
    assert store.get_record(day(0)).score == 4


def test_search_matches_whole_tokens_case_insensitively(store):
    store.upsert_record(make_record(0, note="Big WORK deadline, very tense."))
    store.upsert_record(make_record(1, note="Skipped my workout"))
    store.upsert_record(make_record(2, note="work from home"))

    assert {r.day_key for r in store.search_notes("work")} == {day(0), day(2)}
    assert {r.day_key for r in store.search_notes("Work")} == {day(0), day(2)}
    assert [r.day_key for r in store.search_notes("workout")] == [day(1)]


def test_search_requires_every_query_token(store):
    store.upsert_record(make_record(0, note="work meeting ran late"))
    store.upsert_record(make_record(1, note="deadline moved at work"))
    store.upsert_record(make_record(2, note="no deadline today"))

    assert [r.day_key for r in store.search_notes("work deadline")] == [day(1)]
    assert [r.day_key for r in store.search_notes("deadline, work!")] == [day(1)]
    assert store.search_notes("work deadline holiday") == []


def test_search_returns_no_duplicates(store):
    store.upsert_record(make_record(0, note="happy happy happy"))

    results = store.search_notes("happy HAPPY")
    assert len(results) == 1
    assert results[0].note == "happy happy happy"


def test_search_blank_query_returns_nothing(store):
    store.upsert_record(make_record(0, note="anything"))

    assert store.search_notes("") == []
    assert store.search_notes("  ?! ") == []


def test_insert_category_assigns_ids(store):
    first = store.insert_category(CategoryIn(name="Work", color="#FF0000"))
    second = store.insert_category(CategoryIn(name="Family", color="#00FF00"))

    assert first.id is not None
    assert second.id > first.id


def test_insert_category_with_existing_id_replaces_row(store):
    saved = store.insert_category(CategoryIn(name="Work", color="#FF0000"))
    replaced = store.insert_category(CategoryIn(id=saved.id, name="Office", color="#0000FF"))

    assert replaced.id == saved.id
    categories = store.list_categories()
    assert len(categories) == 1
    assert (categories[0].name, categories[0].color) == ("Office", "#0000FF")


def test_list_categories_sorted_by_name(store):
    for name in ("Work", "Family", "Health"):
        store.insert_category(CategoryIn(name=name, color="#123456"))

    assert [c.name for c in store.list_categories()] == ["Family", "Health", "Work"]


def test_delete_absent_category_twice_is_no_op(store):
    ghost = CategoryIn(id=999, name="Ghost", color="#000000")
    store.delete_category(ghost)
    store.delete_category(ghost)

    assert store.list_categories() == []


def test_records_join_category_fields(store):
    work = store.insert_category(CategoryIn(name="Work", color="#FF0000"))
    store.upsert_record(make_record(0, category_id=work.id))
    store.upsert_record(make_record(1))

    newest, oldest = store.list_records_with_category()
    assert (newest.category_name, newest.category_color) == (None, None)
    assert (oldest.category_name, oldest.category_color) == ("Work", "#FF0000")


def test_deleting_category_leaves_dangling_reference(store):
    work = store.insert_category(CategoryIn(name="Work", color="#FF0000"))
    store.upsert_record(make_record(0, category_id=work.id, note="busy"))

    store.delete_category(work)

    views = store.list_records_with_category()
    assert len(views) == 1
    assert views[0].category_id == work.id
    assert views[0].category_name is None
    assert views[0].category_color is None


def test_storage_failure_is_not_an_empty_result(broken_store):
    with pytest.raises(StorageUnavailable):
        broken_store.list_records_with_category()
    with pytest.raises(StorageUnavailable):
        broken_store.search_notes("work")
    with pytest.raises(StorageUnavailable):
        broken_store.has_record_for_day(day(0))
    with pytest.raises(StorageUnavailable):
        broken_store.upsert_record(make_record(0))


def test_record_subscription_sees_every_write_in_order(store):
    received = []
    subscription = store.subscribe_records(received.append)

    store.upsert_record(make_record(0, score=1))
    store.upsert_record(make_record(1, score=2))
    store.upsert_record(make_record(0, score=5))

    assert [[v.score for v in snapshot] for snapshot in received] == [[], [1], [2, 1], [2, 5]]

    subscription.cancel()
    store.delete_record(day(1))
    assert len(received) == 4

    subscription.cancel()


def test_subscription_starts_with_current_state(store):
    store.upsert_record(make_record(0))

    received = []
    store.subscribe_records(received.append)

    assert len(received) == 1
    assert received[0][0].day_key == day(0)


def test_category_changes_refresh_both_feeds(store):
    categories_seen = []
    records_seen = []
    store.subscribe_categories(categories_seen.append)
    store.subscribe_records(records_seen.append)

    family = store.insert_category(CategoryIn(name="Family", color="#00FF00"))
    store.upsert_record(make_record(0, category_id=family.id))
    store.delete_category(family)

    assert [[c.name for c in snap] for snap in categories_seen] == [[], ["Family"], []]
    assert records_seen[-2][0].category_name == "Family"
    assert records_seen[-1][0].category_name is None


def test_failing_subscriber_is_dropped(store):
    calls = []

    def explode(snapshot):
        calls.append(snapshot)
        if len(calls) > 1:
            raise RuntimeError("observer went away")

    subscription = store.subscribe_records(explode)
    store.upsert_record(make_record(0))
    store.upsert_record(make_record(1))

    assert subscription.active is False
    assert len(calls) == 2


def test_feed_missed_after_commit_is_redelivered_on_next_read(store, monkeypatch):
    received = []
    store.subscribe_records(received.append)

    original_read = store._read_views
    failures = [StorageUnavailable("database is locked")]

    def flaky_read():
        if failures:
            raise failures.pop()
        return original_read()

    monkeypatch.setattr(store, "_read_views", flaky_read)

    store.upsert_record(make_record(0, score=4))
    assert received == [[]]

    assert [v.score for v in store.list_records_with_category()] == [4]
    assert [[v.score for v in snapshot] for snapshot in received] == [[], [4]]

    store.list_records_with_category()
    assert len(received) == 2


def test_missed_category_feed_catches_up_when_a_subscriber_joins(store, monkeypatch):
    first = []
    store.subscribe_categories(first.append)

    original_read = store._read_categories
    failures = [StorageUnavailable("database is locked")]

    def flaky_read():
        if failures:
            raise failures.pop()
        return original_read()

    monkeypatch.setattr(store, "_read_categories", flaky_read)
    store.insert_category(CategoryIn(name="Work", color="#0000FF"))
    assert first == [[]]

    second = []
    store.subscribe_categories(second.append)

    assert [[c.name for c in snap] for snap in first] == [[], ["Work"]]
    assert [[c.name for c in snap] for snap in second] == [["Work"]]


def test_concurrent_replaces_are_never_torn(store):
    errors = []
    stop = threading.Event()

    def writer(prefix):
        for i in range(25):
            tag = f"{prefix}{i}"
            store.upsert_record(make_record(0, score=1 + i % 5, note=f"note {tag}", symbol=tag))

    def reader():
        while not stop.is_set():
            for view in store.list_records_with_category():
                if view.note != f"note {view.symbol}":
                    errors.append(view)

    writers = [threading.Thread(target=writer, args=(p,)) for p in ("a", "b")]
    readers = [threading.Thread(target=reader) for _ in range(2)]
    for t in readers + writers:
        t.start()
    for t in writers:
        t.join()
    stop.set()
    for t in readers:
        t.join()

    assert errors == []
    views = store.list_records_with_category()
    assert len(views) == 1
    assert len(store.search_notes(views[0].symbol)) == 1


def test_cancel_only_unregisters_its_own_subscription(store):
    kept, dropped = [], []
    store.subscribe_records(kept.append)
    subscription = store.subscribe_records(dropped.append)

    subscription.cancel()
    subscription.cancel()
    store.upsert_record(make_record(0))

    assert len(kept) == 2
    assert len(dropped) == 1
