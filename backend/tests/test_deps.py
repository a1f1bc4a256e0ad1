"""Store dependency tests."""

import threading
import time

from moodscape.core import deps


def test_get_store_builds_one_store_under_concurrent_first_use(monkeypatch):
    init_calls = []

    def slow_init_db(engine):
        init_calls.append(engine)
        time.sleep(0.2)

    monkeypatch.setattr(deps, "_store", None)
    monkeypatch.setattr(deps, "init_db", slow_init_db)

    got = []
    threads = [threading.Thread(target=lambda: got.append(deps.get_store())) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(got) == 2
    assert got[0] is got[1]
    assert len(init_calls) == 1
