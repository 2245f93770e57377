import threading

from noffkit.synchlist import SynchList

TIMEOUT = 5.0


def _start(target, *args):
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


def test_fifo_order():
    items = SynchList()
    for value in ("a", "b", "c"):
        items.append(value)
    assert [items.remove_front() for _ in range(3)] == ["a", "b", "c"]


def test_len_tracks_items():
    items = SynchList()
    assert len(items) == 0
    items.append(9)
    items.append(9)
    assert len(items) == 2
    items.remove_front()
    assert len(items) == 1


def test_apply_visits_items_in_order():
    items = SynchList()
    for value in (3, 1, 2):
        items.append(value)
    seen = []
    items.apply(seen.append)
    assert seen == [3, 1, 2]
    assert len(items) == 3


def test_apply_releases_lock_after_error():
    items = SynchList()
    items.append(1)

    def boom(_):
        raise KeyError("x")

    try:
        items.apply(boom)
    except KeyError:
        pass
    items.append(2)
    assert items.remove_front() == 1
    assert items.remove_front() == 2


def test_remove_front_waits_for_append():
    items = SynchList()
    got = []
    thread = _start(lambda: got.append(items.remove_front()))
    thread.join(0.1)
    assert thread.is_alive()
    items.append("late")
    thread.join(TIMEOUT)
    assert got == ["late"]


def test_ping_pong_between_two_lists():
    this = SynchList()
    ping = SynchList()
    val = 9

    def helper():
        for _ in range(10):
            this.append(ping.remove_front())

    thread = _start(helper)
    received = []
    for _ in range(10):
        ping.append(val)
        received.append(this.remove_front())
    thread.join(TIMEOUT)
    assert not thread.is_alive()
    assert received == [val] * 10
    assert len(this) == 0 and len(ping) == 0


def test_many_producers_and_consumers_lose_nothing():
    items = SynchList()
    produced = list(range(100))
    consumed = []
    guard = threading.Lock()

    def consumer():
        for _ in range(25):
            value = items.remove_front()
            with guard:
                consumed.append(value)

    consumers = [_start(consumer) for _ in range(4)]
    for value in produced:
        items.append(value)
    for thread in consumers:
        thread.join(TIMEOUT)
    assert not any(thread.is_alive() for thread in consumers)
    assert sorted(consumed) == produced
    assert len(items) == 0