import pytest

from noffkit.scheduler import Scheduler, ThreadRecord, ThreadStatus


def _threads(*names):
    return [ThreadRecord(name, index) for index, name in enumerate(names, 1)]


def test_new_thread_is_just_created():
    thread = ThreadRecord("main", 0)
    assert thread.status is ThreadStatus.JUST_CREATED
    assert thread.space is None


def test_ready_to_run_marks_thread_ready():
    scheduler = Scheduler()
    (thread,) = _threads("ping")
    scheduler.ready_to_run(thread)
    assert thread.status is ThreadStatus.READY
    assert len(scheduler) == 1


def test_find_next_to_run_is_fifo():
    scheduler = Scheduler()
    threads = _threads("a", "b", "c")
    for thread in threads:
        scheduler.ready_to_run(thread)
    taken = [scheduler.find_next_to_run() for _ in threads]
    assert taken == threads
    assert len(scheduler) == 0


def test_find_next_to_run_on_empty_list_returns_none():
    assert Scheduler().find_next_to_run() is None


def test_same_thread_requeued_comes_back_last():
    scheduler = Scheduler()
    first, second = _threads("first", "second")
    scheduler.ready_to_run(first)
    scheduler.ready_to_run(second)
    scheduler.ready_to_run(scheduler.find_next_to_run())
    assert list(scheduler) == [second, first]


def test_describe_empty():
    assert Scheduler().describe() == "Ready list contents:\n"


def test_describe_lists_names_in_order():
    scheduler = Scheduler()
    for thread in _threads("forked thread", "ping"):
        scheduler.ready_to_run(thread)
    assert scheduler.describe() == "Ready list contents:\nforked threadping"


def test_initial_current_thread_is_running():
    main = ThreadRecord("main", 0)
    scheduler = Scheduler(main)
    assert scheduler.current is main
    assert main.status is ThreadStatus.RUNNING


def test_run_switches_without_finishing():
    main = ThreadRecord("main", 0)
    scheduler = Scheduler(main)
    (other,) = _threads("other")
    scheduler.ready_to_run(other)
    scheduler.ready_to_run(main)
    destroyed = scheduler.run(scheduler.find_next_to_run())
    assert destroyed is None
    assert scheduler.current is other
    assert other.status is ThreadStatus.RUNNING
    assert main.status is ThreadStatus.READY


def test_run_finishing_disposes_old_thread():
    main = ThreadRecord("main", 0)
    scheduler = Scheduler(main)
    (other,) = _threads("other")
    scheduler.ready_to_run(other)
    destroyed = scheduler.run(scheduler.find_next_to_run(), finishing=True)
    assert destroyed is main
    assert main.status is ThreadStatus.ZOMBIE
    assert scheduler.check_to_be_destroyed() is None


def test_run_finishing_without_current_thread_raises():
    scheduler = Scheduler()
    (other,) = _threads("other")
    with pytest.raises(RuntimeError):
        scheduler.run(other, finishing=True)


def test_str_of_thread_is_its_name():
    assert str(ThreadRecord("forked thread", 1)) == "forked thread"