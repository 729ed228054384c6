import threading
import time

from livecrawl.domain.crawl_run import CrawlRun
from livecrawl.services.frontier import Frontier


def _run(worker_count=2):
    return CrawlRun(run_id="r1", seed_url="https://example.com", worker_count=worker_count, frontier=Frontier(10))


def test_admit_queues_each_url_once():
    run = _run()
    assert run.admit("https://example.com/a")
    assert not run.admit("https://example.com/a")
    assert len(run.frontier) == 1
    assert run.visited.is_visited("https://example.com/a")


def test_admit_after_stop_is_rejected():
    run = _run()
    run.request_stop()
    assert run.stopping
    assert run.frontier.closed
    assert not run.admit("https://example.com/late")
    assert len(run.frontier) == 0


def test_finished_at_set_when_last_worker_exits():
    run = _run(worker_count=2)
    assert run.is_alive()
    run.worker_exited()
    assert run.is_alive()
    assert run.finished_at is None
    run.worker_exited()
    assert not run.is_alive()
    assert run.finished_at is not None


def test_abandon_unstarted_drops_threads_that_never_ran():
    run = _run(worker_count=3)
    run.workers.extend(threading.Thread(target=run.worker_exited) for _ in range(3))
    run.workers[0].start()

    run.abandon_unstarted(1)

    assert len(run.workers) == 1
    assert run.worker_count == 1
    assert run.join(timeout=1.0)
    assert not run.is_alive()
    assert run.finished_at is not None


def test_join_timeout_bounds_total_wait():
    run = _run(worker_count=2)
    release = threading.Event()
    run.workers.extend(threading.Thread(target=release.wait, daemon=True) for _ in range(2))
    for thread in run.workers:
        thread.start()

    start = time.monotonic()
    assert run.join(timeout=0.1) is False
    assert time.monotonic() - start < 0.5

    release.set()
    assert run.join(timeout=1.0) is True
