from __future__ import annotations

import queue
import threading

import pytest

from loadreport import ChannelClosedError, OutcomeChannel, OutcomeRecord
from loadreport.loadgen import drain_nowait


def test_iteration_stops_at_close() -> None:
    channel = OutcomeChannel()
    channel.put(OutcomeRecord.success(0.1, 200))
    channel.put(OutcomeRecord.failure("boom"))
    channel.close()
    records = channel.drain()
    assert len(records) == 2
    assert records[1].failed


def test_iteration_waits_for_late_producer() -> None:
    channel = OutcomeChannel()
    started = threading.Event()

    def producer() -> None:
        started.wait()
        with channel:
            for _ in range(10):
                channel.put(OutcomeRecord.success(0.01, 200))

    thread = threading.Thread(target=producer)
    thread.start()
    started.set()
    assert len(channel.drain()) == 10
    thread.join()


def test_put_after_close_raises() -> None:
    channel = OutcomeChannel()
    channel.close()
    assert channel.closed
    with pytest.raises(ChannelClosedError):
        channel.put(OutcomeRecord.success(0.1, 200))


def test_close_is_idempotent_and_second_drain_is_empty() -> None:
    channel = OutcomeChannel()
    channel.put(OutcomeRecord.success(0.1, 200))
    channel.close()
    channel.close()
    assert len(channel.drain()) == 1
    assert channel.drain() == []


def test_drain_nowait_stops_on_empty_queue() -> None:
    q: queue.Queue[OutcomeRecord] = queue.Queue()
    q.put(OutcomeRecord.success(0.1, 200))
    assert len(list(drain_nowait(q))) == 1
    assert list(drain_nowait(q)) == []
