"""Hand-off of outcome records from load generator workers to the aggregator.

Workers ``put`` records into an :class:`OutcomeChannel` and the channel is
closed once every worker has finished. Iterating the channel blocks until
it is closed, so a consumer never stops before the producers do.
"""

from __future__ import annotations

import asyncio
import json
import logging
import queue
import threading
from types import TracebackType
from typing import TYPE_CHECKING, Iterator, Union

if TYPE_CHECKING:
    from loadreport.metrics.models import OutcomeRecord

logger = logging.getLogger(__name__)

_CLOSED = object()

PollableQueue = Union["queue.Queue[OutcomeRecord]", "asyncio.Queue[OutcomeRecord]"]


class ChannelClosedError(RuntimeError):
    """Raised when a record is put into a channel that was already closed."""


class OutcomeChannel:
    def __init__(self) -> None:
        self._queue: queue.Queue[object] = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._exhausted = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, record: OutcomeRecord) -> None:
        with self._lock:
            if self._closed:
                msg = "Cannot put a record into a closed channel"
                raise ChannelClosedError(msg)
            self._queue.put_nowait(record)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    def __enter__(self) -> OutcomeChannel:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __iter__(self) -> Iterator[OutcomeRecord]:
        if self._exhausted:
            return
        count = 0
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                break
            count += 1
            yield item  # type: ignore[misc]
        self._exhausted = True
        logger.debug(json.dumps({"event": "channel_drained", "records": count}))

    def drain(self) -> list[OutcomeRecord]:
        return list(self)


def drain_nowait(source: PollableQueue) -> Iterator[OutcomeRecord]:
    """Yield whatever is queued right now and stop at the first empty poll.

    Records enqueued after the poll comes up empty are not seen, so callers
    must make sure every producer has finished first.
    """
    count = 0
    while True:
        try:
            record = source.get_nowait()
        except (queue.Empty, asyncio.QueueEmpty):
            break
        count += 1
        yield record
    logger.debug(json.dumps({"event": "queue_polled", "records": count}))
