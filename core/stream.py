"""Stage sinks and the event-stream encoding.

A sink receives PipelineStage records from exactly one run. The orchestrator
only needs ``emit(stage)`` and ``closed``.
"""

import json
import logging
import queue
import threading
import time

from config.defaults import DEFAULTS

logger = logging.getLogger(__name__)

END_OF_STREAM = "data: [DONE]\n\n"

_FINISHED = object()


def encode_stage(stage):
    """One server-sent event carrying a stage record."""
    return f"data: {json.dumps(stage.to_dict())}\n\n"


class ListSink:
    """Collects stages in memory. Used by the CLI and tests."""

    def __init__(self):
        self.stages = []
        self.closed = False

    def emit(self, stage):
        if not self.closed:
            self.stages.append(stage)

    def close(self):
        self.closed = True

    @property
    def last(self):
        return self.stages[-1] if self.stages else None


class StageChannel:
    """Thread-safe hand-off from a producing run to one consumer.

    The producer calls emit() and finally finish(). The consumer iterates;
    if it goes away it calls close(), after which emit() is a no-op. The
    iteration also ends once ``ceiling`` seconds have passed, so a stuck
    producer cannot hold the consumer forever.
    """

    def __init__(self, ceiling=None):
        self._queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self.ceiling = ceiling or DEFAULTS["pipeline_timeout"] + 15

    @property
    def closed(self):
        with self._lock:
            return self._closed

    def emit(self, stage):
        with self._lock:
            if self._closed:
                return
            self._queue.put(stage)

    def finish(self):
        self._queue.put(_FINISHED)

    def close(self):
        with self._lock:
            self._closed = True
        self._queue.put(_FINISHED)

    def __iter__(self):
        deadline = time.monotonic() + self.ceiling
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.warning("Stage channel hit its %ss ceiling", self.ceiling)
                return
            try:
                item = self._queue.get(timeout=remaining)
            except queue.Empty:
                logger.warning("Stage channel hit its %ss ceiling", self.ceiling)
                return
            if item is _FINISHED:
                return
            yield item
            if self.closed:
                return
