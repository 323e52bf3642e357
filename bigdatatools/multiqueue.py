"""A set of queues filled in rotation and drained by parallel workers."""

from __future__ import annotations

import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import Any


class MultiQueue:
    """Several FIFO queues; each push goes to a queue chosen by the total count."""

    def __init__(self, count: int) -> None:
        if count < 1:
            raise ValueError("count must be at least 1")
        self.size = count
        self.queues: list[deque[Any]] = [deque() for _ in range(count)]
        self._lock = threading.Lock()

    def push(self, value: Any) -> None:
        """Put *value* into queue ``(items + 1) % count``."""
        elements = sum(len(queue) for queue in self.queues) + 1
        self.queues[elements % len(self.queues)].append(value)

    def __len__(self) -> int:
        """Number of queues not yet drained."""
        return self.size

    def _retire(self) -> None:
        with self._lock:
            self.size -= 1


def drain_count(queue_set: MultiQueue, workers: int) -> int:
    """Count the items of the first *workers* queues, one thread per queue.

    The queues keep their items; each finished worker lowers the set's size.
    """
    if not 1 <= workers <= len(queue_set.queues):
        raise ValueError("workers must be between 1 and the number of queues")

    def count(target: int) -> int:
        total = sum(1 for _ in list(queue_set.queues[target]))
        queue_set._retire()
        return total

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return sum(pool.map(count, range(workers)))