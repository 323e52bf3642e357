"""External merge sort of a large file of whitespace-separated integers."""

from __future__ import annotations

import heapq
import os
from collections import deque
from collections.abc import Iterable, Iterator
from itertools import islice
from pathlib import Path

INT_SIZE = 4
DEFAULT_BUFFER_MB = 1024


def buffer_capacity(megabytes: int) -> int:
    """Return how many 32-bit integers fit into a buffer of the given size."""
    if megabytes <= 0:
        raise ValueError("buffer size must be positive")
    return megabytes * 1024 * 1024 // INT_SIZE


def _check_buffer(max_buffer: int) -> None:
    if max_buffer <= 0:
        raise ValueError("max_buffer must be positive")


def _read_ints(path: str | os.PathLike) -> Iterator[int]:
    with open(path) as handle:
        for line in handle:
            for token in line.split():
                try:
                    yield int(token)
                except ValueError:
                    raise ValueError(f"not an integer in {path}: {token!r}") from None


def _chunks(values: Iterable[int], size: int) -> Iterator[list[int]]:
    iterator = iter(values)
    while batch := list(islice(iterator, size)):
        yield batch


def _write_values(handle, values: Iterable[int]) -> None:
    handle.writelines(f"{value}\n" for value in values)


def split_sorted_runs(
    source: str | os.PathLike, out_dir: str | os.PathLike, max_buffer: int
) -> list[Path]:
    """Split *source* into sorted run files ``part0``, ``part1``... in *out_dir*.

    Each run holds at most *max_buffer* values. An empty source still
    yields one empty run.
    """
    _check_buffer(max_buffer)
    out = Path(out_dir)
    runs: list[Path] = []
    for batch in _chunks(_read_ints(source), max_buffer):
        batch.sort()
        path = out / f"part{len(runs)}"
        with open(path, "w") as handle:
            _write_values(handle, batch)
        runs.append(path)
    if not runs:
        path = out / "part0"
        path.write_text("")
        runs.append(path)
    return runs


def merge_runs(
    first: str | os.PathLike,
    second: str | os.PathLike,
    output: str | os.PathLike,
    max_buffer: int,
) -> Path:
    """Merge two sorted run files into *output*, writing *max_buffer* values at a time."""
    _check_buffer(max_buffer)
    merged = heapq.merge(_read_ints(first), _read_ints(second))
    with open(output, "w") as handle:
        for batch in _chunks(merged, max_buffer):
            _write_values(handle, batch)
    return Path(output)


def external_sort(
    source: str | os.PathLike,
    dest_dir: str | os.PathLike,
    max_buffer: int | None = None,
) -> Path:
    """Sort *source* using run files under ``dest_dir/outputs``; return the result file."""
    if max_buffer is None:
        max_buffer = buffer_capacity(DEFAULT_BUFFER_MB)
    _check_buffer(max_buffer)
    outputs = Path(dest_dir) / "outputs"
    outputs.mkdir(parents=True, exist_ok=True)

    pool = deque(split_sorted_runs(source, outputs, max_buffer))
    merged_counter = 0
    while len(pool) > 1:
        first = pool.popleft()
        second = pool.popleft()
        target = outputs / f"merged{merged_counter}"
        pool.append(merge_runs(first, second, target, max_buffer))
        merged_counter += 1
    return pool[0]