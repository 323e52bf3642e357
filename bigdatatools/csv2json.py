"""Convert '|'-separated rows of 20 numbers into a JSON array of objects."""

from __future__ import annotations

import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

FIELDS_PER_LINE = 20


def split_line(raw: str) -> list[str]:
    """Split a '|'-separated row into exactly 20 fields.

    With fewer separators the leading fields fill from the front, the last
    field always lands in the final slot and the gap stays empty.
    """
    parts = raw.split("|")
    if len(parts) > FIELDS_PER_LINE:
        raise ValueError(f"line has more than {FIELDS_PER_LINE} fields: {raw!r}")
    fields = parts[:-1] + [""] * (FIELDS_PER_LINE - len(parts))
    fields.append(parts[-1])
    return fields


def line_to_cell(fields: Sequence[str]) -> str:
    """Format 20 fields as one JSON object with keys col_1..col_20."""
    if len(fields) != FIELDS_PER_LINE:
        raise ValueError(f"expected {FIELDS_PER_LINE} fields, got {len(fields)}")
    body = ",\n".join(
        f'"col_{number}":{value}' for number, value in enumerate(fields, start=1)
    )
    return "{\n" + body + "\n}"


def distribute_lines(
    lines: Sequence[str], workers: int
) -> list[list[tuple[int, str]]]:
    """Deal numbered lines round-robin into one queue per worker."""
    if workers < 1:
        raise ValueError("workers must be at least 1")
    queues: list[list[tuple[int, str]]] = [[] for _ in range(workers)]
    for index, line in enumerate(lines):
        queues[index % workers].append((index, line))
    return queues


def _read_lines(path: str | os.PathLike) -> list[str]:
    with open(path, newline="") as handle:
        lines = handle.read().split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def convert(
    input_path: str | os.PathLike, output_path: str | os.PathLike, workers: int = 1
) -> int:
    """Convert the input file to a JSON array, parsing with *workers* threads.

    Returns the number of lines converted.
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")
    lines = _read_lines(input_path)
    if not lines:
        raise ValueError(f"{input_path} holds no lines")

    queues = distribute_lines(lines, workers)
    cells = [""] * len(lines)

    def parse(queue: list[tuple[int, str]]) -> None:
        for index, raw in queue:
            cells[index] = line_to_cell(split_line(raw))

    if workers == 1:
        parse(queues[0])
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            list(pool.map(parse, queues))

    with open(output_path, "w", newline="") as handle:
        handle.write("[\n" + ",\n".join(cells) + "\n]")
    return len(lines)