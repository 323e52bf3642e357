"""Command line entry converting input.csv to output.json."""

from __future__ import annotations

import sys
import time

from bigdatatools.csv2json import convert

INPUT_PATH = "input.csv"
OUTPUT_PATH = "output.json"


def parse_thread_count(text: str | None) -> int:
    """Read a thread count; a missing or zero value means one thread."""
    if text is None:
        return 1
    if not text.isdigit():
        raise ValueError(f"invalid thread count: {text!r}")
    value = int(text) % 2**32
    return value or 1


def _debug(message: str) -> None:
    print(f"DEBUG >> {message}")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    start = time.time()

    threads = parse_thread_count(args[0] if args else None)
    _debug(f"I/O Path : {INPUT_PATH} -> {OUTPUT_PATH}")
    _debug(f"threads  : {threads}")

    convert(INPUT_PATH, OUTPUT_PATH, 1 if threads == 1 else threads - 1)
    _debug(f"csv2json total cost : cost : {int(time.time() - start)} secs.")
    return 0