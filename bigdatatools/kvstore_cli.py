"""Command line entry running a key-value command file."""

from __future__ import annotations

import argparse
import time

from bigdatatools.kvstore import KeyValueStorage


def output_name(input_name: str) -> str:
    """Turn ``dir/name.input`` into ``name.output`` (the last five characters are replaced)."""
    filename = input_name.rsplit("/", 1)[-1]
    stem = filename[:-5] if len(filename) >= 5 else filename
    return stem + "output"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="kvstore", description="Run PUT/GET/SCAN commands against ./db/."
    )
    parser.add_argument("input", help="command file, usually named *.input")
    args = parser.parse_args(argv)

    start = time.time()
    try:
        KeyValueStorage("db").process(args.input, output_name(args.input))
    except (OSError, ValueError) as exc:
        print(f"err : {exc}")
        return 1
    print(f"Total Time Cost : {int(time.time() - start)} secs.")
    return 0