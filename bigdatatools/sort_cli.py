"""Command line entry for sorting a large integer file."""

from __future__ import annotations

import argparse
import os
import shutil
import time

from bigdatatools.external_sort import external_sort


def folder_of(path: str) -> str:
    """Return the part of *path* before its last '/', or *path* itself if it has none."""
    slash = path.rfind("/")
    if slash < 0:
        return path
    return path[:slash]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sort-large-file",
        description="Sort a large file of integers with an external merge sort.",
    )
    parser.add_argument("source", help="file of whitespace-separated integers")
    parser.add_argument("dest", nargs="?", help="directory for intermediate runs")
    args = parser.parse_args(argv)

    start = time.time()
    folder = folder_of(args.source)
    os.makedirs(os.path.join(folder, "outputs"), exist_ok=True)

    result = external_sort(args.source, args.dest or folder)
    shutil.move(str(result), os.path.join(folder, "output.txt"))

    print(f"Total Cost : {int(time.time() - start)} secs")
    return 0