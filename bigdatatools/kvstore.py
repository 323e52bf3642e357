"""A file-backed key-value store split over ten database files.

Each database file holds lines of the form ``key value`` where the value is
exactly 128 characters, so a value can be rewritten in place. Commands are
routed to a database by the last digit of their key.
"""

from __future__ import annotations

import logging
import os
import random
from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

DB_COUNT = 10
VALUE_LENGTH = 128
MAX_BUFFERED_PUTS = 1_000_000
MAX_CACHE_SIZE = 300_000
PROGRESS_EVERY = 10_000
EMPTY = "EMPTY"


class CommandType(Enum):
    PUT = 1
    GET = 2
    SCAN = 3


_KEY_START = {"P": (CommandType.PUT, 4), "G": (CommandType.GET, 4), "S": (CommandType.SCAN, 5)}


def _kind_and_start(cmd: str) -> tuple[CommandType, int]:
    try:
        return _KEY_START[cmd[:1]]
    except KeyError:
        raise ValueError(f"unknown command: {cmd!r}") from None


def quick_parse(cmd: str) -> tuple[CommandType, int]:
    """Return the command type and the database index given by the key's last digit."""
    kind, start = _kind_and_start(cmd)
    key = cmd[start:].split(" ", 1)[0]
    if not key or not key[-1].isdigit():
        raise ValueError(f"command key must end in a digit: {cmd!r}")
    return kind, int(key[-1])


def parse_command(kind: CommandType, cmd: str) -> tuple[str, str]:
    """Split a command into its key and its value (PUT), second key (SCAN) or '' (GET)."""
    _, start = _kind_and_start(cmd)
    rest = cmd[start:]
    if kind is CommandType.GET:
        if not rest:
            raise ValueError(f"GET without a key: {cmd!r}")
        return rest, ""
    key, sep, tail = rest.partition(" ")
    if not sep or not key:
        raise ValueError(f"malformed {kind.name} command: {cmd!r}")
    if kind is CommandType.PUT:
        value = tail[:VALUE_LENGTH]
        if len(value) != VALUE_LENGTH:
            raise ValueError(f"PUT value must be {VALUE_LENGTH} characters: {cmd!r}")
        return key, value
    if not tail:
        raise ValueError(f"SCAN without an end key: {cmd!r}")
    return key, tail


class LineCache:
    """Maps keys to the byte offset just past their line, with random eviction.

    Keys not read since they were cached are eviction candidates; once none
    are left, every cached key becomes a candidate again.
    """

    def __init__(self, capacity: int = MAX_CACHE_SIZE) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._line_ends: dict[str, int] = {}
        self._victims: set[str] = set()
        self._used: set[str] = set()
        self._random = random.Random()

    def lookup(self, key: str) -> int | None:
        """Return the cached line end for *key*, marking it as used."""
        line_end = self._line_ends.get(key)
        if line_end is not None and key in self._victims:
            self._victims.discard(key)
            self._used.add(key)
        return line_end

    def remember(self, key: str, line_end: int) -> None:
        """Cache *line_end* for *key*, evicting a random candidate when full."""
        if key in self._line_ends:
            self._line_ends[key] = line_end
            return
        if len(self._line_ends) >= self.capacity:
            if not self._victims:
                self._victims, self._used = self._used, self._victims
            victim = self._random.choice(tuple(self._victims))
            self._victims.discard(victim)
            del self._line_ends[victim]
        self._line_ends[key] = line_end
        self._victims.add(key)


class KeyValueStorage:
    """Ten database files ``db0``..``db9`` under one directory."""

    def __init__(self, db_dir: str | os.PathLike = "db") -> None:
        self.db_dir = Path(db_dir)
        self.db_dir.mkdir(parents=True, exist_ok=True)
        self._paths = [self.db_dir / f"db{db_id}" for db_id in range(DB_COUNT)]
        for path in self._paths:
            path.touch(exist_ok=True)
        self._caches = [LineCache() for _ in range(DB_COUNT)]

    def _check_db(self, db_id: int) -> None:
        if not 0 <= db_id < DB_COUNT:
            raise ValueError(f"database index must be 0..{DB_COUNT - 1}, got {db_id}")

    def _find(self, key: str, db_id: int) -> tuple[int, str] | None:
        cache = self._caches[db_id]
        with open(self._paths[db_id], "rb") as db:
            line_end = cache.lookup(key)
            if line_end is not None:
                db.seek(line_end - VALUE_LENGTH - 1)
                return line_end, db.read(VALUE_LENGTH).decode()
            prefix = key.encode() + b" "
            offset = 0
            for line in db:
                offset += len(line)
                if line.startswith(prefix):
                    cache.remember(key, offset)
                    return offset, line.rstrip(b"\n")[-VALUE_LENGTH:].decode()
        return None

    def put_many(
        self, pairs: Mapping[str, str] | Iterable[tuple[str, str]], db_id: int
    ) -> None:
        """Store key/value pairs in one database; a later pair for a key wins."""
        self._check_db(db_id)
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        latest: dict[str, str] = {}
        for key, value in items:
            if not key or any(ch in key for ch in " \n\r"):
                raise ValueError(f"invalid key: {key!r}")
            if len(value.encode()) != VALUE_LENGTH or "\n" in value:
                raise ValueError(f"value must be {VALUE_LENGTH} bytes on one line")
            latest[key] = value
        path = self._paths[db_id]
        for key in sorted(latest):
            value = latest[key]
            found = self._find(key, db_id)
            if found is not None:
                with open(path, "r+b") as db:
                    db.seek(found[0] - VALUE_LENGTH - 1)
                    db.write(value.encode())
            else:
                with open(path, "ab") as db:
                    db.write(f"{key} {value}\n".encode())

    def get(self, key: str, db_id: int) -> str:
        """Return the value stored for *key* in one database, or 'EMPTY'."""
        self._check_db(db_id)
        found = self._find(key, db_id)
        return EMPTY if found is None else found[1]

    def process(self, input_path: str | os.PathLike, output_path: str | os.PathLike) -> int:
        """Run a command file and write GET/SCAN results, one per line.

        Returns the number of results written.
        """
        pending: list[dict[str, str]] = [{} for _ in range(DB_COUNT)]
        buffered = 0
        results: list[str] = []

        def flush() -> None:
            for db_id, buffer in enumerate(pending):
                if buffer:
                    self.put_many(buffer, db_id)
                    buffer.clear()

        with open(input_path) as commands:
            for progress, line in enumerate(commands):
                if progress % PROGRESS_EVERY == 0:
                    logger.info("now : %d", progress)
                cmd = line.rstrip("\r\n")
                if not cmd:
                    continue
                kind, db_id = quick_parse(cmd)
                first, second = parse_command(kind, cmd)
                if kind is CommandType.PUT:
                    pending[db_id][first] = second
                    buffered += 1
                    if buffered >= MAX_BUFFERED_PUTS:
                        flush()
                        buffered = 0
                    continue
                flush()
                buffered = 0
                begin = int(first)
                count = int(second) - begin + 1 if kind is CommandType.SCAN else 1
                results.extend(
                    self.get(str(begin + step), (db_id + step) % DB_COUNT)
                    for step in range(count)
                )
        flush()

        with open(output_path, "w", newline="") as out:
            out.write("\n".join(results))
        return len(results)