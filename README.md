# bigdatatools

File-based tools for data sets that are too large to handle comfortably in
memory: an external merge sort for integers, a converter from `|`-separated
rows to JSON, a set of rotating queues drained by worker threads, and a
key-value store kept in ten flat files.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## External sort: `bigsort`

Sorts a text file of whitespace-separated integers. The input is read in
buffers of a fixed number of values; each buffer is sorted and written as a
run file (`part0`, `part1`, ...), and runs are merged two at a time, oldest
first, into `merged0`, `merged1`, ... until one file remains. An empty input
gives one empty run. A token that is not an integer raises `ValueError`.

```
bigsort path/to/data.txt [work_dir]
```

The input's folder is the part of its path before the last `/`, so give the
path with a directory part (for example `./data.txt`). Run files go to
`<work_dir>/outputs/`; the work directory defaults to that folder. The sorted
result, one integer per line, is moved to `output.txt` in the input's folder,
and the whole time taken is printed as `Total Cost : N secs`.

From Python, in `bigdatatools.external_sort`:

- `buffer_capacity(megabytes)` — how many 32-bit integers fit in a buffer of
  that many megabytes (the default buffer is 1024 MB).
- `split_sorted_runs(source, out_dir, max_buffer)` — write the sorted runs and
  return their paths.
- `merge_runs(first, second, output, max_buffer)` — merge two sorted run files
  into `output`.
- `external_sort(source, dest_dir, max_buffer=None)` — do the whole sort under
  `dest_dir/outputs` and return the path of the result file.

```python
from bigdatatools.external_sort import buffer_capacity, external_sort

result_path = external_sort("data.txt", "work", buffer_capacity(64))
```

## Pipe-separated rows to JSON: `csv2json`

Converts `input.csv` in the current directory, where each line holds up to 20
values separated by `|`, into `output.json`: a JSON array with one object per
line, keyed `col_1` to `col_20`. Values are copied into the output as they are,
unquoted. A line with fewer than 20 fields fills the leading columns from the
front, puts its last field in `col_20` and leaves the columns between empty; a
line with more than 20 fields, or an empty input file, raises `ValueError`.

```
csv2json [threads]
```

With no thread count, or zero, one thread does the work. With a count above
one, one fewer than that many worker threads share the lines round-robin; the
output order always follows the input order. Progress lines start with
`DEBUG >>`.

From Python, in `bigdatatools.csv2json`: `split_line(raw)`,
`line_to_cell(fields)`, `distribute_lines(lines, workers)` and
`convert(input_path, output_path, workers=1)`, which returns the number of
lines converted.

```python
from bigdatatools.csv2json import convert

convert("input.csv", "output.json", workers=4)
```

## Rotating queues

`bigdatatools.multiqueue.MultiQueue(count)` holds `count` FIFO queues. Each
`push(value)` goes to queue `(items held + 1) % count`. `len()` of the set is
the number of queues not yet drained.

`drain_count(queue_set, workers)` counts the items in the first `workers`
queues, one thread per queue, and returns the total; the queues keep their
items, and each finished worker lowers the set's length by one.

```python
from bigdatatools.multiqueue import MultiQueue, drain_count

queues = MultiQueue(4)
for number in range(1000):
    queues.push(number)
drain_count(queues, 4)  # 1000
```

## Key-value store: `kvstore`

Runs a command file against a store kept in ten files, `db/db0` to `db/db9`,
under the current directory. Commands, one per line:

- `PUT key value` — store a 128-character value under a numeric key
- `GET key` — fetch one value
- `SCAN key1 key2` — fetch every key from `key1` to `key2`

A key goes to the store file chosen by its last digit; a SCAN moves to the
next file for each following key. PUTs are buffered and written before the
next GET or SCAN; for repeated keys the last PUT wins. Values are rewritten in
place when a key is already stored. Fetched values, or `EMPTY` for keys not
stored, are written one per line to an output file named after the input with
its last five characters replaced by `output` (so `commands.input` gives
`commands.output`), in the current directory.

```
kvstore commands.input
```

On a malformed command or a file error the command prints `err : ...` and
exits with status 1; otherwise it prints the time taken.

From Python, in `bigdatatools.kvstore`: `quick_parse(cmd)`,
`parse_command(kind, cmd)`, the `CommandType` enum, the `LineCache` of line
offsets with random eviction, and `KeyValueStorage(db_dir="db")` with
`put_many(pairs, db_id)`, `get(key, db_id)` and
`process(input_path, output_path)`, which returns the number of results
written.

```python
from bigdatatools.kvstore import KeyValueStorage

store = KeyValueStorage("db")
store.process("commands.input", "commands.output")
```

## What it does not do

The key-value store has no server and no interactive mode: it only runs
command files, and it has no delete command. The JSON converter does not parse
or quote values and does not read real CSV (quoted fields, commas); it only
splits on `|`.