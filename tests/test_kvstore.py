import pytest

from bigdatatools.kvstore import (
    CommandType,
    KeyValueStorage,
    LineCache,
    parse_command,
    quick_parse,
)

VALUE_A = "A" * 128
VALUE_B = "B" * 128
VALUE_C = "C" * 128


def test_quick_parse_types_and_index():
    assert quick_parse("PUT 123 " + VALUE_A) == (CommandType.PUT, 3)
    assert quick_parse("GET 7") == (CommandType.GET, 7)
    assert quick_parse("SCAN 15 20") == (CommandType.SCAN, 5)


def test_quick_parse_rejects_unknown_command():
    with pytest.raises(ValueError):
        quick_parse("XYZ 12")


def test_quick_parse_rejects_non_digit_key():
    with pytest.raises(ValueError):
        quick_parse("GET abc")


def test_parse_command_variants():
    assert parse_command(CommandType.PUT, "PUT 99 " + VALUE_A) == ("99", VALUE_A)
    assert parse_command(CommandType.GET, "GET 42") == ("42", "")
    assert parse_command(CommandType.SCAN, "SCAN 10 15") == ("10", "15")


def test_parse_command_short_value_rejected():
    with pytest.raises(ValueError):
        parse_command(CommandType.PUT, "PUT 1 short")


def test_line_cache_lookup_after_remember():
    cache = LineCache(4)
    cache.remember("k", 129)
    assert cache.lookup("k") == 129
    assert cache.lookup("missing") is None


def test_line_cache_evicts_when_full():
    cache = LineCache(1)
    cache.remember("a", 10)
    cache.remember("b", 20)
    assert cache.lookup("a") is None
    assert cache.lookup("b") == 20


def test_line_cache_capacity_must_be_positive():
    with pytest.raises(ValueError):
        LineCache(0)


def test_creates_ten_db_files(tmp_path):
    KeyValueStorage(tmp_path / "db")
    names = sorted(p.name for p in (tmp_path / "db").iterdir())
    assert names == [f"db{i}" for i in range(10)]


def test_put_get_round_trip(tmp_path):
    store = KeyValueStorage(tmp_path / "db")
    store.put_many({"11": VALUE_A, "21": VALUE_B}, 1)
    assert store.get("11", 1) == VALUE_A
    assert store.get("21", 1) == VALUE_B
    assert store.get("31", 1) == "EMPTY"


def test_db_file_line_format(tmp_path):
    store = KeyValueStorage(tmp_path / "db")
    store.put_many([("5", VALUE_A)], 5)
    assert (tmp_path / "db" / "db5").read_text() == "5 " + VALUE_A + "\n"


def test_update_rewrites_in_place(tmp_path):
    store = KeyValueStorage(tmp_path / "db")
    store.put_many({"12": VALUE_A, "22": VALUE_B}, 2)
    size = (tmp_path / "db" / "db2").stat().st_size
    store.put_many({"12": VALUE_C}, 2)
    assert (tmp_path / "db" / "db2").stat().st_size == size
    assert store.get("12", 2) == VALUE_C
    assert store.get("22", 2) == VALUE_B


def test_last_pair_wins(tmp_path):
    store = KeyValueStorage(tmp_path / "db")
    store.put_many([("3", VALUE_A), ("3", VALUE_B)], 3)
    assert store.get("3", 3) == VALUE_B
    assert (tmp_path / "db" / "db3").read_text().count("\n") == 1


def test_key_prefix_does_not_match(tmp_path):
    store = KeyValueStorage(tmp_path / "db")
    store.put_many({"123": VALUE_A}, 3)
    assert store.get("12", 3) == "EMPTY"


def test_persisted_across_instances(tmp_path):
    KeyValueStorage(tmp_path / "db").put_many({"44": VALUE_A}, 4)
    assert KeyValueStorage(tmp_path / "db").get("44", 4) == VALUE_A


def test_bad_value_and_db_index(tmp_path):
    store = KeyValueStorage(tmp_path / "db")
    with pytest.raises(ValueError):
        store.put_many({"1": "short"}, 1)
    with pytest.raises(ValueError):
        store.get("1", 10)


def test_process_commands(tmp_path):
    store = KeyValueStorage(tmp_path / "db")
    commands = tmp_path / "cmds.input"
    commands.write_text(
        "\n".join(
            [
                "PUT 10 " + VALUE_A,
                "PUT 11 " + VALUE_B,
                "GET 10",
                "PUT 10 " + VALUE_C,
                "SCAN 10 12",
                "GET 99",
            ]
        )
        + "\n"
    )
    out = tmp_path / "cmds.output"
    written = store.process(commands, out)
    lines = out.read_text().split("\n")
    assert written == 5
    assert lines == [VALUE_A, VALUE_C, VALUE_B, "EMPTY", "EMPTY"]
    assert not out.read_text().endswith("\n")


def test_process_only_puts_stores_values(tmp_path):
    store = KeyValueStorage(tmp_path / "db")
    commands = tmp_path / "puts.input"
    commands.write_text("PUT 7 " + VALUE_A + "\n")
    out = tmp_path / "puts.output"
    assert store.process(commands, out) == 0
    assert out.read_text() == ""
    assert store.get("7", 7) == VALUE_A