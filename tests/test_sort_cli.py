import pytest

from bigdatatools.sort_cli import folder_of, main


def test_folder_of_strips_last_component():
    assert folder_of("/data/input/big.txt") == "/data/input"


def test_folder_of_without_slash_returns_path():
    assert folder_of("big.txt") == "big.txt"


def test_main_writes_sorted_output(tmp_path, capsys):
    source = tmp_path / "big.txt"
    source.write_text("10\n-3\n7\n0\n")
    assert main([source.as_posix()]) == 0
    output = tmp_path / "output.txt"
    assert [int(t) for t in output.read_text().split()] == [-3, 0, 7, 10]
    assert "Total Cost :" in capsys.readouterr().out


def test_main_with_separate_dest(tmp_path):
    source = tmp_path / "big.txt"
    source.write_text("4 2 8 6")
    dest = tmp_path / "work"
    dest.mkdir()
    main([source.as_posix(), dest.as_posix()])
    assert (tmp_path / "output.txt").read_text() == "2\n4\n6\n8\n"
    assert (dest / "outputs").is_dir()


def test_main_requires_source():
    with pytest.raises(SystemExit):
        main([])