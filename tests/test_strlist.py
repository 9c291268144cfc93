import pytest

from dwtools.strlist import DuplicateEntryError, StrList, StrNode


def test_add_and_contains():
    sl = StrList()
    node = sl.add("foo")
    assert node == StrNode("foo", None)
    assert "foo" in sl
    assert sl.has_entry("foo")
    assert not sl.has_entry("bar")


def test_empty():
    sl = StrList()
    assert len(sl) == 0
    assert list(sl) == []


def test_duplicate_raises():
    sl = StrList(["a"])
    with pytest.raises(DuplicateEntryError):
        sl.add("a")
    assert len(sl) == 1


def test_constructor_duplicate_raises():
    with pytest.raises(DuplicateEntryError):
        StrList(["x", "y", "x"])


def test_insertion_order_kept():
    names = ["zeta", "alpha", "mid", "beta"]
    assert list(StrList(names)) == names


def test_remove():
    sl = StrList(["a", "b", "c"])
    sl.remove("b")
    assert list(sl) == ["a", "c"]
    assert "b" not in sl


def test_remove_missing():
    with pytest.raises(KeyError):
        StrList().remove("nope")


def test_remove_during_iteration():
    sl = StrList(["a", "b", "c"])
    for entry in sl:
        sl.remove(entry)
    assert len(sl) == 0


def test_priv():
    sl = StrList()
    marker = object()
    sl.add("fn", marker)
    sl.add("other")
    assert sl.priv("fn") is marker
    assert sl.priv("other") is None
    with pytest.raises(KeyError):
        sl.priv("missing")


def test_load(tmp_path):
    path = tmp_path / "names.txt"
    path.write_text("first\nsecond\nthird\n", encoding="utf-8")
    sl = StrList()
    sl.load(path)
    assert list(sl) == ["first", "second", "third"]


def test_load_without_trailing_newline(tmp_path):
    path = tmp_path / "names.txt"
    path.write_text("one\ntwo", encoding="utf-8")
    sl = StrList()
    sl.load(str(path))
    assert list(sl) == ["one", "two"]


def test_load_duplicate_stops(tmp_path):
    path = tmp_path / "names.txt"
    path.write_text("a\nb\na\nc\n", encoding="utf-8")
    sl = StrList()
    with pytest.raises(DuplicateEntryError):
        sl.load(path)
    assert list(sl) == ["a", "b"]


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        StrList().load(tmp_path / "absent.txt")