"""Tests for the raw response cache and the cache maintenance scripts."""

import importlib.util
from pathlib import Path

from loregen.common.cache import get_cache_path, list_cache_files, read_raw_cache, write_raw_cache


def _load_script(name: str):
    path = Path(__file__).parent.parent / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_cache_path_joins_scope_path(tmp_path):
    assert get_cache_path(tmp_path, ["races", "elves"]) == tmp_path / "races_elves.txt"
    assert get_cache_path(tmp_path, ["a:b", "c"]) == tmp_path / "a_b_c.txt"


def test_read_missing_or_blank(tmp_path):
    assert read_raw_cache(tmp_path / "missing.txt") is None
    blank = tmp_path / "blank.txt"
    blank.write_text("\n  \n", encoding="utf-8")
    assert read_raw_cache(blank) is None


def test_undecodable_cache_reads_as_miss(tmp_path, capsys):
    path = tmp_path / "elves.txt"
    path.write_bytes(b'{"names": ["\xff\xfe')
    assert read_raw_cache(path) is None
    assert "[cache] [skip]" in capsys.readouterr().out


def test_write_then_read(tmp_path):
    path = tmp_path / "nested" / "elves.txt"
    write_raw_cache(path, '{"names": [')
    assert read_raw_cache(path) == '{"names": ['
    assert list_cache_files(tmp_path / "nested") == [path]


def test_audit_cache_reports_and_fixes(tmp_path):
    audit = _load_script("audit_cache")
    (tmp_path / "good.txt").write_text('{"names": ["A", "B",', encoding="utf-8")
    (tmp_path / "bad.txt").write_text("Sorry, I can't.", encoding="utf-8")
    (tmp_path / "empty.txt").write_text("", encoding="utf-8")
    (tmp_path / "binary.txt").write_bytes(b"\xff\xfe")

    ok, broken = audit.audit_cache_dir(tmp_path)
    assert [(p.name, n) for p, n in ok] == [("good.txt", 2)]
    assert sorted(p.name for p, _ in broken) == ["bad.txt", "binary.txt", "empty.txt"]

    assert audit.main([str(tmp_path), "--fix"]) == 0
    assert [p.name for p in list_cache_files(tmp_path)] == ["good.txt"]


def test_clear_cache_by_scope_prefix(tmp_path):
    clear = _load_script("clear_cache")
    for stem in ["races_elves", "races_elves_male", "races_humans", "places"]:
        (tmp_path / f"{stem}.txt").write_text("x", encoding="utf-8")

    deleted = clear.clear_cache(tmp_path, "races.elves")

    assert sorted(p.stem for p in deleted) == ["races_elves", "races_elves_male"]
    assert sorted(p.stem for p in list_cache_files(tmp_path)) == ["places", "races_humans"]
