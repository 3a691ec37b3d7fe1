"""Tests for the structure parser and its scope stack."""

from pathlib import Path
from typing import List, Tuple

import pytest

from loregen.input.structure import StructureParser, scope_key
from loregen.output.assembler import OutputAssembler


class RecordingGenerator:
    """Returns fixed names per theme and records every call."""

    def __init__(self, names_by_theme=None):
        self.names_by_theme = names_by_theme or {}
        self.calls: List[Tuple[str, str, Path]] = []

    def __call__(self, theme, prefix, cache_path):
        self.calls.append((theme, prefix, cache_path))
        names = self.names_by_theme.get(theme, ["Ana"])
        key_prefix = f"{prefix.rstrip('_')}_" if prefix.rstrip("_") else ""
        return [(f"{key_prefix}{n.upper()}", n) for n in names]


def _parse(text: str, generator=None, cache_dir: Path = Path("cache")):
    generator = generator or RecordingGenerator()
    parser = StructureParser(generator, OutputAssembler(), cache_dir)
    assembler = parser.parse(text)
    return assembler, generator, parser


def test_themed_empty_scope_is_generated():
    text = "elves = {\n    # Elves\n}"
    assembler, generator, _ = _parse(text, RecordingGenerator({"Elves": ["Elora"]}))
    assert assembler.lines == ["elves = {", "    ELORA,", "}"]
    assert generator.calls == [("Elves", "", Path("cache") / "elves.txt")]


def test_comment_lines_are_not_copied():
    assembler, _, _ = _parse("# Elves\nelves = {\n}")
    assert all(not line.strip().startswith("#") for line in assembler.lines)


def test_theme_comment_before_open_applies_to_that_scope():
    text = "# Elves\nelves = {\n}"
    assembler, generator, _ = _parse(text)
    assert [c[0] for c in generator.calls] == ["Elves"]
    assert assembler.lines == ["elves = {", "    ANA,", "}"]


def test_scope_without_theme_is_not_generated():
    assembler, generator, _ = _parse("plain = {\n}")
    assert generator.calls == []
    assert assembler.lines == ["plain = {", "}"]


@pytest.mark.parametrize("content_line", ["    size = 3", "    A, B"])
def test_literal_content_suppresses_generation(content_line):
    text = f"# Elves\nelves = {{\n{content_line}\n}}"
    assembler, generator, _ = _parse(text)
    assert generator.calls == []
    assert assembler.lines == ["elves = {", content_line, "}"]


def test_plain_text_line_does_not_count_as_data():
    text = "# Elves\nelves = {\n    just words\n}"
    _, generator, _ = _parse(text)
    assert len(generator.calls) == 1


def test_child_scope_suppresses_parent_generation():
    text = (
        "# Races\n"
        "races = {\n"
        "    # Elves\n"
        "    elves = {\n"
        "    }\n"
        "}"
    )
    assembler, generator, _ = _parse(text)
    assert [c[0] for c in generator.calls] == ["Elves"]
    assert generator.calls[0][2] == Path("cache") / "races_elves.txt"
    assert assembler.lines == [
        "races = {",
        "    elves = {",
        "        ANA,",
        "    }",
        "}",
    ]


def test_prefix_is_inherited_and_overridden():
    text = (
        "# prefix: HUM\n"
        "humans = {\n"
        "    # Human names\n"
        "    male = {\n"
        "    }\n"
        "    # prefix: NOB_\n"
        "    # Noble names\n"
        "    nobles = {\n"
        "    }\n"
        "}"
    )
    assembler, generator, _ = _parse(text)
    assert [(c[0], c[1]) for c in generator.calls] == [
        ("Human names", "HUM"),
        ("Noble names", "NOB_"),
    ]
    assert "        HUM_ANA," in assembler.lines
    assert "        NOB_ANA," in assembler.lines


def test_kv_comments_are_inserted_after_open():
    text = (
        "# graphical_culture = elven\n"
        "# color = { 1 2 3 }\n"
        "  elves = {\n"
        "  }"
    )
    assembler, generator, _ = _parse(text)
    assert assembler.lines == [
        "  elves = {",
        "      graphical_culture = elven",
        "      color = { 1 2 3 }",
        "  }",
    ]
    assert generator.calls == []


def test_kv_inserts_do_not_disqualify_a_themed_leaf():
    text = "# size = 3\n# Elves\nelves = {\n}"
    assembler, generator, _ = _parse(text)
    assert len(generator.calls) == 1
    assert assembler.lines == ["elves = {", "    size = 3", "    ANA,", "}"]


def test_only_last_pending_theme_survives():
    text = "# First\n# Second\nelves = {\n}"
    _, generator, _ = _parse(text)
    assert [c[0] for c in generator.calls] == ["Second"]


def test_pending_metadata_is_consumed_by_one_open():
    text = "# Elves\nelves = {\n}\nhumans = {\n}"
    _, generator, _ = _parse(text)
    assert [c[0] for c in generator.calls] == ["Elves"]


def test_unmatched_close_is_tolerated():
    assembler, generator, _ = _parse("}\nx = 1\n}")
    assert assembler.lines == ["}", "x = 1", "}"]
    assert generator.calls == []


def test_unclosed_scopes_are_reported(capsys):
    generator = RecordingGenerator()
    parser = StructureParser(generator, OutputAssembler(), Path("cache"))
    for line in ["# Elves", "elves = {"]:
        parser.feed_line(line)
    unclosed = parser.finish()
    assert [s.key for s in unclosed] == ["elves"]
    assert generator.calls == []
    assert "never closed" in capsys.readouterr().out


def test_blank_comment_sets_no_theme():
    _, generator, _ = _parse("#\nelves = {\n}")
    assert generator.calls == []


def test_scope_path_and_indent():
    text = "a = {\n\tb = {\n\t\t# T\n\t\tc = {\n\t\t}\n\t}\n}"
    assembler, generator, _ = _parse(text)
    assert generator.calls[0][2] == Path("cache") / "a_b_c.txt"
    # Two tab characters of indent plus four spaces
    assert "      ANA," in assembler.lines


def test_scope_key():
    assert scope_key("elves = {") == "elves"
    assert scope_key("elves {") == "elves {"
    assert scope_key("{") == "{"


def test_theme_inside_block_is_not_reused_by_next_sibling():
    text = "elves = {\n    # Elves\n}\nhumans = {\n}"
    _, generator, _ = _parse(text)
    assert [c[0] for c in generator.calls] == ["Elves"]


def test_theme_inside_block_before_child_goes_to_child():
    text = "races = {\n    # Elves\n    elves = {\n    }\n}"
    _, generator, _ = _parse(text)
    assert [c[2] for c in generator.calls] == [Path("cache") / "races_elves.txt"]
