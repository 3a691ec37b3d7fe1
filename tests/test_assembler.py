"""Tests for the output assembler."""

from loregen.output.assembler import OutputAssembler


def test_first_write_wins():
    assembler = OutputAssembler()
    assert assembler.add_entries("    ", [("ANA", "Ana")]) == 1
    assert assembler.add_entries("    ", [("ANA", "ANA"), ("BO", "Bo")]) == 1
    assert assembler.localisations == {"ANA": "Ana", "BO": "Bo"}
    # Every entry still gets its own line
    assert assembler.lines == ["    ANA,", "    ANA,", "    BO,"]


def test_localisation_follows_insertion_order():
    assembler = OutputAssembler()
    assembler.add_entries("", [("ZED", "Zed"), ("ANA", "Ana"), ("MO", "Mo")])
    assert assembler.render_localisation() == (
        "l_english:\n"
        '    ZED:0 "Zed"\n'
        '    ANA:0 "Ana"\n'
        '    MO:0 "Mo"\n'
    )


def test_localisation_language_label():
    assembler = OutputAssembler()
    assert assembler.render_localisation("french") == "l_french:\n"


def test_structure_is_joined_without_trailing_newline():
    assembler = OutputAssembler()
    for line in ["a = {", "}"]:
        assembler.add_line(line)
    assert assembler.render_structure() == "a = {\n}"


def test_write_creates_folders(tmp_path):
    assembler = OutputAssembler()
    assembler.add_line("x = 1")
    assembler.add_entries("", [("ANA", "Ana")])
    out = tmp_path / "out" / "out.txt"
    loc = tmp_path / "loc" / "localisation.txt"
    assembler.write(out, loc)
    assert out.read_text(encoding="utf-8") == "x = 1\nANA,"
    assert loc.read_text(encoding="utf-8") == 'l_english:\n    ANA:0 "Ana"\n'
