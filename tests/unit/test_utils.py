from svis.utils.paths import file_name_of, infer_sources_root, without_relative_part
from svis.utils.text import split_lines, utf8_len


def test_split_lines_matches_line_semantics():
    assert split_lines("") == []
    assert split_lines("\n") == [""]
    assert split_lines("a\nb") == ["a", "b"]
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\r\nb\r\n") == ["a", "b"]
    assert split_lines("a\n\nb") == ["a", "", "b"]


def test_split_lines_keeps_unicode_separators():
    assert split_lines("var s=' ';\nx") == ["var s=' ';", "x"]


def test_utf8_len():
    assert utf8_len("abc") == 3
    assert utf8_len("€") == 3


def test_file_name_of():
    assert file_name_of("dist/js/app.js") == "app.js"
    assert file_name_of("app.js") == "app.js"
    assert file_name_of("dist/") == ""


def test_without_relative_part():
    assert without_relative_part("../../src/a.js") == "src/a.js"
    assert without_relative_part("src/../a.js") == "src/../a.js"
    assert without_relative_part("webpack:///src/a.js") == "webpack:///src/a.js"


def test_infer_sources_root():
    assert infer_sources_root("/p/dist/js/app.js", ["../../src/a.js"]) == "/p"
    assert infer_sources_root("/p/dist/app.js", ["../src/a.js", "../../other.js"]) == "/p"
    assert infer_sources_root("dist/app.js", ["src/a.js"]) == "dist"
    assert infer_sources_root("app.js", ["../../../a.js"]) == ""
    assert infer_sources_root("app.js", []) == ""
    assert infer_sources_root("app.js", ["../a.js"], source_root="/root") == "/root"
