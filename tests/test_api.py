from __future__ import annotations

import logging
from pathlib import Path

import pytest

from jsonpointerpos import (
    JSONSyntaxError,
    JsonPointer,
    PointerPosition,
    PointerSyntaxError,
    Position,
    get_positions,
    get_positions_file,
)


def _lc(out: dict[str, PointerPosition] | None) -> dict[str, tuple[int, int]]:
    assert out is not None
    return {k: (v.position.line, v.position.column) for k, v in out.items()}


@pytest.mark.parametrize("src", ["{}", "[]"])
@pytest.mark.parametrize("pointers", [None, []])
def test_nothing_requested_is_none(src: str, pointers: list[str] | None) -> None:
    assert get_positions(src, pointers) is None


def test_requested_but_unresolved_is_empty_mapping() -> None:
    out = get_positions("{}", ["/foo"])
    assert out == {}
    assert out is not None


def test_simple_object() -> None:
    src = """
{
  "a": 1,
  "b": 2,
  "c": {
    "x": 3
  }
}"""
    out = get_positions(src, ["/b", "/c/x", "/non-exist"])
    assert out == {
        "/b": PointerPosition(pointer="/b", tokens=("b",), position=Position(offset=20, line=4, column=8)),
        "/c/x": PointerPosition(pointer="/c/x", tokens=("c", "x"), position=Position(offset=41, line=6, column=10)),
    }


def test_simple_array() -> None:
    src = """
[
  [1, 2],
  [3, 4]
]"""
    assert _lc(get_positions(src, ["/0/1"])) == {"/0/1": (3, 7)}


def test_mixed_array_index_and_object_key() -> None:
    src = """
[
  [
    1,
    {
      "foo": ["a", "b"]
    }
  ],
  [3, 4]
]"""
    out = get_positions(src, ["/0/1/foo/0"])
    assert _lc(out) == {"/0/1/foo/0": (6, 15)}
    assert out["/0/1/foo/0"].tokens == ("0", "1", "foo", "0")


def test_compact_documents() -> None:
    assert _lc(get_positions("[[1,2],[3,4]]", ["/0/1"])) == {"/0/1": (1, 5)}
    assert _lc(get_positions('[[1,{"foo":["a","b"]}],[3,4]]', ["/0/1/foo/0"])) == {"/0/1/foo/0": (1, 13)}


def test_only_requested_pointers_are_reported() -> None:
    out = get_positions('{"c": {"x": 3}}', ["/c/x"])
    assert set(out) == {"/c/x"}


def test_prefix_and_deeper_pointer_together() -> None:
    assert _lc(get_positions('{"c": {"x": 3}}', ["/c", "/c/x"])) == {"/c": (1, 7), "/c/x": (1, 13)}


def test_root_pointer_points_at_top_level_value() -> None:
    assert _lc(get_positions('\n\n  {"a": 1}', [""])) == {"": (3, 3)}


def test_empty_key_pointer() -> None:
    assert _lc(get_positions('{"": 1, "a": 2}', ["/"])) == {"/": (1, 6)}


def test_accepts_parsed_pointers() -> None:
    ptr = JsonPointer.from_tokens(["a/b"])
    out = get_positions('{"a/b": true}', [ptr])
    assert _lc(out) == {"/a~1b": (1, 9)}


def test_duplicate_pointers_produce_one_entry() -> None:
    out = get_positions('{"a": 1}', ["/a", "/a"])
    assert _lc(out) == {"/a": (1, 7)}


def test_columns_count_code_points() -> None:
    src = '{"é": "ü",\n "k": ["☃", 1]}'
    out = get_positions(src, ["/k/1"])
    assert _lc(out) == {"/k/1": (2, 13)}
    assert src[out["/k/1"].position.offset] == "1"


def test_bytes_input_is_utf8() -> None:
    src = '{"é": "ü", "k": 1}'
    assert _lc(get_positions(src.encode("utf-8"), ["/k"])) == {"/k": (1, 17)}
    assert _lc(get_positions(b"\xef\xbb\xbf" + src.encode("utf-8"), ["/k"])) == {"/k": (1, 17)}


def test_crlf_line_endings() -> None:
    assert _lc(get_positions('{\r\n  "a": 1\r\n}', ["/a"])) == {"/a": (2, 8)}


def test_malformed_document_aborts() -> None:
    with pytest.raises(JSONSyntaxError) as e:
        get_positions('{"a": 1, "b": [1, 2}', ["/a"])
    assert "unexpected '}'" in str(e.value)


def test_trailing_content_is_an_error() -> None:
    with pytest.raises(JSONSyntaxError) as e:
        get_positions("{} {}", ["/a"])
    assert e.value.hint == "expected end of input after the top-level value"
    assert e.value.span.start.column == 4


def test_empty_document_is_an_error() -> None:
    with pytest.raises(JSONSyntaxError):
        get_positions("   ", ["/a"])


def test_invalid_pointer_is_reported_before_scanning() -> None:
    with pytest.raises(PointerSyntaxError):
        get_positions("not json", ["a"])


def test_idempotent() -> None:
    src = '{"a": [1, {"b": 2}], "c": null}'
    ptrs = ["/a/1/b", "/c", "/zzz"]
    assert get_positions(src, ptrs) == get_positions(src, ptrs)


def test_get_positions_file(tmp_path: Path) -> None:
    p = tmp_path / "doc.json"
    p.write_text('{\n  "name": "x"\n}\n', encoding="utf-8")
    assert _lc(get_positions_file(p, ["/name"])) == {"/name": (2, 11)}


def test_file_errors_name_the_file(tmp_path: Path) -> None:
    p = tmp_path / "bad.json"
    p.write_text('{"a": }', encoding="utf-8")
    with pytest.raises(JSONSyntaxError) as e:
        get_positions_file(p, ["/a"])
    assert str(e.value).startswith(f"{p.resolve()}:1:7: ")


def test_debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="jsonpointerpos"):
        get_positions('{"a": 1}', ["/a", "/b"])
    assert "resolved 1 of 2 pointer(s)" in caplog.text


def test_invalid_utf8_bytes_are_a_syntax_error() -> None:
    with pytest.raises(JSONSyntaxError) as e:
        get_positions(b'{"a": "\xff"}', ["/a"])
    assert e.value.message == "invalid UTF-8 byte 0xff"
    assert e.value.hint == "document must be UTF-8"
    assert e.value.offset == 7
    assert (e.value.span.start.line, e.value.span.start.column) == (1, 8)


def test_invalid_utf8_location_counts_code_points(tmp_path: Path) -> None:
    p = tmp_path / "latin1.json"
    p.write_bytes('{\n  "é": "caf'.encode("utf-8") + b'\xe9"\n}')
    with pytest.raises(JSONSyntaxError) as e:
        get_positions_file(p, ["/é"])
    assert str(e.value).startswith(f"{p.resolve()}:2:12: invalid UTF-8 byte 0xe9")


def test_single_pointer_string_is_rejected() -> None:
    with pytest.raises(TypeError):
        get_positions('{"a": 1}', "/a")
    with pytest.raises(TypeError):
        get_positions('{"a": 1}', b"/a")


def test_deep_pointer_is_not_limited_by_recursion() -> None:
    depth = 5000
    src = "[" * depth + "1" + "]" * depth
    out = get_positions(src, ["/0" * depth, "/0" * (depth - 1) + "/1"])
    assert _lc(out) == {"/0" * depth: (1, depth + 1)}
