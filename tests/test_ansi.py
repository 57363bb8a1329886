from __future__ import annotations

from logwash.ansi import has_escapes, normalize_ansi, split_lines


def test_plain_input_keeps_lines() -> None:
    lines = normalize_ansi("one\ntwo\n")
    assert [line.plain for line in lines] == ["one", "two"]
    assert all(not line.spans for line in lines)


def test_escapes_become_spans_and_are_stripped() -> None:
    raw = "\x1b[33mabc1234\x1b[m msg\n\x1b[31m|\x1b[m\n"
    assert has_escapes(raw)

    lines = normalize_ansi(raw)

    assert [line.plain for line in lines] == ["abc1234 msg", "|"]
    first_span = lines[0].spans[0]
    assert (first_span.start, first_span.end) == (0, 7)
    assert first_span.style.color.number == 3
    assert lines[1].spans[0].style.color.number == 1


def test_line_count_and_visible_length_are_preserved() -> None:
    raw = "* \x1b[1;32m(main)\x1b[0m subject\n\nlast"
    lines = normalize_ansi(raw)
    assert len(lines) == 3
    assert lines[0].plain == "* (main) subject"
    assert lines[1].plain == ""


def test_split_lines_handles_crlf_and_empty_input() -> None:
    assert split_lines("") == []
    assert split_lines("a\r\nb") == ["a", "b"]
