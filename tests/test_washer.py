from __future__ import annotations

import logging

import pytest
from rich.style import Style

from logwash.errors import ErrorCode, LogWashError
from logwash.models import CherryMarker, LogSettings, LogStyle, SideMarker, Signature
from logwash.reflog import ReflogLabel
from logwash.washer import LogWasher

ONELINE_LOG = (
    "* a1b2c3d (HEAD -> main) G[Alice][1700000000]Add parser\n"
    "* 0f9e8d7 [Bob][1699990000]Fix typo\n"
    "|\\\n"
    "| * 1234abc B[Carol][1699900000]Risky change\n"
    "|/\n"
    "* 5678def [Dave][1699800000]Initial import\n"
)

LONG_LOG = (
    "* commit 1111111111111111111111111111111111111111 (HEAD -> main)\n"
    "| Author: Alice <alice@example.com>\n"
    "| Date:   Mon Nov 13 10:00:00 2023\n"
    "|\n"
    "|     Subject one\n"
    "|\n"
    "* commit 2222222222222222222222222222222222222222\n"
    "  Author: Bob <bob@example.com>\n"
)


@pytest.fixture()
def washer() -> LogWasher:
    return LogWasher()


def _entry_lines(result):
    return [line for line in result.lines if line.kind == "entry"]


def test_oneline_entries_in_source_order(washer: LogWasher) -> None:
    result = washer.wash(ONELINE_LOG, LogStyle.ONELINE)

    assert [entry.hash for entry in result.entries] == ["a1b2c3d", "0f9e8d7", "1234abc", "5678def"]
    assert result.produced_count == 4
    assert result.show_more is False
    first = result.entries[0]
    assert first.author == "Alice"
    assert first.date == "1700000000"
    assert first.refs == "(HEAD -> main)"
    assert first.signature is Signature.GOOD
    assert result.entries[2].signature is Signature.BAD
    assert result.entries[1].signature is None
    assert all(entry.style is LogStyle.ONELINE for entry in result.entries)


def test_oneline_display_lines(washer: LogWasher) -> None:
    result = washer.wash(ONELINE_LOG, "oneline")
    plains = [line.plain for line in result.lines]

    assert plains[0] == "a1b2c3d * HEAD main Add parser"
    assert plains[1] == "0f9e8d7 * Fix typo"
    assert plains[2] == " " * 8 + "|\\"
    assert plains[-1] == ""
    assert result.lines[-1].kind == "separator"
    assert result.lines[2].kind == "passthrough"


def test_signature_selects_message_style(washer: LogWasher) -> None:
    result = washer.wash(ONELINE_LOG, LogStyle.ONELINE)
    good_line = result.lines[0].text
    styles = {span.style for span in good_line.spans}
    assert "log.signature.good" in styles
    assert "log.hash" in styles
    plain_line = result.lines[1].text
    assert "log.message" in {span.style for span in plain_line.spans}


def test_unicode_graph_translation() -> None:
    washer = LogWasher(LogSettings(unicode_graph=True))
    result = washer.wash(ONELINE_LOG, LogStyle.ONELINE)
    assert result.lines[0].plain.startswith("a1b2c3d ◆ ")
    assert result.lines[2].plain.endswith("│╲")
    assert result.entries[0].graph == "* "


def test_ansi_colors_survive_into_display(washer: LogWasher) -> None:
    raw = "\x1b[31m*\x1b[m abc1234 [Alice][1700000000]\x1b[32mgreen subject\x1b[m\n"
    result = washer.wash(raw, LogStyle.ONELINE)

    assert result.entries[0].message == "green subject"
    line = result.lines[0].text
    assert line.plain == "abc1234 * green subject"
    colors = [span.style.color.number for span in line.spans if isinstance(span.style, Style) and span.style.color]
    assert 1 in colors
    assert 2 in colors


def test_cutoff_emits_more_marker_when_records_remain(washer: LogWasher) -> None:
    raw = "a1 [A][1]one\nb2 [B][2]two\nc3 [C][3]three\n"
    result = washer.wash(raw, LogStyle.ONELINE, cutoff=2)

    assert [entry.hash for entry in result.entries] == ["a1", "b2"]
    assert result.produced_count == 2
    assert result.show_more is True
    assert result.lines[-1].kind == "more"
    assert "more history" in result.lines[-1].plain


def test_exact_cutoff_without_more_records_has_no_marker(washer: LogWasher) -> None:
    raw = "a1 [A][1]one\nb2 [B][2]two\n"
    result = washer.wash(raw, LogStyle.ONELINE, cutoff=2)

    assert result.produced_count == 2
    assert result.show_more is False
    assert all(line.kind != "more" for line in result.lines)


def test_entries_never_exceed_cutoff(washer: LogWasher) -> None:
    raw = "".join(f"{index:07x} [A][1]msg {index}\n" for index in range(1, 30))
    result = washer.wash(raw, LogStyle.ONELINE, cutoff=10)
    assert len([entry for entry in result.entries if entry.hash]) == 10


@pytest.mark.parametrize("cutoff", [0, -3])
def test_non_positive_cutoff_is_rejected(washer: LogWasher, cutoff: int) -> None:
    with pytest.raises(LogWashError) as exc_info:
        washer.wash("a1 [A][1]one\n", LogStyle.ONELINE, cutoff=cutoff)
    assert exc_info.value.code == ErrorCode.INVALID_INPUT


def test_outside_log_view_there_is_no_cutoff(washer: LogWasher) -> None:
    raw = "a1 [A][1]one\nb2 [B][2]two\nc3 [C][3]three\n"
    result = washer.wash(raw, LogStyle.ONELINE, cutoff=1, log_view=False)
    assert result.produced_count == 3
    assert result.cutoff is None
    assert result.lines[-1].kind == "separator"


def test_long_style_consumes_continuation_lines(washer: LogWasher) -> None:
    result = washer.wash(LONG_LOG, LogStyle.LONG)

    assert [entry.hash for entry in result.entries] == [
        "1111111111111111111111111111111111111111",
        "2222222222222222222222222222222222222222",
    ]
    first = result.entries[0]
    assert first.refs == "(HEAD -> main)"
    assert first.message == (
        "Author: Alice <alice@example.com>\nDate:   Mon Nov 13 10:00:00 2023\nSubject one"
    )
    kinds = [line.kind for line in result.lines]
    assert kinds == [
        "entry",
        "continuation",
        "continuation",
        "continuation",
        "continuation",
        "continuation",
        "entry",
        "continuation",
        "separator",
    ]
    assert all(
        line.entry_hash == first.hash for line in result.lines[1:6]
    )


def test_long_style_continuation_lines_align_under_full_hash(washer: LogWasher) -> None:
    result = washer.wash(LONG_LOG, LogStyle.LONG)
    entry, author = result.lines[0].plain, result.lines[1].plain

    assert entry.index("*") == 41
    assert author.index("|") == entry.index("*")
    assert result.lines[3].plain == " " * 41 + "|"


def test_graph_only_lines_align_with_wide_hashes(washer: LogWasher) -> None:
    raw = "* a1b2c3d4e5 [A][1]one\n|\\\n| * 0f9e8d7c6b [B][2]two\n"
    plains = [line.plain for line in washer.wash(raw, LogStyle.ONELINE).lines]
    assert plains[0] == "a1b2c3d4e5 * one"
    assert plains[1] == " " * 11 + "|\\"


def test_graph_column_carries_graph_style(washer: LogWasher) -> None:
    line = washer.wash(ONELINE_LOG, LogStyle.ONELINE).lines[2].text
    graph_spans = [span for span in line.spans if span.style == "log.graph"]
    assert [(span.start, span.end) for span in graph_spans] == [(8, 10)]


def test_long_style_truncated_record_is_finalized(washer: LogWasher, caplog) -> None:
    raw = "commit 3333333333333333333333333333333333333333\n"
    with caplog.at_level(logging.DEBUG, logger="logwash.washer"):
        result = washer.wash(raw, LogStyle.LONG)
    assert len(result.entries) == 1
    assert result.entries[0].message is None
    assert "end of input" in caplog.text


def test_cherry_records_are_reversed(washer: LogWasher) -> None:
    raw = "+ 1111111 oldest\n- 2222222 middle\n+ 3333333 newest\n"
    result = washer.wash(raw, LogStyle.CHERRY)

    assert [entry.hash for entry in result.entries] == ["3333333", "2222222", "1111111"]
    assert result.entries[1].cherry_marker is CherryMarker.EQUIVALENT
    assert result.entries[0].cherry_marker is CherryMarker.UNMATCHED
    assert result.lines[0].plain == "+ 3333333 newest"
    assert result.lines[-1].kind == "entry"


def test_module_side_markers(washer: LogWasher) -> None:
    result = washer.wash("> abc1234 pulled\n< def5678 dropped\n", LogStyle.MODULE)
    assert [entry.side_marker for entry in result.entries] == [SideMarker.INCOMING, SideMarker.OUTGOING]
    assert result.lines[0].plain == "> abc1234 pulled"


def test_reflog_entries(washer: LogWasher) -> None:
    raw = (
        "abc1234 [Alice] [1700000000] HEAD@{0} commit (amend): fixed typo\n"
        "def5678 [Alice] [1699990000] HEAD@{1} checkout: moving from main to dev\n"
    )
    result = washer.wash(raw, LogStyle.REFLOG)

    first, second = result.entries
    assert first.reflog_selector == "0"
    assert first.reflog_subject == "commit (amend)"
    assert first.message == "fixed typo"
    assert first.author == "Alice"
    assert second.reflog_subject == "checkout"
    line = result.lines[0].text
    assert line.plain == "abc1234 0  " + "amend".ljust(16) + " fixed typo"
    assert ReflogLabel.AMEND.value in {span.style for span in line.spans}


def test_bisect_log_resolves_placeholder() -> None:
    raw = (
        "# bad: [0123456789abcdef0123456789abcdef01234567] Break things\n"
        "# good: [89abcdef0123456789abcdef0123456789abcdef] Works\n"
        "git bisect start\n"
    )
    result = LogWasher().wash(raw, LogStyle.BISECT_LOG)
    assert [entry.hash for entry in result.entries] == ["0123456", "89abcde"]
    assert result.entries[0].refs == "bad:"
    assert result.lines[0].plain == "0123456 bad: Break things"
    assert result.lines[2].plain == "git bisect start"
    assert result.lines[2].kind == "passthrough"

    custom = LogWasher(resolve_short_hash=lambda placeholder: "short-" + placeholder[:3])
    assert custom.wash(raw, LogStyle.BISECT_LOG).entries[0].hash == "short-012"


def test_bisect_visualize(washer: LogWasher) -> None:
    result = washer.wash("* abc1234 (refs/bisect/bad) Break things\n| \n", LogStyle.BISECT_VISUALIZE)
    assert result.entries[0].refs == "(refs/bisect/bad)"
    assert result.lines[0].plain == "abc1234 * bad Break things"
    assert result.lines[1].plain == "| "


def test_unmatched_lines_pass_through_unchanged(washer: LogWasher) -> None:
    raw = "warning: something odd\n+ abc1234 real\n"
    result = washer.wash(raw, LogStyle.CHERRY)
    assert [line.plain for line in result.lines] == ["+ abc1234 real", "warning: something odd"]
    assert len(result.entries) == 1


def test_unknown_style_raises(washer: LogWasher) -> None:
    with pytest.raises(LogWashError):
        washer.wash("abc", "unknown")


def test_passes_are_independent(washer: LogWasher) -> None:
    raw = "a1 [A][1]one\nb2 [B][2]two\nc3 [C][3]three\n"
    first = washer.wash(raw, LogStyle.ONELINE, cutoff=2)
    second = washer.wash(raw, LogStyle.ONELINE, cutoff=5)
    assert first.produced_count == 2
    assert second.produced_count == 3


def test_wash_pass_is_logged(washer: LogWasher, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="logwash.washer"):
        washer.wash(ONELINE_LOG, LogStyle.ONELINE)
    assert "wash_pass" in caplog.text
    assert '"entries": 4' in caplog.text


def test_payload_is_json_ready(washer: LogWasher) -> None:
    payload = washer.wash(ONELINE_LOG, LogStyle.ONELINE, cutoff=2).to_payload()
    assert payload["status"] == "success"
    assert payload["count"] == 2
    assert payload["show_more"] is True
    assert payload["entries"][0]["signature"] == "good"
    assert payload["lines"][0]["text"] == "a1b2c3d * HEAD main Add parser"
