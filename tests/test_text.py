from scrivener.core.text import is_blank, line_count, span_for_line, span_for_range, to_lines


def test_to_lines_normalizes_every_line_ending():
    assert to_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]


def test_to_lines_keeps_trailing_empty_line():
    assert to_lines("a\n") == ["a", ""]
    assert to_lines("") == [""]


def test_to_lines_is_idempotent():
    text = "one\r\ntwo\r\rthree\n"
    once = to_lines(text)
    assert to_lines("\n".join(once)) == once


def test_line_count_and_blank_detection():
    assert line_count("a\r\nb") == 2
    assert is_blank("   \t")
    assert not is_blank(" x ")


def test_span_helpers():
    assert span_for_line(4).start_line == 4
    assert span_for_line(4).end_line == 4
    span = span_for_range(2, 5)
    assert (span.start_line, span.end_line) == (2, 5)
