"""
Tests for the substring search primitives.
"""

from hameln.text import Span, extract_between, is_decimal_digit, skip_past, skip_while


class TestExtractBetween:
    """Test extract_between."""

    def test_match_and_remainder(self):
        """Test the match sits between the markers and the rest follows the end marker."""
        match, rest = extract_between("head<b>bold</b>tail", "<b>", "</b>")

        assert str(match) == "bold"
        assert str(rest) == "tail"

    def test_first_occurrences_win(self):
        """Test that the leftmost markers are used."""
        match, rest = extract_between("<b>1</b><b>2</b>", "<b>", "</b>")

        assert match == "1"
        assert rest == "<b>2</b>"

    def test_missing_start_marker(self):
        """Test None when the start marker is absent."""
        assert extract_between("no markers here</b>", "<b>", "</b>") is None

    def test_end_marker_only_before_start(self):
        """Test None when the end marker never follows the start marker."""
        assert extract_between("</b> then <b>open", "<b>", "</b>") is None

    def test_markers_do_not_overlap(self):
        """Test the end marker is searched only after the start marker ends."""
        assert extract_between("<<>", "<<", "<>") is None

    def test_same_marker_uses_successive_occurrences(self):
        """Test equal markers delimit the first quoted section."""
        match, rest = extract_between('x"a"b"c"', '"', '"')

        assert match == "a"
        assert rest == 'b"c"'

    def test_empty_match(self):
        """Test adjacent markers give an empty match."""
        match, rest = extract_between("<i></i>!", "<i>", "</i>")

        assert match == ""
        assert len(match) == 0
        assert rest == "!"

    def test_results_borrow_from_source(self):
        """Test that returned spans point into the input string."""
        text = "prefix[value]suffix"
        match, rest = extract_between(text, "[", "]")

        assert match.source is text
        assert rest.source is text
        assert (match.start, match.end) == (7, 12)
        assert (rest.start, rest.end) == (13, len(text))

    def test_search_stays_inside_view(self):
        """Test that a span's bounds limit the search."""
        source = "<b>a</b>|<b>c</b>"
        view = Span.of(source).slice(0, 9)

        assert extract_between(view, "|", "<b>") is None
        match, rest = extract_between(view, "<b>", "</b>")
        assert match == "a"
        assert rest == "|"

    def test_repeated_calls_walk_forward(self):
        """Test chained calls on remainders visit every section once."""
        rest = Span.of("[1][2][3]")
        seen = []
        while True:
            found = extract_between(rest, "[", "]")
            if found is None:
                break
            match, rest = found
            seen.append(str(match))

        assert seen == ["1", "2", "3"]
        assert len(rest) == 0


class TestSkipPast:
    """Test skip_past."""

    def test_skips_first_occurrence(self):
        """Test the remainder starts after the first marker."""
        assert skip_past("a>b>c", ">") == "b>c"

    def test_marker_at_end(self):
        """Test an empty remainder when the marker ends the text."""
        rest = skip_past("abc>", ">")

        assert rest is not None
        assert str(rest) == ""

    def test_missing_marker(self):
        """Test None when the marker is absent."""
        assert skip_past("abc", "<a ") is None


class TestSkipWhile:
    """Test skip_while."""

    def test_drops_leading_run(self):
        """Test leading digits are removed."""
        assert skip_while("123>name", is_decimal_digit) == ">name"

    def test_first_character_fails(self):
        """Test the text is returned unchanged."""
        view = Span.of("abc")
        rest = skip_while(view, is_decimal_digit)

        assert rest == "abc"
        assert (rest.start, rest.end) == (view.start, view.end)

    def test_whole_text_matches(self):
        """Test an empty remainder when every character matches."""
        assert skip_while("2024", is_decimal_digit) == ""

    def test_empty_text(self):
        """Test empty input yields empty output."""
        assert skip_while("", is_decimal_digit) == ""

    def test_idempotent(self):
        """Test applying the skip twice equals applying it once."""
        once = skip_while("007bond", is_decimal_digit)
        twice = skip_while(once, is_decimal_digit)

        assert twice == once
        assert (twice.start, twice.end) == (once.start, once.end)

    def test_works_per_character(self):
        """Test multi-byte characters are skipped as single characters."""
        assert skip_while("ああいう", lambda c: c == "あ") == "いう"

    def test_only_ascii_digits(self):
        """Test full-width digits are not treated as decimal digits."""
        assert skip_while("１２3", is_decimal_digit) == "１２3"


class TestSpan:
    """Test the Span view."""

    def test_of_wraps_whole_string(self):
        """Test wrapping a string covers all of it."""
        span = Span.of("hello")

        assert (span.start, span.end) == (0, 5)
        assert span.text == "hello"

    def test_of_returns_span_unchanged(self):
        """Test wrapping a span is a no-op."""
        span = Span("hello", 1, 3)

        assert Span.of(span) is span

    def test_equality(self):
        """Test spans compare by text."""
        assert Span("abc", 1, 2) == Span("xbx", 1, 2)
        assert Span("abc", 1, 2) == "b"
        assert Span("abc", 1, 2) != "c"

    def test_find_is_absolute_and_bounded(self):
        """Test find returns source offsets within the view."""
        span = Span("aXbXc", 2, 4)

        assert span.find("X") == 3
        assert span.find("a") == -1
