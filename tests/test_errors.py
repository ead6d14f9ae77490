"""Tests for error collection and strict mode."""

import unittest

from compacthtml import CompactHTML, ParseError, StrictModeError, TokenizerOpts, UnsupportedDoctypeError


def _codes(html):
    return [error.code for error in CompactHTML(html, collect_errors=True).errors]


class TestErrorCollection(unittest.TestCase):
    """Test that errors are collected when collect_errors=True."""

    def test_no_errors_by_default(self):
        """By default, errors list is not populated."""
        doc = CompactHTML("<p>\x00</p><!--><div")
        assert doc.errors == []

    def test_valid_html_no_errors(self):
        html = '<!DOCTYPE html><html><body><p class="a">Hi</p><br></body></html>'
        assert CompactHTML(html, collect_errors=True).errors == []

    def test_error_has_line_and_column(self):
        doc = CompactHTML("<p>\x00</p>", collect_errors=True)
        assert doc.errors == [ParseError("unexpected-null-character", line=1, column=4)]

    def test_error_column_after_newline(self):
        doc = CompactHTML("line1\n<!-->", collect_errors=True)
        assert doc.errors == [ParseError("abrupt-closing-of-empty-comment", line=2, column=1)]

    def test_multiline_error_positions(self):
        html = "<p>\n\n  <p class=a class=b>\x00"
        doc = CompactHTML(html, collect_errors=True)
        assert [(e.code, e.line, e.column) for e in doc.errors] == [
            ("duplicate-attribute", 3, 3),
            ("unexpected-null-character", 3, 22),
        ]

    def test_incorrectly_closed_comment_points_at_terminator(self):
        doc = CompactHTML("<!-- a --!>", collect_errors=True)
        assert doc.errors == [ParseError("incorrectly-closed-comment", line=1, column=8)]

    def test_tree_errors_have_no_location(self):
        doc = CompactHTML("</span>", collect_errors=True)
        assert len(doc.errors) == 1
        error = doc.errors[0]
        assert error.code == "end-tag-without-matching-open-element"
        assert error.line is None
        assert error.column is None

    def test_errors_are_in_document_order(self):
        assert _codes("<p>a</x><!-->") == [
            "end-tag-without-matching-open-element",
            "abrupt-closing-of-empty-comment",
        ]

    def test_recovery_still_produces_output(self):
        doc = CompactHTML("<p>\x00</p>", collect_errors=True)
        assert doc.errors
        assert doc.to_html() == "<p>\ufffd</p>"

    def test_error_codes(self):
        cases = [
            ("<", ["eof-before-tag-name"]),
            ("<   ", ["eof-before-tag-name"]),
            ("<div", ["eof-in-tag"]),
            ("<>", ["invalid-first-character-of-tag-name"]),
            ("<42>", ["invalid-first-character-of-tag-name"]),
            ("<?xml?>", ["unexpected-question-mark-instead-of-tag-name"]),
            ("<p/>", ["non-void-html-element-start-tag-with-trailing-solidus"]),
            ("<p></>", ["missing-end-tag-name"]),
            ("<p></p class=x>", ["end-tag-with-attributes"]),
            ("<!x>", ["incorrectly-opened-comment"]),
            ("<!-- x", ["eof-in-comment"]),
            ("<!---", ["eof-in-comment"]),
            ("<p>x<![CDATA[y]]>", ["cdata-in-html-content"]),
            ("<svg><![CDATA[y", ["eof-in-cdata"]),
            ("<pre>x", ["eof-in-raw-text"]),
            ("</b>", ["end-tag-without-matching-open-element"]),
        ]
        for html, expected in cases:
            with self.subTest(html=html):
                assert _codes(html) == expected

    def test_void_trailing_solidus_is_not_an_error(self):
        assert _codes("<br/><img src=x />") == []

    def test_verbatim_content_is_not_checked(self):
        assert _codes("<script>\x00</script>") == []


class TestStrictMode(unittest.TestCase):
    """Test strict mode that raises on first error."""

    def test_strict_mode_raises(self):
        with self.assertRaises(StrictModeError) as ctx:
            CompactHTML("<p>\x00</p>", strict=True)
        assert ctx.exception.error.code == "unexpected-null-character"
        assert ctx.exception.error.line == 1

    def test_strict_mode_error_is_syntax_error(self):
        with self.assertRaises(SyntaxError):
            CompactHTML("<p></p></p>", strict=True)

    def test_strict_mode_reports_first_error(self):
        with self.assertRaises(StrictModeError) as ctx:
            CompactHTML("<p>a</x><!-->", strict=True)
        assert ctx.exception.error.code == "end-tag-without-matching-open-element"

    def test_strict_mode_overrides_tokenizer_opts(self):
        opts = TokenizerOpts(collect_errors=False)
        with self.assertRaises(StrictModeError) as ctx:
            CompactHTML("<p>\x00</p>", strict=True, tokenizer_opts=opts)
        assert ctx.exception.error.code == "unexpected-null-character"

    def test_collect_errors_overrides_tokenizer_opts(self):
        doc = CompactHTML("</b>", collect_errors=True, tokenizer_opts=TokenizerOpts(discard_bom=True))
        assert [error.code for error in doc.errors] == ["end-tag-without-matching-open-element"]

    def test_strict_mode_accepts_clean_input(self):
        doc = CompactHTML("<!DOCTYPE html><p>ok</p>", strict=True)
        assert doc.errors == []
        assert doc.to_html() == "<!DOCTYPE html><p>ok</p>"

    def test_unsupported_doctype_is_not_a_strict_error(self):
        with self.assertRaises(UnsupportedDoctypeError):
            CompactHTML("<!DOCTYPE html5>", strict=True)


class TestParseError(unittest.TestCase):
    def test_str_with_location(self):
        assert str(ParseError("eof-in-tag", line=2, column=5)) == "(2,5): eof-in-tag"

    def test_str_with_message(self):
        error = ParseError("eof-in-tag", line=1, column=1, message="Unexpected end of input")
        assert str(error) == "(1,1): eof-in-tag - Unexpected end of input"

    def test_str_without_location(self):
        assert str(ParseError("cdata-in-html-content")) == "cdata-in-html-content"

    def test_repr(self):
        assert repr(ParseError("eof-in-tag", line=1, column=2)) == "ParseError('eof-in-tag', line=1, column=2)"
        assert repr(ParseError("eof-in-tag")) == "ParseError('eof-in-tag')"

    def test_equality(self):
        assert ParseError("x", line=1, column=1) == ParseError("x", line=1, column=1)
        assert ParseError("x", line=1, column=1) != ParseError("x", line=1, column=2)
        assert ParseError("x") != "x"


class TestUnsupportedDoctype(unittest.TestCase):
    def test_attrs_are_kept(self):
        with self.assertRaises(UnsupportedDoctypeError) as ctx:
            CompactHTML('<!DOCTYPE html PUBLIC "-//W3C//DTD HTML 4.01//EN">')
        assert ctx.exception.attrs == {"html": "", "PUBLIC": "", '"-//W3C//DTD': "", "HTML": "", '4.01//EN"': ""}

    def test_message_for_empty_doctype(self):
        with self.assertRaises(UnsupportedDoctypeError) as ctx:
            CompactHTML("<!DOCTYPE>")
        assert ctx.exception.attrs == {}
        assert "Only HTML5 documents are supported" in str(ctx.exception)


if __name__ == "__main__":
    unittest.main()
