"""Tests for tree construction."""

import io
import unittest
from contextlib import redirect_stdout

from compacthtml import CompactHTML, UnsupportedDoctypeError
from compacthtml.node import Document, Node
from compacthtml.tokens import CDataToken, CharacterTokens, DoctypeToken, EOFToken, Tag
from compacthtml.treebuilder import TreeBuilder


def tree(html):
    return CompactHTML(html).root.to_test_format()


class TestTreeShape(unittest.TestCase):
    def test_nesting(self):
        assert tree("<div><p>a</div>b") == "\n".join(
            [
                "| <div>",
                "|   <p>",
                '|     "a"',
                '| "b"',
            ],
        )

    def test_attributes_in_test_format(self):
        assert tree('<a target=_blank href="x">y</a>') == "\n".join(
            [
                "| <a>",
                '|   href="x"',
                '|   target="_blank"',
                '|   "y"',
            ],
        )

    def test_void_elements_are_leaves(self):
        assert tree("<p><br>x<img src=a>y</p>") == "\n".join(
            [
                "| <p>",
                "|   <br>",
                '|   "x"',
                "|   <img>",
                '|     src="a"',
                '|   "y"',
            ],
        )

    def test_doctype_is_a_leaf(self):
        assert tree("<!DOCTYPE html>x") == "\n".join(
            [
                "| <!DOCTYPE>",
                '|   html=""',
                '| "x"',
            ],
        )

    def test_verbatim_element_has_one_raw_child(self):
        document = CompactHTML("<pre>  a  <b> </pre>").root
        pre = document.children(Document.ROOT)[0]
        assert pre.name == "pre"
        children = document.children(pre.handle)
        assert len(children) == 1
        assert children[0].is_text
        assert children[0].data == "  a  <b> "

    def test_empty_verbatim_element_has_empty_raw_child(self):
        document = CompactHTML("<textarea></textarea>").root
        textarea = document.children(Document.ROOT)[0]
        children = document.children(textarea.handle)
        assert len(children) == 1
        assert children[0].is_text
        assert children[0].data == ""

    def test_whitespace_only_runs_create_no_nodes(self):
        document = CompactHTML("<div>\n  <p>x</p>\n</div>").root
        div = document.children(Document.ROOT)[0]
        assert [child.name for child in document.children(div.handle)] == ["p"]

    def test_heading_rule(self):
        assert tree("<h2><h4></h2>x") == "\n".join(["| <h2>", "|   <h4>", '|   "x"'])
        assert tree("<h3><h1></h3>x") == "\n".join(["| <h3>", "|   <h1>", '|   "x"'])
        assert tree("<h1><h4></h1>x") == "\n".join(["| <h1>", "|   <h4>", '| "x"'])

    def test_heading_rule_needs_single_digit_levels(self):
        assert tree("<h2><h10></h2>x") == "\n".join(["| <h2>", "|   <h10>", '| "x"'])

    def test_end_tag_pops_through_intermediates(self):
        assert tree("<a><b><c></a>x") == "\n".join(["| <a>", "|   <b>", "|     <c>", '| "x"'])

    def test_end_tag_closes_nearest_match(self):
        assert tree("<div><div><span></div>x") == "\n".join(
            ["| <div>", "|   <div>", "|     <span>", '|   "x"'],
        )

    def test_cdata_only_under_svg_or_math(self):
        assert tree("<p><![CDATA[x]]></p>") == "| <p>"
        assert tree("<svg><g><![CDATA[x]]></g></svg>") == "\n".join(
            ["| <svg>", "|   <g>", '|     "<![CDATA[x]]>"'],
        )


class TestTreeBuilderDirect(unittest.TestCase):
    def test_open_elements_track_handles(self):
        builder = TreeBuilder()
        builder.process_token(Tag(Tag.START, "div"))
        builder.process_token(Tag(Tag.START, "span"))
        assert builder.open_elements == [Document.ROOT, 1, 2]
        assert builder.current_node.name == "span"

        builder.process_token(Tag(Tag.END, "div"))
        assert builder.open_elements == [Document.ROOT]
        assert builder.current_node.is_document

    def test_void_start_tag_is_not_pushed(self):
        builder = TreeBuilder()
        builder.process_token(Tag(Tag.START, "hr", self_closing=True))
        assert builder.open_elements == [Document.ROOT]
        assert len(builder.document) == 2

    def test_root_is_never_popped(self):
        builder = TreeBuilder(collect_errors=True)
        builder.process_token(Tag(Tag.END, "#document"))
        assert builder.open_elements == [Document.ROOT]
        assert [error.code for error in builder.errors] == ["end-tag-without-matching-open-element"]

    def test_raw_characters_are_not_normalized(self):
        builder = TreeBuilder()
        builder.process_token(CharacterTokens("  a\n\nb  ", raw=True))
        builder.process_token(CharacterTokens("  a\n\nb  "))
        document = builder.finish()
        assert [node.data for node in document.children(Document.ROOT)] == ["  a\n\nb  ", " a b "]

    def test_cdata_ancestor_search_skips_root(self):
        builder = TreeBuilder()
        builder.process_token(CDataToken("x"))
        assert builder.document.children(Document.ROOT) == []

    def test_unsupported_doctype_raises(self):
        builder = TreeBuilder()
        with self.assertRaises(UnsupportedDoctypeError):
            builder.process_token(DoctypeToken({"html": "", "public": ""}))

    def test_finish_resets_stack(self):
        builder = TreeBuilder()
        builder.process_token(Tag(Tag.START, "p"))
        builder.process_token(EOFToken())
        document = builder.finish()
        assert builder.open_elements == [Document.ROOT]
        assert document.to_test_format() == "| <p>"

    def test_debug_output(self):
        out = io.StringIO()
        with redirect_stdout(out):
            CompactHTML("<div><span></div></b>", debug=True)
        output = out.getvalue()
        assert "TreeBuilder: </div> implicitly closed 1 element(s)" in output
        assert "TreeBuilder: ignored </b> with no open elements" in output


class TestDocument(unittest.TestCase):
    def test_root(self):
        document = Document()
        assert len(document) == 1
        assert document.root.is_document
        assert document.root.handle == Document.ROOT

    def test_handles_are_sequential(self):
        document = Document()
        assert document.create_element("p") == 1
        assert document.create_text("x") == 2
        assert document.node(2).kind == Node.TEXT

    def test_cannot_append_to_text(self):
        document = Document()
        text = document.create_text("x")
        element = document.create_element("p")
        with self.assertRaises(ValueError):
            document.append_child(text, element)

    def test_cannot_append_root_or_self(self):
        document = Document()
        element = document.create_element("p")
        with self.assertRaises(ValueError):
            document.append_child(element, Document.ROOT)
        with self.assertRaises(ValueError):
            document.append_child(element, element)

    def test_empty_name_rejected(self):
        with self.assertRaises(ValueError):
            Node("")

    def test_walk_depths(self):
        document = CompactHTML("<a><b>x</b></a><c>").root
        assert [(node.name, depth) for node, depth in document.walk()] == [
            ("a", 1),
            ("b", 2),
            ("#text", 3),
            ("c", 1),
        ]


if __name__ == "__main__":
    unittest.main()
