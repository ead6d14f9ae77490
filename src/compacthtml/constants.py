"""HTML Element Constants

This module defines the fixed tag sets the minimizer relies on. The sets are
part of the output contract: changing membership changes the serialized form
of existing documents.

Usage:
    from compacthtml.constants import VOID_ELEMENTS, VERBATIM_ELEMENTS

References:
    - https://html.spec.whatwg.org/multipage/syntax.html#void-elements
    - https://html.spec.whatwg.org/multipage/syntax.html#raw-text-elements
"""

# Elements that never have children and never get an end tag. "!DOCTYPE" is
# listed here because it is stored in the tree as an ordinary childless node.
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
        "!DOCTYPE",
    },
)

DOCTYPE_TAG = "!DOCTYPE"

# Elements whose content is copied byte-for-byte up to the literal end tag.
VERBATIM_ELEMENTS = frozenset(
    {
        "script",
        "style",
        "pre",
        "code",
        "textarea",
        "plaintext",
    },
)

# A CDATA section is only kept when one of these is an open ancestor.
CDATA_ELEMENTS = frozenset({"svg", "math"})

# Sentinel node names. Markup such as <#text> can still produce an element
# with one of these names, so nodes are classified by kind, never by name.
TEXT_NODE = "#text"
DOCUMENT_NODE = "#document"

# Only these four count as whitespace, both for text collapsing and for
# skipping between tokens. Form feed is not included.
WHITESPACE = " \t\n\r"

REPLACEMENT_CHARACTER = "\ufffd"

# End tags hN may close an open hM when |N - M| is at most this.
HEADING_CLOSE_DISTANCE = 2
