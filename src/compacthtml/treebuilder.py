from .constants import CDATA_ELEMENTS, DOCTYPE_TAG, HEADING_CLOSE_DISTANCE, VOID_ELEMENTS
from .node import Document
from .text import normalize_text
from .tokens import (
    CDataToken,
    CharacterTokens,
    CommentToken,
    DoctypeToken,
    EOFToken,
    ParseError,
    Tag,
    UnsupportedDoctypeError,
)


def _heading_level(name):
    if len(name) == 2 and name[0] == "h" and "0" <= name[1] <= "9":
        return int(name[1])
    return None


class TreeBuilder:
    """Token sink that assembles the document tree.

    ``open_elements`` is a stack of handles into ``document``; the bottom entry
    is always the document root, which no end tag can close.
    """

    __slots__ = ("debug_enabled", "document", "errors", "collect_errors", "open_elements")

    def __init__(self, collect_errors=False, debug=False):
        self.document = Document()
        self.open_elements = [Document.ROOT]
        self.errors = []
        self.collect_errors = bool(collect_errors)
        self.debug_enabled = bool(debug)

    @property
    def current_node(self):
        return self.document.node(self.open_elements[-1])

    def debug(self, message):
        if self.debug_enabled:
            print(f"TreeBuilder: {message}")

    def _parse_error(self, code):
        if self.collect_errors:
            self.errors.append(ParseError(code))

    def process_token(self, token):
        self._TOKEN_HANDLERS[type(token)](self, token)

    def finish(self):
        unclosed = len(self.open_elements) - 1
        if unclosed:
            self.debug(f"{unclosed} element(s) left open at end of input")
        self.open_elements = [Document.ROOT]
        return self.document

    # Insertion ------------------------------------------------------------

    def _insert_text(self, data):
        document = self.document
        document.append_child(self.open_elements[-1], document.create_text(data))

    def _insert_element(self, name, attrs, *, push):
        document = self.document
        handle = document.create_element(name, attrs)
        document.append_child(self.open_elements[-1], handle)
        if push:
            self.open_elements.append(handle)
        return handle

    def _has_open_element_in(self, names):
        nodes = self.document.nodes
        return any(nodes[handle].name in names for handle in self.open_elements[1:])

    # Token handlers -------------------------------------------------------

    def _handle_parse_error(self, token):
        if self.collect_errors:
            self.errors.append(token)

    def _handle_characters(self, token):
        if token.raw:
            self._insert_text(token.data)
            return
        data = normalize_text(token.data)
        if data:
            self._insert_text(data)

    def _handle_comment(self, token):
        self.debug(f"dropped comment ({len(token.data)} chars)")

    def _handle_cdata(self, token):
        if not self._has_open_element_in(CDATA_ELEMENTS):
            self._parse_error("cdata-in-html-content")
            self.debug("dropped CDATA section outside svg/math")
            return
        self._insert_text(f"<![CDATA[{token.data}]]>")

    def _handle_doctype(self, token):
        if token.attrs != {"html": ""}:
            raise UnsupportedDoctypeError(token.attrs)
        self._insert_element(DOCTYPE_TAG, token.attrs, push=False)

    def _handle_tag(self, token):
        if token.kind == Tag.START:
            self._handle_start_tag(token)
        else:
            self._handle_end_tag(token)

    def _handle_start_tag(self, token):
        self._insert_element(token.name, token.attrs, push=token.name not in VOID_ELEMENTS)

    def _handle_end_tag(self, token):
        name = token.name
        open_elements = self.open_elements
        if len(open_elements) == 1:
            self._parse_error("end-tag-without-matching-open-element")
            self.debug(f"ignored </{name}> with no open elements")
            return

        current = self.current_node
        if current.name == name:
            open_elements.pop()
            return

        # </h2> closes an open <h4>, but not an open <h5>
        end_level = _heading_level(name)
        current_level = _heading_level(current.name)
        if end_level is not None and current_level is not None:
            if abs(end_level - current_level) <= HEADING_CLOSE_DISTANCE:
                self.debug(f"</{name}> closed <{current.name}>")
                open_elements.pop()
                return

        nodes = self.document.nodes
        for index in range(len(open_elements) - 1, 0, -1):
            if nodes[open_elements[index]].name == name:
                self.debug(f"</{name}> implicitly closed {len(open_elements) - index - 1} element(s)")
                del open_elements[index:]
                return

        self._parse_error("end-tag-without-matching-open-element")
        self.debug(f"ignored </{name}> with no matching open element")

    def _handle_eof(self, token):
        return

    _TOKEN_HANDLERS = {
        CDataToken: _handle_cdata,
        CharacterTokens: _handle_characters,
        CommentToken: _handle_comment,
        DoctypeToken: _handle_doctype,
        EOFToken: _handle_eof,
        ParseError: _handle_parse_error,
        Tag: _handle_tag,
    }
