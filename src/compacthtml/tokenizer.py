import re

from .attributes import parse_attributes
from .constants import DOCTYPE_TAG, VERBATIM_ELEMENTS, VOID_ELEMENTS
from .tokens import (
    CDataToken,
    CharacterTokens,
    CommentToken,
    DoctypeToken,
    EOFToken,
    ParseError,
    Tag,
)

_NON_WHITESPACE_PATTERN = re.compile(r"[^ \t\n\r]")
_NON_DASH_PATTERN = re.compile(r"[^-]")
_TAG_NAME_TERMINATOR_PATTERN = re.compile(r"[ \t\n\r>\[]")
# "-->" or the non-standard "--!>", whichever comes first
_COMMENT_END_PATTERN = re.compile(r"--!?>")

_CDATA_OPEN = "[CDATA"
_CDATA_CLOSE = "]]>"


class TokenizerOpts:
    __slots__ = ("collect_errors", "debug", "discard_bom")

    def __init__(self, collect_errors=False, debug=False, discard_bom=False):
        self.collect_errors = bool(collect_errors)
        self.debug = bool(debug)
        self.discard_bom = bool(discard_bom)


class Tokenizer:
    """Single pass scanner that classifies the input and feeds tokens to a sink.

    The sink must provide ``process_token(token)``. Scanning is lenient: every
    malformed construct maps to a fixed recovery, and only the sink may abort
    the run by raising.
    """

    DATA = 0
    TAG_OPEN = 1
    MARKUP_DECLARATION_OPEN = 2
    COMMENT = 3
    BOGUS_COMMENT = 4
    CDATA_SECTION = 5
    TAG_NAME = 6
    RAWTEXT = 7

    __slots__ = (
        "buffer",
        "length",
        "opts",
        "pos",
        "rawtext_tag",
        "sink",
        "state",
        "tag_start",
    )

    def __init__(self, sink, opts=None):
        self.sink = sink
        self.opts = opts or TokenizerOpts()

        self.state = self.DATA
        self.buffer = ""
        self.length = 0
        self.pos = 0
        self.tag_start = 0
        self.rawtext_tag = None

    def run(self, html):
        if html and html[0] == "\ufeff" and self.opts.discard_bom:
            html = html[1:]

        self.buffer = html or ""
        self.length = len(self.buffer)
        self.pos = 0
        self.tag_start = 0
        self.rawtext_tag = None
        self.state = self.DATA

        while True:
            state = self.state
            if state == self.DATA:
                if self._state_data():
                    break
            elif state == self.TAG_OPEN:
                if self._state_tag_open():
                    break
            elif state == self.MARKUP_DECLARATION_OPEN:
                if self._state_markup_declaration_open():
                    break
            elif state == self.COMMENT:
                if self._state_comment():
                    break
            elif state == self.BOGUS_COMMENT:
                if self._state_bogus_comment():
                    break
            elif state == self.CDATA_SECTION:
                if self._state_cdata_section():
                    break
            elif state == self.TAG_NAME:
                if self._state_tag_name():
                    break
            elif state == self.RAWTEXT:
                if self._state_rawtext():
                    break
            else:  # pragma: no cover
                msg = f"Unknown tokenizer state {state}"
                raise RuntimeError(msg)

        self._emit_token(EOFToken())

    # States ---------------------------------------------------------------
    #
    # Each state handler advances self.pos and returns True once tokenizing
    # must stop. Positions inside markup always point just past the "<".

    def _state_data(self):
        buffer = self.buffer
        pos = self.pos
        match = _NON_WHITESPACE_PATTERN.search(buffer, pos)
        if match is None:
            self.pos = self.length
            return True
        if buffer[pos] == "<":
            self.tag_start = pos
            self.pos = pos + 1
            self.state = self.TAG_OPEN
            return False

        # Leading whitespace stays part of the run; it collapses to one space.
        end = buffer.find("<", pos)
        if end == -1:
            end = self.length
        self._emit_text(buffer[pos:end], pos)
        self.pos = end
        return False

    def _state_tag_open(self):
        if self.pos >= self.length:
            self._emit_error("eof-before-tag-name", self.tag_start)
            self._emit_token(CharacterTokens("<", raw=True))
            return True
        if self.buffer[self.pos] == "!":
            self.state = self.MARKUP_DECLARATION_OPEN
        else:
            self.state = self.TAG_NAME
        return False

    def _state_markup_declaration_open(self):
        buffer = self.buffer
        pos = self.pos
        if buffer.startswith("!--", pos):
            self.state = self.COMMENT
        elif buffer.startswith(_CDATA_OPEN, pos + 1):
            self.pos = pos + 1
            self.state = self.CDATA_SECTION
        elif buffer.startswith(DOCTYPE_TAG, pos):
            # Case sensitive: "<!doctype html>" is a bogus comment
            self.state = self.TAG_NAME
        else:
            self.state = self.BOGUS_COMMENT
        return False

    def _state_comment(self):
        buffer = self.buffer
        body = self.pos + 3
        match = _NON_DASH_PATTERN.search(buffer, body)
        if match is None:
            self._emit_error("eof-in-comment", self.tag_start)
            self.pos = self.length
            return True
        if buffer[match.start()] == ">":
            # <!--> and <!--->
            self._emit_error("abrupt-closing-of-empty-comment", self.tag_start)
            self._emit_token(CommentToken(""))
            self.pos = match.start() + 1
            self.state = self.DATA
            return False

        # Searched from the "!" so that "<!--!>" closes on its own "--!>".
        match = _COMMENT_END_PATTERN.search(buffer, self.pos)
        if match is None:
            self._emit_error("eof-in-comment", self.tag_start)
            self.pos = self.length
            return True
        if match.group() == "--!>":
            self._emit_error("incorrectly-closed-comment", match.start())
        self._emit_token(CommentToken(buffer[body : max(body, match.start())]))
        self.pos = match.end()
        self.state = self.DATA
        return False

    def _state_bogus_comment(self):
        self._emit_error("incorrectly-opened-comment", self.tag_start)
        end = self.buffer.find(">", self.pos)
        if end == -1:
            self.pos = self.length
            return True
        self._emit_token(CommentToken(self.buffer[self.pos + 1 : end]))
        self.pos = end + 1
        self.state = self.DATA
        return False

    def _state_cdata_section(self):
        # self.pos is at "[CDATA"; the second "[" is optional
        start = self.pos + len(_CDATA_OPEN)
        if self.buffer.startswith("[", start):
            start += 1
        end = self.buffer.find(_CDATA_CLOSE, start)
        if end == -1:
            self._emit_error("eof-in-cdata", self.tag_start)
            data = self.buffer[start:]
            self.pos = self.length
        else:
            data = self.buffer[start:end]
            self.pos = end + len(_CDATA_CLOSE)
        self._emit_token(CDataToken(data))
        self.state = self.DATA
        return False

    def _state_tag_name(self):
        buffer = self.buffer
        match = _NON_WHITESPACE_PATTERN.search(buffer, self.pos)
        if match is None:
            self._emit_error("eof-before-tag-name", self.tag_start)
            self._emit_token(CharacterTokens("<", raw=True))
            self.pos = self.length
            return True
        start = match.start()
        match = _TAG_NAME_TERMINATOR_PATTERN.search(buffer, start)
        if match is None:
            self._emit_error("eof-in-tag", self.tag_start)
            self._emit_token(CharacterTokens("<" + buffer[start:], raw=True))
            self.pos = self.length
            return True
        name = buffer[start : match.start()]
        self.state = self.DATA
        if not name:
            # "<>" and "<[": the "<" is text, the rest is rescanned as data
            self._emit_error("invalid-first-character-of-tag-name", self.tag_start)
            self._emit_token(CharacterTokens("<", raw=True))
            self.pos = match.start()
            return False

        if name == "!" and buffer.startswith(_CDATA_OPEN, match.start()):
            # "< ![CDATA[...]]>" once leading whitespace is skipped
            self.pos = match.start()
            self.state = self.CDATA_SECTION
            return False

        duplicates = [] if self.opts.collect_errors else None
        attrs, self.pos = parse_attributes(buffer, match.start(), duplicates)
        if duplicates:
            for _ in duplicates:
                self._emit_error("duplicate-attribute", self.tag_start)

        if name.endswith("/") and name[:-1] in VOID_ELEMENTS and name[:-1] != DOCTYPE_TAG:
            name = name[:-1]
        if name == DOCTYPE_TAG:
            self._emit_token(DoctypeToken(attrs))
            return False
        if name in VOID_ELEMENTS:
            self._emit_token(Tag(Tag.START, name, attrs, self_closing=True))
            return False
        if name[0] == "/":
            if name == "/":
                self._emit_error("missing-end-tag-name", self.tag_start)
                return False
            if attrs:
                self._emit_error("end-tag-with-attributes", self.tag_start)
            self._emit_token(Tag(Tag.END, name[1:], attrs))
            return False
        if name in VERBATIM_ELEMENTS:
            self.rawtext_tag = Tag(Tag.START, name, attrs)
            self.state = self.RAWTEXT
            return False
        if "0" <= name[0] <= "9":
            self._emit_error("invalid-first-character-of-tag-name", self.tag_start)
            self._emit_token(CharacterTokens(f"&lt;{name}&gt;", raw=True))
            return False
        if name[0] == "?":
            self._emit_error("unexpected-question-mark-instead-of-tag-name", self.tag_start)
            return False
        if name.endswith("/"):
            self._emit_error("non-void-html-element-start-tag-with-trailing-solidus", self.tag_start)
            name = name[:-1]
        self._emit_token(Tag(Tag.START, name, attrs))
        return False

    def _state_rawtext(self):
        tag = self.rawtext_tag
        self.rawtext_tag = None
        closing = f"</{tag.name}>"
        end = self.buffer.find(closing, self.pos)
        if end == -1:
            # The element and everything after it is dropped
            self._emit_error("eof-in-raw-text", self.tag_start)
            self._emit_token(CharacterTokens("<" + tag.name, raw=True))
            self.pos = self.length
            return True
        self._emit_token(tag)
        # Always one raw child, even when empty
        self._emit_token(CharacterTokens(self.buffer[self.pos : end], raw=True))
        self._emit_token(Tag(Tag.END, tag.name))
        self.pos = end + len(closing)
        self.state = self.DATA
        return False

    # Emission -------------------------------------------------------------

    def _emit_text(self, data, offset):
        if self.opts.collect_errors:
            index = data.find("\x00")
            while index != -1:
                self._emit_error("unexpected-null-character", offset + index)
                index = data.find("\x00", index + 1)
        self._emit_token(CharacterTokens(data))

    def _emit_token(self, token):
        if self.opts.debug:
            self._debug_token(token)
        self.sink.process_token(token)

    def _emit_error(self, code, offset):
        if not self.opts.collect_errors:
            return
        line, column = self._location(offset)
        self._emit_token(ParseError(code, line=line, column=column))

    def _location(self, offset):
        """Return the 1-based (line, column) of ``offset`` in the buffer."""
        line = self.buffer.count("\n", 0, offset) + 1
        column = offset - self.buffer.rfind("\n", 0, offset)
        return line, column

    def _debug_token(self, token):
        """Print debug information about a token."""
        if isinstance(token, (CharacterTokens, CommentToken, CDataToken)):
            data = token.data
            preview = data[:20] if len(data) > 20 else data
            suffix = "..." if len(data) > 20 else ""
            print(f"Token: {type(token).__name__} {preview!r}{suffix}")
        elif isinstance(token, Tag):
            kind = "StartTag" if token.kind == Tag.START else "EndTag"
            print(f"Token: {kind} {token.name} {token.attrs or ''}".rstrip())
        elif isinstance(token, DoctypeToken):
            print(f"Token: Doctype {token.attrs}")
        elif isinstance(token, ParseError):
            print(f"Token: ParseError {token}")
        else:
            print(f"Token: {type(token).__name__}")
