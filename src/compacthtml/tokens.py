class Tag:
    __slots__ = ("attrs", "kind", "name", "self_closing")

    START = 0
    END = 1

    def __init__(self, kind, name, attrs=None, self_closing=False):
        self.kind = kind
        self.name = name
        self.attrs = attrs if attrs is not None else {}
        self.self_closing = bool(self_closing)

    def __repr__(self):
        attrs = " ".join(f"{name}={value!r}" for name, value in self.attrs.items())
        closing = " /" if self.self_closing else ""
        kind_str = "start" if self.kind == self.START else "end"
        return f"<{kind_str}:{self.name}{closing} {attrs}>"


class CharacterTokens:
    """A run of text. Raw runs are inserted as-is, others get normalized."""

    __slots__ = ("data", "raw")

    def __init__(self, data, raw=False):
        self.data = data
        self.raw = bool(raw)


class CommentToken:
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data


class CDataToken:
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data


class DoctypeToken:
    __slots__ = ("attrs",)

    def __init__(self, attrs):
        self.attrs = attrs if attrs is not None else {}


class EOFToken:
    __slots__ = ()


class ParseError:
    """Represents a parse error with location information."""

    __slots__ = ("code", "column", "line", "message")

    def __init__(self, code, line=None, column=None, message=None):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or code

    def __repr__(self):
        if self.line is not None and self.column is not None:
            return f"ParseError({self.code!r}, line={self.line}, column={self.column})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.line is not None and self.column is not None:
            if self.message != self.code:
                return f"({self.line},{self.column}): {self.code} - {self.message}"
            return f"({self.line},{self.column}): {self.code}"
        if self.message != self.code:
            return f"{self.code} - {self.message}"
        return self.code

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.code == other.code and self.line == other.line and self.column == other.column

    __hash__ = None  # Unhashable since we define __eq__


class UnsupportedDoctypeError(ValueError):
    """Raised for any DOCTYPE other than the HTML5 ``<!DOCTYPE html>``."""

    def __init__(self, attrs):
        self.attrs = dict(attrs)
        if self.attrs:
            content = " ".join(f"{k}={v!r}" if v else k for k, v in self.attrs.items())
        else:
            content = "<empty>"
        super().__init__(f"Only HTML5 documents are supported, got DOCTYPE {content}")
