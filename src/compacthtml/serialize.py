"""HTML serialization for CompactHTML documents."""

from .constants import DOCTYPE_TAG, VOID_ELEMENTS
from .node import Document, Node


def serialize_start_tag(name, attrs):
    """Render ``<name attr="value" ...>``.

    Attributes are always written in lexicographic key order so equal trees
    serialize identically. Empty values are dropped, except on the doctype
    where they render as a bare name (``<!DOCTYPE html>``). Values are written
    as parsed, without escaping.
    """
    parts = ["<", name]
    if attrs:
        for key in sorted(attrs):
            value = attrs[key]
            if value == "":
                if name == DOCTYPE_TAG:
                    parts.extend([" ", key])
                continue
            parts.extend([" ", key, '="', value, '"'])
    parts.append(">")
    return "".join(parts)


def serialize_end_tag(name):
    return f"</{name}>"


def to_html(document, indent=0, newline=False):
    """Convert a document to its minimized HTML string.

    ``indent`` is the number of spaces per nesting level (0 disables
    indentation) and ``newline`` ends every emitted tag or text run with a line
    break. The two options are independent.
    """
    nodes = document.nodes
    eol = "\n" if newline else ""
    parts = []

    # (handle, depth, is_end_tag); the root itself is never emitted
    stack = [(child, 1, False) for child in reversed(nodes[Document.ROOT].children)]
    while stack:
        handle, depth, is_end_tag = stack.pop()
        node = nodes[handle]
        prefix = " " * (indent * (depth - 1)) if indent > 0 else ""

        if is_end_tag:
            parts.append(f"{prefix}{serialize_end_tag(node.name)}{eol}")
            continue

        if node.kind == Node.TEXT:
            parts.append(f"{prefix}{node.data}{eol}")
            continue

        parts.append(f"{prefix}{serialize_start_tag(node.name, node.attrs)}{eol}")
        if node.name not in VOID_ELEMENTS:
            stack.append((handle, depth, True))
        stack.extend((child, depth + 1, False) for child in reversed(node.children))

    return "".join(parts)
