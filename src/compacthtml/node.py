from .constants import DOCUMENT_NODE, TEXT_NODE


class Node:
    """A single entry in a :class:`Document` arena.

    - name: tag name, or "#text" / "#document" for the sentinel kinds
    - attrs: dict of attribute name to value (elements only)
    - data: text content (text leaves only)
    - children: list of handles into the owning document
    """

    __slots__ = ("attrs", "children", "data", "handle", "kind", "name")

    ELEMENT = 0
    TEXT = 1
    DOCUMENT = 2

    def __init__(self, name, attrs=None, data=None, kind=ELEMENT, handle=None):
        if name is None or name == "":
            msg = "Empty tag name passed to Node constructor"
            raise ValueError(msg)
        self.name = name
        self.kind = kind
        self.handle = handle
        self.data = data
        self.attrs = attrs if attrs is not None else {}
        self.children = []

    @property
    def is_text(self):
        return self.kind == Node.TEXT

    @property
    def is_document(self):
        return self.kind == Node.DOCUMENT

    def __repr__(self):
        if self.kind == Node.TEXT:
            return f"<Node #{self.handle} text {self.data!r}>"
        return f"<Node #{self.handle} {self.name} children={len(self.children)}>"


class Document:
    """Arena that owns every node of one parsed tree.

    Nodes refer to their children by integer handle, so the tree builder can
    keep a stack of handles while the arena keeps growing.
    """

    __slots__ = ("nodes",)

    ROOT = 0

    def __init__(self):
        self.nodes = [Node(DOCUMENT_NODE, kind=Node.DOCUMENT, handle=self.ROOT)]

    def __len__(self):
        return len(self.nodes)

    @property
    def root(self):
        return self.nodes[self.ROOT]

    def node(self, handle):
        return self.nodes[handle]

    def _add(self, node):
        node.handle = len(self.nodes)
        self.nodes.append(node)
        return node.handle

    def create_element(self, name, attrs=None):
        return self._add(Node(name, attrs=attrs))

    def create_text(self, data):
        return self._add(Node(TEXT_NODE, data=data, kind=Node.TEXT))

    def append_child(self, parent, child):
        parent_node = self.nodes[parent]
        if parent_node.kind == Node.TEXT:
            msg = f"Cannot append node #{child} to text node #{parent}"
            raise ValueError(msg)
        if child == self.ROOT or child == parent:
            msg = f"Appending node #{child} to #{parent} would create a cycle"
            raise ValueError(msg)
        parent_node.children.append(child)

    def children(self, handle):
        nodes = self.nodes
        return [nodes[child] for child in nodes[handle].children]

    def walk(self, handle=ROOT):
        """Yield ``(node, depth)`` pairs in document order, starting below ``handle``."""
        nodes = self.nodes
        stack = [(child, 1) for child in reversed(nodes[handle].children)]
        while stack:
            current, depth = stack.pop()
            node = nodes[current]
            yield node, depth
            stack.extend((child, depth + 1) for child in reversed(node.children))

    def to_test_format(self):
        """Render the tree in the html5lib test format ("| " prefixed lines)."""
        lines = []
        for node, depth in self.walk():
            indent = " " * (2 * (depth - 1))
            if node.kind == Node.TEXT:
                lines.append(f'| {indent}"{node.data}"')
                continue
            lines.append(f"| {indent}<{node.name}>")
            lines.extend(f'| {indent}  {name}="{value}"' for name, value in sorted(node.attrs.items()))
        return "\n".join(lines)
