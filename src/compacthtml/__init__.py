from .node import Document, Node
from .parser import CompactHTML, StrictModeError, minimize
from .serialize import to_html
from .tokenizer import TokenizerOpts
from .tokens import ParseError, UnsupportedDoctypeError

__all__ = [
    "CompactHTML",
    "Document",
    "Node",
    "ParseError",
    "StrictModeError",
    "TokenizerOpts",
    "UnsupportedDoctypeError",
    "minimize",
    "to_html",
]
