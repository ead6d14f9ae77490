"""CompactHTML parser entry point."""

from .serialize import to_html
from .tokenizer import Tokenizer, TokenizerOpts
from .treebuilder import TreeBuilder


class StrictModeError(SyntaxError):
    """Raised in strict mode when the input needed any error recovery."""

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))


class CompactHTML:
    __slots__ = ("debug", "errors", "root", "tokenizer", "tree_builder")

    def __init__(
        self,
        html,
        *,
        collect_errors=False,
        strict=False,
        debug=False,
        tokenizer_opts=None,
        tree_builder=None,
    ):
        self.debug = bool(debug)
        collect_errors = bool(collect_errors or strict)
        opts = tokenizer_opts or TokenizerOpts(collect_errors=collect_errors, debug=self.debug)
        if collect_errors and not opts.collect_errors:
            opts = TokenizerOpts(collect_errors=True, debug=opts.debug, discard_bom=opts.discard_bom)
        self.tree_builder = tree_builder or TreeBuilder(collect_errors=opts.collect_errors, debug=opts.debug)
        self.tokenizer = Tokenizer(self.tree_builder, opts)
        self.tokenizer.run(html or "")
        self.root = self.tree_builder.finish()
        self.errors = self.tree_builder.errors

        if strict and self.errors:
            raise StrictModeError(self.errors[0])

    def to_html(self, indent=0, newline=False):
        return to_html(self.root, indent=indent, newline=newline)


def minimize(html, indent=0, newline=False):
    """Return the minimized form of ``html``.

    Malformed markup is repaired with fixed recovery rules. The only failure
    is :class:`~compacthtml.tokens.UnsupportedDoctypeError`, raised for any
    doctype other than ``<!DOCTYPE html>``.
    """
    return CompactHTML(html).to_html(indent=indent, newline=newline)
