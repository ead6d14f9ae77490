#!/usr/bin/env python3
"""Debug script to inspect the token stream, tree and output for one input."""

import argparse
import sys
from pathlib import Path

from compacthtml import CompactHTML, TokenizerOpts


def debug_input(html, indent=0, newline=False):
    print(f"Input: {html!r}")
    print("\nTokens:")
    opts = TokenizerOpts(collect_errors=True, debug=True)
    doc = CompactHTML(html, tokenizer_opts=opts)

    print("\nTree:")
    print(doc.root.to_test_format())

    if doc.errors:
        print("\nErrors:")
        for error in doc.errors:
            print(f"  {error}")

    print("\nOutput:")
    print(doc.to_html(indent=indent, newline=newline))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Show how CompactHTML tokenizes and rebuilds an input")
    parser.add_argument("html", nargs="?", help="HTML string to inspect")
    parser.add_argument("--file", "-f", type=Path, help="Read HTML from a file instead")
    parser.add_argument("--indent", type=int, default=0, help="Spaces per nesting level in the output")
    parser.add_argument("--newline", action="store_true", help="End every output line with a newline")
    args = parser.parse_args()

    if args.file is not None:
        source = args.file.read_text(encoding="utf-8")
    elif args.html is not None:
        source = args.html
    else:
        print("Usage: python debug_tokenizer.py '<p>Hello   world</p>'")
        print("       python debug_tokenizer.py --file page.html")
        sys.exit(1)

    debug_input(source, indent=args.indent, newline=args.newline)
