"""
Build script for CompactHTML with optional mypyc compilation.

    COMPACTHTML_USE_MYPYC=1 pip install .
"""

import os
import sys

from setuptools import setup

# Tokenizer, tree builder and serializer run once per input character or node
MYPYC_MODULES = [
    "src/compacthtml/tokenizer.py",
    "src/compacthtml/attributes.py",
    "src/compacthtml/text.py",
    "src/compacthtml/node.py",
    "src/compacthtml/treebuilder.py",
    "src/compacthtml/serialize.py",
]


def build_with_mypyc():
    try:
        from mypyc.build import mypycify
    except ImportError:
        sys.exit("COMPACTHTML_USE_MYPYC=1 needs mypyc: pip install compacthtml[mypyc]")

    return mypycify(MYPYC_MODULES, opt_level=os.environ.get("MYPYC_OPT_LEVEL", "3"))


if __name__ == "__main__":
    use_mypyc = os.environ.get("COMPACTHTML_USE_MYPYC", "0") == "1"
    setup(ext_modules=build_with_mypyc() if use_mypyc else [])
