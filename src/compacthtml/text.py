"""Text run normalization.

Collapses whitespace the way a browser renders it between inline content and
replaces NUL characters, so text runs can be emitted in their shortest form.
"""

import re

from .constants import REPLACEMENT_CHARACTER, WHITESPACE

_WHITESPACE_RUN_PATTERN = re.compile(f"[{re.escape(WHITESPACE)}]+")


def normalize_text(text):
    """Collapse every whitespace run to one space and replace NUL characters.

    Leading and trailing runs are kept as a single space. A run made only of
    whitespace returns ``""`` so callers can skip creating a text node.
    """
    if not text:
        return ""
    collapsed = _WHITESPACE_RUN_PATTERN.sub(" ", text)
    if collapsed == " ":
        return ""
    if "\x00" in collapsed:
        collapsed = collapsed.replace("\x00", REPLACEMENT_CHARACTER)
    return collapsed
