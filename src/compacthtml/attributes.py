"""Lenient attribute scanner.

Reads the attribute list that follows a tag name. Malformed input never
raises: an unterminated quote runs to the end of the buffer, a missing value
becomes ``""`` and repeated names keep their first value.
"""

import re

_ATTR_START_PATTERN = re.compile(r"[^ \t\n\r/]")
_ATTR_NAME_TERMINATOR_PATTERN = re.compile(r"[ \t\n\r=>]")
_NON_WHITESPACE_PATTERN = re.compile(r"[^ \t\n\r]")
_ATTR_VALUE_UNQUOTED_PATTERN = re.compile(r"[ \t\n\r>]")


def _record(attrs, name, value, duplicates):
    if name in attrs:
        if duplicates is not None:
            duplicates.append(name)
        return
    attrs[name] = value


def parse_attributes(buffer, pos=0, duplicates=None):
    """Parse attributes from ``buffer[pos:]`` up to and including the closing ``>``.

    Returns ``(attrs, pos)`` where ``pos`` is the offset of the first
    unconsumed character. When ``duplicates`` is a list, the names of dropped
    repeated attributes are appended to it in the order they were seen.
    """
    attrs = {}
    length = len(buffer)
    while pos < length:
        # Stray "/" is skipped along with whitespace (<div / class="x">)
        match = _ATTR_START_PATTERN.search(buffer, pos)
        if match is None:
            break
        pos = match.start()
        if buffer[pos] == ">":
            break

        match = _ATTR_NAME_TERMINATOR_PATTERN.search(buffer, pos)
        if match is None:
            break
        name = buffer[pos : match.start()]
        pos = match.start()

        match = _NON_WHITESPACE_PATTERN.search(buffer, pos)
        if match is None:
            break
        if buffer[match.start()] != "=":
            pos = match.start()
            _record(attrs, name, "", duplicates)
            continue

        match = _NON_WHITESPACE_PATTERN.search(buffer, match.start() + 1)
        if match is None:
            pos = length
            _record(attrs, name, "", duplicates)
            break
        pos = match.start()
        if buffer[pos] == ">":
            _record(attrs, name, "", duplicates)
            break

        if buffer[pos] == '"':
            end = buffer.find('"', pos + 1)
            if end == -1:
                value = buffer[pos + 1 :]
                pos = length
            else:
                value = buffer[pos + 1 : end]
                pos = end + 1
        else:
            match = _ATTR_VALUE_UNQUOTED_PATTERN.search(buffer, pos)
            end = length if match is None else match.start()
            value = buffer[pos:end]
            pos = end
        _record(attrs, name, value, duplicates)

    if pos < length and buffer[pos] == ">":
        pos += 1
    return attrs, pos
