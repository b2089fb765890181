"""
sanitize.names

Map raw entry names onto the safe alphabet: lowercase ASCII letters, digits
and single underscores, with any file extension kept verbatim.
"""

from __future__ import annotations

import string

SEPARATOR = "_"
SEPARATOR_SOURCES = frozenset("_ -.")
_UPPER = frozenset(string.ascii_uppercase)
_KEEP = frozenset(string.ascii_lowercase + string.digits)


def split_extension(name: str) -> tuple[str, str]:
    """Split at the last dot; the extension keeps the dot. No dot, no extension."""
    index = name.rfind(".")
    if index < 0:
        return name, ""
    return name[:index], name[index:]


def sanitize_name(name: str, preserve_extension: bool) -> str:
    """
    Return the sanitized form of ``name``.

    Uppercase ASCII is lowercased, lowercase letters and digits are kept, each
    run of ``_``, space, ``-`` or ``.`` collapses into one ``_`` and every
    other character is dropped. One trailing ``_`` before the extension and
    one leading ``_`` of the result are removed.

    Examples:
        >>> sanitize_name("FILE NAME.TXT", True)
        'file_name.TXT'
        >>> sanitize_name("--weird__name--.mp4", True)
        'weird_name.mp4'
        >>> sanitize_name("MY DIR", False)
        'my_dir'
    """
    stem, extension = split_extension(name) if preserve_extension else (name, "")

    out: list[str] = []
    for char in stem:
        if char in _UPPER:
            out.append(char.lower())
        elif char in _KEEP:
            out.append(char)
        elif char in SEPARATOR_SOURCES:
            if not out or out[-1] != SEPARATOR:
                out.append(SEPARATOR)

    if out and out[-1] == SEPARATOR:
        out.pop()

    result = "".join(out) + extension
    if result.startswith(SEPARATOR):
        result = result[1:]
    return result
