"""
RK Media Server v1.0.0 - Filename Sanitization
Strip characters that are unsafe in file names on common filesystems
"""

import re

MAX_FILENAME_BYTES = 255

_ILLEGAL = re.compile(r'[/?<>\\:*|"]')
_CONTROL = re.compile(r"[\x00-\x1f\x80-\x9f]")
_RESERVED = re.compile(r"^\.+$")
_WINDOWS_RESERVED = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
_WINDOWS_TRAILING = re.compile(r"[. ]+$")


def _truncate_utf8(value: str, limit: int) -> str:
    encoded = value.encode("utf-8")
    if len(encoded) <= limit:
        return value
    return encoded[:limit].decode("utf-8", errors="ignore")


def sanitize_filename(name: str, replacement: str = "") -> str:
    """
    Return ``name`` with unsafe characters removed

    Removes path separators and shell-hostile characters, control characters,
    names made only of dots, Windows device names and trailing dots/spaces,
    then truncates to 255 UTF-8 bytes. A name that is already safe comes back
    unchanged, which is how callers detect invalid input.
    """
    cleaned = _ILLEGAL.sub(replacement, name)
    cleaned = _CONTROL.sub(replacement, cleaned)
    cleaned = _RESERVED.sub(replacement, cleaned)
    cleaned = _WINDOWS_RESERVED.sub(replacement, cleaned)
    cleaned = _WINDOWS_TRAILING.sub(replacement, cleaned)
    return _truncate_utf8(cleaned, MAX_FILENAME_BYTES)
