"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/naming.py
Parses copy-suffix conventions out of file names.

Two suffix grammars are recognised, and may be chained in any order:
- platform copy: "name - Copy", "name - Copy (3)"  (desktop copy/paste)
- browser copy:  "name (3)"                          (download managers)

The counter is a heuristic estimate of how many copy generations deep a name is,
e.g. "flowers - Copy (3) - Copy.jpg" is guessed to be the 4th copy of "flowers.jpg".
"""

import re

from dedup.core.models import FilenameParse

# Pre-compiled patterns, anchored at the very end of the text (\Z, not $)
_PATTERN_PLATFORM_COPY = re.compile(r' - Copy(?: \(([0-9]+)\))?\Z')
_PATTERN_BROWSER_COPY = re.compile(r' \(([0-9]+)\)\Z')
_PATTERN_DIGITS = re.compile(r'[0-9]+')


def split_extension(name: str) -> tuple:
    """
    Split a name on its last dot.
    The extension keeps its dot; a leading-dot name like ".env" is all extension.
    """
    dot = name.rfind('.')
    if dot < 0:
        return name, ""
    return name[:dot], name[dot:]


def _copy_number(match: re.Match) -> int:
    text = match.group(1)
    if text is None:
        return 0
    try:
        return int(text)
    except ValueError:
        return 0


def split_file_name(name: str) -> FilenameParse:
    """
    Splits a file name like "flowers (1).jpg" into ("flowers", 1, ".jpg").

    Examples:
        "flowers.jpg"                              → ("flowers", 0, ".jpg")
        "flowers - Copy (1).jpg"                   → ("flowers", 2, ".jpg")
        "flowers (2) - Copy (4) - Copy - Copy.jpg" → ("flowers", 8, ".jpg")
        ".env"                                     → ("", 0, ".env")
        " (1)"                                     → (" (1)", 0, "")
    """
    prefix, extension = split_extension(name)
    counter = 0

    while True:
        match = _PATTERN_PLATFORM_COPY.search(prefix)
        if match:
            prefix = prefix[:match.start()]
            n = _copy_number(match)
            if n == 0:
                counter += 1
            elif n == 1:
                # Pasting twice yields "- Copy (2)", a literal "(1)" is never produced
                counter += 2
            else:
                counter += n
            continue

        match = _PATTERN_BROWSER_COPY.search(prefix)
        if match:
            prefix = prefix[:match.start()]
            n = _copy_number(match)
            counter += n if n > 0 else 1
            continue

        break

    if prefix == "" and extension == "":
        # Nothing meaningful survived, keep the original name
        return FilenameParse(name, 0, "")
    return FilenameParse(prefix, counter, extension)


def is_digits(text: str) -> bool:
    """True if text is non-empty and made only of ASCII decimal digits."""
    return bool(_PATTERN_DIGITS.fullmatch(text))
