# ABOUTME: ISBN normalization helpers shared by provider adapters.
# ABOUTME: Strips separators and sorts raw identifiers into ISBN-10 and ISBN-13 slots.

import re
from typing import Any

_NON_ISBN_CHARS_RE = re.compile(r"[^0-9X]")


def clean_isbn(isbn: str | None) -> str:
    """Strip everything but digits and the X check character, uppercased.

    "978-0-15-600131-1" -> "9780156001311", "0-8044-2957-x" -> "080442957X".
    Returns an empty string for None or blank input.
    """
    if not isbn:
        return ""
    return _NON_ISBN_CHARS_RE.sub("", isbn.upper())


def split_isbns(values: Any) -> tuple[str | None, str | None]:
    """Pick the first ISBN-10 and first ISBN-13 from a mixed list.

    Returns (isbn_10, isbn_13); either may be None. Anything that is not a
    list, and any non-string entry, is ignored.
    """
    if not isinstance(values, list):
        return None, None
    isbn_10: str | None = None
    isbn_13: str | None = None
    for raw in values:
        if not isinstance(raw, str):
            continue
        value = clean_isbn(raw)
        if len(value) == 10 and isbn_10 is None:
            isbn_10 = value
        elif len(value) == 13 and isbn_13 is None:
            isbn_13 = value
        if isbn_10 and isbn_13:
            break
    return isbn_10, isbn_13
