# ABOUTME: Publication date parsing for the loose date strings catalog APIs return.
# ABOUTME: Yields a full date only when the month is known, plus the year whenever one is present.

import re
from datetime import date, datetime

_YEAR_RE = re.compile(r"\b(\d{4})\b")

# Formats that pin down a calendar day.
_DAY_FORMATS = (
    "%Y-%m-%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

# Formats with a month but no day; the first of the month is used.
_MONTH_FORMATS = (
    "%Y-%m",
    "%B %Y",
    "%b %Y",
)


def parse_publication_date(text: str | None) -> tuple[date | None, int | None]:
    """Parse a publication date string into (date, year).

    Handles "1997", "1997-03", "1997-03-05", "March 1997", "March 5, 1997"
    and "5 March 1997". A bare year yields (None, year) rather than inventing
    a month and day. Unparseable input yields (None, None) unless a four-digit
    year can still be found in it.
    """
    if not text or not text.strip():
        return None, None
    text = text.strip()

    for fmt in _DAY_FORMATS + _MONTH_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt).date()
        except ValueError:
            continue
        return parsed, parsed.year

    match = _YEAR_RE.search(text)
    if match:
        return None, int(match.group(1))
    return None, None
