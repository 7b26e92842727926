"""
Locale-aware date formatting for CV periods.

Examples:
- format_date("2023-06-15", "en") -> "Jun 2023"
- format_date("2023-06", "tr") -> "Haz 2023"
- format_period("2020-01", None, lang="en") -> "Jan 2020 – Present"
- format_graduation_date("2023") -> "2023"
"""

import re
from datetime import date, datetime
from typing import Optional, Union

from cv_core.i18n import get_string

DateInput = Union[str, date, None]

MONTHS_SHORT = {
    "en": ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
    "tr": ["Oca", "Şub", "Mar", "Nis", "May", "Haz",
           "Tem", "Ağu", "Eyl", "Eki", "Kas", "Ara"],
}

MONTHS_LONG = {
    "en": ["January", "February", "March", "April", "May", "June",
           "July", "August", "September", "October", "November", "December"],
    "tr": ["Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
           "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık"],
}

# Values meaning "still ongoing"
OPEN_ENDED = {"present", "current", "now", "günümüz", "halen", "devam ediyor"}

PERIOD_SEPARATOR = " – "

_YEAR_ONLY = re.compile(r"^\d{4}$")
_INPUT_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y/%m/%d", "%Y/%m", "%d.%m.%Y", "%m/%Y", "%m.%Y")


def _months(table: dict, lang: str) -> list:
    return table.get(lang, table["en"])


def parse_date(value: DateInput) -> Optional[date]:
    """Parse supported date inputs; returns None when unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    if _YEAR_ONLY.match(text):
        try:
            return date(int(text), 1, 1)
        except ValueError:
            return None

    for fmt in _INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def is_open_ended(value: DateInput) -> bool:
    if value is None:
        return True
    if isinstance(value, date):
        return False
    text = str(value).strip().lower()
    return not text or text in OPEN_ENDED


def format_date(value: DateInput, lang: str = "en") -> str:
    """
    Format a single date as 'Mon YYYY'.

    Open-ended markers render as the localized 'Present'; unparseable
    strings are returned unchanged.
    """
    if value is None:
        return ""
    if is_open_ended(value):
        if isinstance(value, str) and not value.strip():
            return ""
        return get_string("present", lang)

    parsed = parse_date(value)
    if parsed is None:
        return str(value).strip()
    return f"{_months(MONTHS_SHORT, lang)[parsed.month - 1]} {parsed.year}"


def format_graduation_date(value: DateInput, lang: str = "en") -> str:
    """Year-only values stay year-only, anything else goes through format_date."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return get_string("date_not_specified", lang)
    if isinstance(value, str) and _YEAR_ONLY.match(value.strip()):
        return value.strip()
    return format_date(value, lang)


def format_period(
    start: DateInput,
    end: DateInput = None,
    is_current: bool = False,
    lang: str = "en",
) -> str:
    """
    Format a start/end pair with an en dash.

    A missing start yields the end alone; a missing or open end yields
    '<start> – Present'.
    """
    start_text = format_date(start, lang) if start else ""

    if is_current or is_open_ended(end):
        end_text = get_string("present", lang)
    else:
        end_text = format_date(end, lang)

    if not start_text:
        return "" if is_current or is_open_ended(end) else end_text
    return f"{start_text}{PERIOD_SEPARATOR}{end_text}"


def format_long_date(value: date, lang: str = "en") -> str:
    """Full date for letter headers: '17 Ekim 2026' / 'October 17, 2026'."""
    month = _months(MONTHS_LONG, lang)[value.month - 1]
    if lang == "tr":
        return f"{value.day} {month} {value.year}"
    return f"{month} {value.day}, {value.year}"


class DateFormatter:
    """Date formatting bound to one language, handed out by the variant resolver."""

    def __init__(self, lang: str = "en"):
        self.lang = lang

    def date(self, value: DateInput) -> str:
        return format_date(value, self.lang)

    def period(self, start: DateInput, end: DateInput = None, is_current: bool = False) -> str:
        return format_period(start, end, is_current, self.lang)

    def graduation(self, value: DateInput) -> str:
        return format_graduation_date(value, self.lang)

    def long(self, value: date) -> str:
        return format_long_date(value, self.lang)

    def __eq__(self, other) -> bool:
        return isinstance(other, DateFormatter) and other.lang == self.lang

    def __hash__(self) -> int:
        return hash(("DateFormatter", self.lang))
