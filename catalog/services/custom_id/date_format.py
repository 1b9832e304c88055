"""Invariant-culture date/time formatting for DateTime elements.

Synopsis:
Render timestamps with the date pattern syntax stored in custom ID formats
(``yyyyMMdd``, ``HH:mm``, standard one-letter formats such as ``s`` or ``o``)
without consulting the process locale.

Glossary:
- Standard format: One-letter pattern that expands to a fixed custom pattern.
- Custom specifier: Run of a repeated letter (``yyyy``, ``MM``) replaced by a
  date component.
- Literal: Quoted text, a backslash escape, or any non-specifier character.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .errors import CorruptTemplate

__all__ = ["format_datetime", "STANDARD_PATTERNS"]

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

STANDARD_PATTERNS = {
    "d": "MM/dd/yyyy",
    "D": "dddd, dd MMMM yyyy",
    "f": "dddd, dd MMMM yyyy HH:mm",
    "F": "dddd, dd MMMM yyyy HH:mm:ss",
    "g": "MM/dd/yyyy HH:mm",
    "G": "MM/dd/yyyy HH:mm:ss",
    "M": "MMMM dd",
    "m": "MMMM dd",
    "O": "yyyy'-'MM'-'dd'T'HH':'mm':'ss'.'fffffffK",
    "o": "yyyy'-'MM'-'dd'T'HH':'mm':'ss'.'fffffffK",
    "R": "ddd, dd MMM yyyy HH':'mm':'ss 'GMT'",
    "r": "ddd, dd MMM yyyy HH':'mm':'ss 'GMT'",
    "s": "yyyy'-'MM'-'dd'T'HH':'mm':'ss",
    "t": "HH:mm",
    "T": "HH:mm:ss",
    "u": "yyyy'-'MM'-'dd HH':'mm':'ss'Z'",
    "U": "dddd, dd MMMM yyyy HH:mm:ss",
    "Y": "yyyy MMMM",
    "y": "yyyy MMMM",
}
_GENERAL_PATTERN = "G"
_SPECIFIERS = set("yMdhHmsfFtzKg")
_MAX_FRACTION_DIGITS = 7


def format_datetime(moment: datetime, pattern: str | None) -> str:
    """
    Format ``moment`` with an invariant-culture date pattern.

    Naive datetimes are treated as UTC; aware ones are converted to UTC first.
    An absent pattern behaves like the general ``G`` format.
    """
    moment = _as_utc(moment)
    if not pattern:
        pattern = _GENERAL_PATTERN
    if len(pattern) == 1:
        expanded = STANDARD_PATTERNS.get(pattern)
        if expanded is None:
            raise CorruptTemplate(f"Unsupported standard date format {pattern!r}.")
        pattern = expanded
    return _render_custom(moment, pattern)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _render_custom(moment: datetime, pattern: str) -> str:
    out: list[str] = []
    i = 0
    length = len(pattern)
    while i < length:
        ch = pattern[i]

        if ch in ("'", '"'):
            end = pattern.find(ch, i + 1)
            if end == -1:
                raise CorruptTemplate(f"Unterminated quoted literal in date format {pattern!r}.")
            out.append(pattern[i + 1:end])
            i = end + 1
            continue

        if ch == "\\":
            if i + 1 >= length:
                raise CorruptTemplate(f"Dangling escape in date format {pattern!r}.")
            out.append(pattern[i + 1])
            i += 2
            continue

        if ch == "%":
            # %x forces x to be read as a lone custom specifier.
            if i + 1 >= length or pattern[i + 1] == "%":
                raise CorruptTemplate(f"Invalid '%' usage in date format {pattern!r}.")
            i += 1
            continue

        if ch in _SPECIFIERS:
            run = 1
            while i + run < length and pattern[i + run] == ch:
                run += 1
            out.append(_render_specifier(moment, ch, run, out, pattern))
            i += run
            continue

        # ':' and '/' map to the invariant separators, which are themselves.
        out.append(ch)
        i += 1

    return "".join(out)


def _render_specifier(moment: datetime, ch: str, run: int, out: list[str], pattern: str) -> str:
    if ch == "y":
        if run <= 2:
            year = moment.year % 100
            return f"{year:02d}" if run == 2 else str(year)
        return str(moment.year).zfill(run)
    if ch == "M":
        if run == 1:
            return str(moment.month)
        if run == 2:
            return f"{moment.month:02d}"
        name = _MONTHS[moment.month - 1]
        return name[:3] if run == 3 else name
    if ch == "d":
        if run == 1:
            return str(moment.day)
        if run == 2:
            return f"{moment.day:02d}"
        name = _DAYS[moment.weekday()]
        return name[:3] if run == 3 else name
    if ch == "h":
        hour = moment.hour % 12 or 12
        return str(hour) if run == 1 else f"{hour:02d}"
    if ch == "H":
        return str(moment.hour) if run == 1 else f"{moment.hour:02d}"
    if ch == "m":
        return str(moment.minute) if run == 1 else f"{moment.minute:02d}"
    if ch == "s":
        return str(moment.second) if run == 1 else f"{moment.second:02d}"
    if ch in ("f", "F"):
        if run > _MAX_FRACTION_DIGITS:
            raise CorruptTemplate(f"Too many fraction digits in date format {pattern!r}.")
        digits = f"{moment.microsecond:06d}0"[:run]
        if ch == "F":
            digits = digits.rstrip("0")
            if not digits and out and out[-1].endswith("."):
                out[-1] = out[-1][:-1]
        return digits
    if ch == "t":
        designator = "AM" if moment.hour < 12 else "PM"
        return designator[0] if run == 1 else designator
    if ch == "z":
        return _utc_offset(moment.utcoffset() or timedelta(0), run)
    if ch == "K":
        return "Z" * run
    if ch == "g":
        return "A.D."
    raise CorruptTemplate(f"Unsupported date specifier {ch!r} in {pattern!r}.")


def _utc_offset(offset: timedelta, run: int) -> str:
    total_minutes = int(offset.total_seconds() // 60)
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    if run == 1:
        return f"{sign}{hours}"
    if run == 2:
        return f"{sign}{hours:02d}"
    return f"{sign}{hours:02d}:{minutes:02d}"
