"""RFC 5545 text primitives: escaping, line folding and date formatting."""

from datetime import tzinfo
from typing import List

from icsexport.config.constants import CRLF, MAX_LINE_LENGTH
from icsexport.core.timezone_utils import Instant, to_local_date, to_utc

_UNESCAPES = {"\\": "\\", ";": ";", ",": ",", "n": "\n", "N": "\n"}


def escape_text(text: str) -> str:
    """Escape a TEXT value for embedding in a content line.

    Backslashes are escaped first so the backslashes inserted for the other
    characters are not doubled. CRLF and lone CR are normalized to LF
    before escaping, so unescape_text() returns them as LF.

    Args:
        text: Raw field value.

    Returns:
        The escaped value.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def unescape_text(text: str) -> str:
    """Reverse escape_text().

    Args:
        text: An escaped TEXT value.

    Returns:
        The raw field value.
    """
    result = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text) and text[i + 1] in _UNESCAPES:
            result.append(_UNESCAPES[text[i + 1]])
            i += 2
            continue
        result.append(char)
        i += 1
    return "".join(result)


def fold_line(line: str) -> str:
    """Fold a content line so no physical line exceeds 75 units.

    The first physical line holds up to 75 units; each continuation starts
    with a single space followed by up to 74 units. Units are characters,
    so a fold never splits a multi-byte character.

    Args:
        line: An unfolded content line without a terminator.

    Returns:
        The folded line, continuations joined with CRLF + space.
    """
    if len(line) <= MAX_LINE_LENGTH:
        return line

    chunks = [line[:MAX_LINE_LENGTH]]
    remaining = line[MAX_LINE_LENGTH:]
    step = MAX_LINE_LENGTH - 1
    while remaining:
        chunks.append(remaining[:step])
        remaining = remaining[step:]

    return (CRLF + " ").join(chunks)


def unfold_lines(text: str) -> List[str]:
    """Undo line folding and split a document into logical content lines.

    Args:
        text: A CRLF-terminated document.

    Returns:
        Logical lines without terminators; a trailing empty line is dropped.
    """
    unfolded = text.replace(CRLF + " ", "").replace(CRLF + "\t", "")
    lines = unfolded.split(CRLF)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def content_line(name: str, value: str) -> str:
    """Build and fold a ``NAME:value`` line. ``value`` must already be escaped."""
    return fold_line(f"{name}:{value}")


def format_ics_date(value: Instant, local_tz: tzinfo) -> str:
    """Format an instant as a DATE value (``YYYYMMDD``) in the local zone."""
    day = to_local_date(value, local_tz)
    return f"{day.year:04d}{day.month:02d}{day.day:02d}"


def format_ics_datetime(value: Instant, local_tz: tzinfo) -> str:
    """Format an instant as a UTC DATE-TIME value (``YYYYMMDDTHHMMSSZ``)."""
    dt = to_utc(value, local_tz)
    return (
        f"{dt.year:04d}{dt.month:02d}{dt.day:02d}"
        f"T{dt.hour:02d}{dt.minute:02d}{dt.second:02d}Z"
    )
