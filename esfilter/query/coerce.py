"""
Turn raw request values into typed query values.

A filter with a `format` gets its values parsed as timestamps (normalized to
UTC); everything else is passed through as text. Layouts are strptime formats.
Catalogs written for the older Go service use reference-time layouts such as
`2006-01-02`; those are translated on the fly.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Dict, Optional, Union
import logging
import re

from ..filters import DATE_LAYOUT, Filter, Selection
from .errors import ValueCoercionError

log = logging.getLogger("query")

# ---------------------------------------------------------------------------
# Value union
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Text:
    raw: str

    def render(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Timestamp:
    instant: datetime  # always tz-aware UTC

    def render(self) -> str:
        return self.instant.isoformat().replace("+00:00", "Z")

    def shifted(self, delta: timedelta) -> "Timestamp":
        return Timestamp(self.instant + delta)


Value = Union[Text, Timestamp]

# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------

# Go reference-time tokens, longest first so "2006" wins over "06".
_GO_TOKENS = (
    ("January", "%B"),
    ("Monday", "%A"),
    ("Z07:00", "%z"),
    ("-07:00", "%z"),
    ("-0700", "%z"),
    ("2006", "%Y"),
    ("Jan", "%b"),
    ("Mon", "%a"),
    ("MST", "%Z"),
    ("01", "%m"),
    ("02", "%d"),
    ("03", "%I"),
    ("04", "%M"),
    ("05", "%S"),
    ("06", "%y"),
    ("15", "%H"),
    ("PM", "%p"),
)
_GO_TOKEN_RE = re.compile("|".join(re.escape(tok) for tok, _ in _GO_TOKENS))
_GO_TOKEN_MAP = dict(_GO_TOKENS)

ZONE_OFFSETS: Dict[str, int] = {
    "UTC": 0, "GMT": 0, "Z": 0,
    "EST": -5, "EDT": -4,
    "CST": -6, "CDT": -5,
    "MST": -7, "MDT": -6,
    "PST": -8, "PDT": -7,
}


@lru_cache(maxsize=64)
def strptime_layout(layout: str) -> str:
    """
    Return `layout` as a strptime format. Layouts already containing `%` are
    assumed to be strptime formats; anything else is read as a Go layout.
    """
    if "%" in layout:
        return layout
    out = []
    pos = 0
    for m in _GO_TOKEN_RE.finditer(layout):
        out.append(layout[pos:m.start()])
        out.append(_GO_TOKEN_MAP[m.group(0)])
        pos = m.end()
    out.append(layout[pos:])
    return "".join(out)


def _parse_with_zone_name(raw: str, layout: str) -> datetime:
    # strptime's %Z only knows UTC/GMT and the local zone names
    head = layout[:-2].rstrip()
    parts = raw.rsplit(None, 1)
    if len(parts) != 2 or not parts[1].isalpha():
        raise ValueError("missing zone abbreviation")
    text, abbr = parts
    parsed = datetime.strptime(text, head)
    hours = ZONE_OFFSETS.get(abbr.upper())
    if hours is None:
        log.warning("Unknown zone abbreviation %r, reading %r as UTC", abbr, raw)
        hours = 0
    return parsed.replace(tzinfo=timezone(timedelta(hours=hours)))


def parse_timestamp(raw: str, layout: str) -> datetime:
    fmt = strptime_layout(layout)
    try:
        if fmt.endswith("%Z"):
            parsed = _parse_with_zone_name(raw, fmt)
        else:
            parsed = datetime.strptime(raw, fmt)
    except ValueError as e:
        raise ValueCoercionError(raw, layout) from e
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def coerce_value(raw: str, f: Filter) -> Optional[Value]:
    """
    Trim and type one raw value. Blank values return None and are skipped by
    the caller.
    """
    val = raw.strip()
    if not val:
        return None
    layout = f.format
    if not layout and f.selection == Selection.DATE.value:
        layout = DATE_LAYOUT
    if layout:
        return Timestamp(parse_timestamp(val, layout))
    return Text(val)


__all__ = [
    "Text",
    "Timestamp",
    "Value",
    "ZONE_OFFSETS",
    "strptime_layout",
    "parse_timestamp",
    "coerce_value",
]
