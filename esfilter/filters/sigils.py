"""
Operator sigils embedded in request parameter names.

A parameter that is not in the catalog still gets a filter, inferred from the
name itself:

    +field=value      all values must match (AND) instead of any (OR)
    field<=value      less-than or equal
    field>=value      greater-than or equal
    field~=fo[o]+     regular expression (field must not be analyzed)
    field?=value      wildcard, value wrapped as *value*
    foo_date=...      values parsed as %Y-%m-%d
    foo_datetime=...  values parsed as %m/%d/%Y %H:%M:%S %Z

The `<`/`>`/`~`/`?` sigil ends up at the end of the name because query strings
split on the first `=`. A leading `!` (NOT) is handled by `split_negation`
before the catalog lookup, so it applies to catalog filters too.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import logging

from .models import Filter, Logic, Selection

log = logging.getLogger("filters")

DATE_LAYOUT = "%Y-%m-%d"
DATETIME_LAYOUT = "%m/%d/%Y %H:%M:%S %Z"

NEGATION = "!"
AND_PREFIX = "+"

# Checked in this order; the first trailing match wins.
COMPARISON_SUFFIXES: Tuple[Tuple[str, Selection], ...] = (
    ("<", Selection.LTE),
    (">", Selection.GTE),
    ("~", Selection.REGEX),
    ("?", Selection.WILDCARD),
)

TEMPORAL_SUFFIXES: Tuple[Tuple[str, str], ...] = (
    ("_date", DATE_LAYOUT),
    ("_datetime", DATETIME_LAYOUT),
)


@dataclass(frozen=True)
class SigilParse:
    logic: Optional[Logic]
    comparison: Optional[Selection]
    temporal: Optional[str]
    field: str

    def to_filter(self) -> Filter:
        return Filter(
            selection=(self.comparison or Selection.MULTI).value,
            logic=(self.logic or Logic.OR).value,
            field=self.field,
            format=self.temporal or "",
        )


def split_negation(name: str) -> Tuple[bool, str]:
    """
    Strip leading `!` markers. Returns (invert, remaining name).
    """
    if name.startswith(NEGATION):
        return True, name.lstrip(NEGATION)
    return False, name


def parse_sigils(name: str) -> SigilParse:
    logic: Optional[Logic] = None
    comparison: Optional[Selection] = None
    temporal: Optional[str] = None

    if name.startswith(AND_PREFIX):
        logic = Logic.AND
        name = name.lstrip(AND_PREFIX)

    for sigil, selection in COMPARISON_SUFFIXES:
        if name.endswith(sigil):
            comparison = selection
            name = name.rstrip(sigil)
            break

    for suffix, layout in TEMPORAL_SUFFIXES:
        if name.endswith(suffix):
            temporal = layout
            break

    return SigilParse(logic=logic, comparison=comparison, temporal=temporal, field=name)


def infer_filter(name: str) -> Filter:
    """
    Build a filter for a parameter the catalog doesn't know.
    """
    f = parse_sigils(name).to_filter()
    log.debug("Inferred filter for %r: field=%s selection=%s logic=%s format=%r",
              name, f.field, f.selection, f.logic, f.format)
    return f


__all__ = [
    "DATE_LAYOUT",
    "DATETIME_LAYOUT",
    "SigilParse",
    "split_negation",
    "parse_sigils",
    "infer_filter",
]
