# models.py
from __future__ import annotations
from dataclasses import dataclass, field as dc_field
from enum import Enum
from typing import Any, Dict, Iterable, List
import logging

log = logging.getLogger("filters")

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Selection(str, Enum):
    MULTI = "multi"
    SINGLE = "single"
    TEXT = "text"
    DATE = "date"
    WILDCARD = "wildcard"
    REGEX = "regex"
    LTE = "lte"
    GTE = "gte"


class Logic(str, Enum):
    AND = "and"
    OR = "or"


# Selections that get live facet counts
AGGREGATED_SELECTIONS = {Selection.MULTI.value, Selection.SINGLE.value}

_TRUTHY = {"true", "1", "yes", "on"}


def _as_bool(raw: Any) -> bool:
    # JSON/XML catalogs may carry "false" as a string
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUTHY
    return bool(raw)


# ---------------------------------------------------------------------------
# Catalog models
# ---------------------------------------------------------------------------

@dataclass
class Facet:
    """
    Precomputed facet entry shown next to a filter. Display data only.
    """
    id: str = ""
    label: str = ""
    query: str = ""
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "query": self.query,
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Facet":
        return cls(
            id=str(data.get("id", "")),
            label=str(data.get("label", "")),
            query=str(data.get("query", "")),
            count=int(data.get("count", 0) or 0),
        )


@dataclass
class Filter:
    """
    A filter the UI offers: which backend field it targets, how its values are
    matched (selection) and how several values combine (logic).

    `selection` and `logic` hold the configured strings as-is; unknown kinds are
    only rejected when a query is compiled.
    """
    id: str = ""
    label: str = ""
    selection: str = ""
    logic: str = ""
    field: str = ""
    static: bool = False
    facets: List[Facet] = dc_field(default_factory=list)
    format: str = ""

    def get_facet(self, label: str) -> Facet:
        for facet in self.facets:
            if facet.label == label:
                return facet
        return Facet()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "selection": self.selection,
            "logic": self.logic,
            "field": self.field,
            "static": self.static,
            "facets": [f.to_dict() for f in self.facets],
            "format": self.format,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Filter":
        return cls(
            id=str(data.get("id", "")),
            label=str(data.get("label", "")),
            selection=str(data.get("selection", "")),
            logic=str(data.get("logic", "")),
            field=str(data.get("field", "")),
            static=_as_bool(data.get("static", False)),
            facets=[Facet.from_dict(f) for f in data.get("facets") or []],
            format=str(data.get("format") or ""),
        )


@dataclass
class FilterGroup:
    """
    Display grouping of filters (label + css class).
    """
    label: str = ""
    class_: str = ""
    filters: List[Filter] = dc_field(default_factory=list)

    def get_filter(self, field_name: str) -> Filter:
        for f in self.filters:
            if f.field == field_name:
                return f
        return Filter()

    def replace_filter(self, new: Filter) -> None:
        # every entry sharing the field is overwritten, not just the first
        for idx, f in enumerate(self.filters):
            if f.field == new.field:
                self.filters[idx] = new

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "class": self.class_,
            "filters": [f.to_dict() for f in self.filters],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterGroup":
        return cls(
            label=str(data.get("label", "")),
            class_=str(data.get("class", "")),
            filters=[Filter.from_dict(f) for f in data.get("filters") or []],
        )


FilterMap = Dict[str, Filter]


def build_filter_map(groups: Iterable[FilterGroup]) -> FilterMap:
    """
    Parameter-name lookup for the compiler, keyed by field. Later duplicates win.
    """
    out: FilterMap = {}
    for group in groups:
        for f in group.filters:
            if f.field in out:
                log.warning("Duplicate filter field %r in group %r", f.field, group.label)
            out[f.field] = f
    return out


# ---------------------------------------------------------------------------
# Public exports
# ---------------------------------------------------------------------------

__all__ = [
    "Selection",
    "Logic",
    "AGGREGATED_SELECTIONS",
    "Facet",
    "Filter",
    "FilterGroup",
    "FilterMap",
    "build_filter_map",
]
