"""
Filter catalog for the esfilter query service.

This module provides the catalog models and the sigil parser that infers
filters for parameters the catalog doesn't define.
"""

from .models import (
    Selection,
    Logic,
    AGGREGATED_SELECTIONS,
    Facet,
    Filter,
    FilterGroup,
    FilterMap,
    build_filter_map,
)
from .sigils import (
    DATE_LAYOUT,
    DATETIME_LAYOUT,
    SigilParse,
    split_negation,
    parse_sigils,
    infer_filter,
)

__all__ = [
    "Selection",
    "Logic",
    "AGGREGATED_SELECTIONS",
    "Facet",
    "Filter",
    "FilterGroup",
    "FilterMap",
    "build_filter_map",
    "DATE_LAYOUT",
    "DATETIME_LAYOUT",
    "SigilParse",
    "split_negation",
    "parse_sigils",
    "infer_filter",
]
