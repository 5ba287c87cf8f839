from __future__ import annotations
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union
from urllib.parse import parse_qsl
import logging
import os

from ..filters import (
    AGGREGATED_SELECTIONS,
    Filter,
    FilterGroup,
    FilterMap,
    Logic,
    Selection,
    infer_filter,
    split_negation,
)
from .coerce import Timestamp, Value, coerce_value
from .dsl import (
    BoolQuery,
    BoolQueryBuilder,
    MAX_BUCKETS,
    Query,
    RangeQuery,
    RegexpQuery,
    TermQuery,
    TermsAggregation,
    WildcardQuery,
)
from .errors import UnknownSelectionError

log = logging.getLogger("query")

TERMS_AGG_SIZE = int(os.getenv("TERMS_AGG_SIZE", str(MAX_BUCKETS)))
DAY = timedelta(hours=24)

FilterAggs = Dict[str, TermsAggregation]
FilterParams = Mapping[str, Union[str, Sequence[str]]]

_TERM_SELECTIONS = {Selection.MULTI.value, Selection.SINGLE.value, Selection.TEXT.value}


def parse_query_string(qs: str) -> Dict[str, List[str]]:
    """
    Split a raw query string into name -> values, keeping order and blanks.
    Note `+` decodes to a space, so an AND prefix must be sent as %2B.
    """
    out: Dict[str, List[str]] = {}
    for name, value in parse_qsl(qs, keep_blank_values=True):
        out.setdefault(name, []).append(value)
    return out


def _values(raw: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(raw, str):
        return [raw]
    return list(raw)


def _build_value_query(f: Filter, value: Value) -> Query:
    sel = f.selection
    rendered = value.render()

    if sel in _TERM_SELECTIONS:
        return TermQuery(f.field, rendered)
    if sel == Selection.DATE.value and isinstance(value, Timestamp):
        # a bare date covers its whole day
        return RangeQuery(f.field, gte=rendered, lt=value.shifted(DAY).render())
    if sel == Selection.WILDCARD.value:
        return WildcardQuery(f.field, f"*{rendered}*")
    if sel == Selection.REGEX.value:
        return RegexpQuery(f.field, rendered)
    if sel == Selection.LTE.value:
        return RangeQuery(f.field, lte=rendered)
    if sel == Selection.GTE.value:
        return RangeQuery(f.field, gte=rendered)

    raise UnknownSelectionError(sel)


def _apply_logic(f: Filter, sub: BoolQueryBuilder, query: Query, invert: bool) -> None:
    if invert:
        sub.must_not(query)
    elif f.logic == Logic.OR.value:
        sub.should(query)
    else:
        sub.must(query)


def build_filter_query(
    filters: FilterParams,
    filter_map: FilterMap,
    accumulator: Optional[BoolQueryBuilder] = None,
) -> BoolQuery:
    """
    Compile request parameters into one bool query.

    Every parameter becomes a named bool sub-query added as a filter clause, so
    parameters AND together without affecting scoring. Within a parameter the
    values combine per the filter's logic, or all go to must_not when the name
    starts with `!`.

    Example:
        current_workflow=run&!status=success&!status=canceled&end_date<=2017-01-27
    becomes
        current_workflow = run
        AND NOT (status = success OR status = canceled)
        AND end_date <= 2017-01-27T00:00:00Z

    Raises UnknownSelectionError / ValueCoercionError. Clauses already added to
    `accumulator` stay there, so discard it on error.
    """
    acc = accumulator if accumulator is not None else BoolQueryBuilder()

    for param, raw in filters.items():
        values = _values(raw)
        if not values:
            continue

        invert, name = split_negation(param)
        f = filter_map.get(name)
        if f is None:
            f = infer_filter(name)
        if not f.field:
            log.warning("Skipping parameter %r: no field left after stripping sigils", param)
            continue

        sub = BoolQueryBuilder(name=param)
        for val in values:
            value = coerce_value(val, f)
            if value is None:
                continue
            _apply_logic(f, sub, _build_value_query(f, value), invert)

        log.debug("Compiled %r -> field=%s selection=%s invert=%s", param, f.field, f.selection, invert)
        acc.filter(sub.build())

    return acc.build()


def build_aggregation_query(groups: Iterable[FilterGroup]) -> FilterAggs:
    """
    One terms aggregation per live (non-static) multi/single filter, keyed by
    field. A field repeated across groups keeps the last definition.
    """
    aggs: FilterAggs = {}
    for group in groups:
        for f in group.filters:
            if f.static or f.selection not in AGGREGATED_SELECTIONS:
                continue
            aggs[f.field] = TermsAggregation(f.field, size=TERMS_AGG_SIZE)
    return aggs


def aggregations_to_dict(aggs: FilterAggs) -> Dict[str, Any]:
    return {name: agg.to_dict() for name, agg in aggs.items()}


@dataclass
class SearchBuildResult:
    query: BoolQuery
    aggs: FilterAggs = field(default_factory=dict)
    size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"query": self.query.to_dict(), "size": self.size}
        if self.aggs:
            body["aggs"] = aggregations_to_dict(self.aggs)
        return body


def build_search_request(
    filters: FilterParams,
    filter_map: FilterMap,
    groups: Iterable[FilterGroup] = (),
    *,
    size: int = 0,
) -> SearchBuildResult:
    """
    Build a complete search body: the filter query plus facet aggregations.
    """
    return SearchBuildResult(
        query=build_filter_query(filters, filter_map),
        aggs=build_aggregation_query(groups),
        size=size,
    )


# -----------------------------------------------------------------------------
# Public exports
# -----------------------------------------------------------------------------
__all__ = [
    "FilterAggs",
    "parse_query_string",
    "build_filter_query",
    "build_aggregation_query",
    "aggregations_to_dict",
    "build_search_request",
    "SearchBuildResult",
]
