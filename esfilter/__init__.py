"""
esfilter: compile filter catalogs and request parameters into Elasticsearch
bool queries and facet aggregations.
"""

from .filters import Facet, Filter, FilterGroup, FilterMap, build_filter_map, infer_filter
from .query import (
    FilterAggs,
    build_filter_query,
    build_aggregation_query,
    build_search_request,
    parse_query_string,
    FilterQueryError,
    UnknownSelectionError,
    ValueCoercionError,
)

__all__ = [
    "Facet",
    "Filter",
    "FilterGroup",
    "FilterMap",
    "build_filter_map",
    "infer_filter",
    "FilterAggs",
    "build_filter_query",
    "build_aggregation_query",
    "build_search_request",
    "parse_query_string",
    "FilterQueryError",
    "UnknownSelectionError",
    "ValueCoercionError",
]
