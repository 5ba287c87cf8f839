"""
Query building module for the esfilter query service.

This module compiles request parameters into Elasticsearch bool queries and
derives facet aggregations from the filter catalog.
"""

from .builder import (
    FilterAggs,
    parse_query_string,
    build_filter_query,
    build_aggregation_query,
    aggregations_to_dict,
    build_search_request,
    SearchBuildResult,
)
from .coerce import Text, Timestamp, Value, parse_timestamp, coerce_value
from .dsl import (
    TermQuery,
    RangeQuery,
    WildcardQuery,
    RegexpQuery,
    BoolQuery,
    BoolQueryBuilder,
    TermsAggregation,
)
from .errors import FilterQueryError, UnknownSelectionError, ValueCoercionError

__all__ = [
    "FilterAggs",
    "parse_query_string",
    "build_filter_query",
    "build_aggregation_query",
    "aggregations_to_dict",
    "build_search_request",
    "SearchBuildResult",
    "Text",
    "Timestamp",
    "Value",
    "parse_timestamp",
    "coerce_value",
    "TermQuery",
    "RangeQuery",
    "WildcardQuery",
    "RegexpQuery",
    "BoolQuery",
    "BoolQueryBuilder",
    "TermsAggregation",
    "FilterQueryError",
    "UnknownSelectionError",
    "ValueCoercionError",
]
