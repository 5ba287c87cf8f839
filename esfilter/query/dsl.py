"""
Elasticsearch query values.

Each query is an immutable value with `to_dict()` rendering the JSON DSL body,
so a compiled tree can be inspected in tests without a live client.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

# Largest terms-aggregation size the backend accepts
MAX_BUCKETS = 2**31 - 1


@dataclass(frozen=True)
class TermQuery:
    field: str
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"term": {self.field: self.value}}


@dataclass(frozen=True)
class RangeQuery:
    field: str
    gte: Any = None
    gt: Any = None
    lte: Any = None
    lt: Any = None

    def to_dict(self) -> Dict[str, Any]:
        bounds = {
            k: v
            for k, v in (("gte", self.gte), ("gt", self.gt), ("lte", self.lte), ("lt", self.lt))
            if v is not None
        }
        return {"range": {self.field: bounds}}


@dataclass(frozen=True)
class WildcardQuery:
    field: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"wildcard": {self.field: self.value}}


@dataclass(frozen=True)
class RegexpQuery:
    field: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"regexp": {self.field: self.value}}


@dataclass(frozen=True)
class BoolQuery:
    """
    must: required, scores. should: optional, scores when matched (at least one
    must match when there is nothing else). must_not: excludes. filter:
    required, no scoring.
    """
    must: Tuple["Query", ...] = ()
    should: Tuple["Query", ...] = ()
    must_not: Tuple["Query", ...] = ()
    filter: Tuple["Query", ...] = ()
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        for key in ("must", "should", "must_not", "filter"):
            clauses = getattr(self, key)
            if clauses:
                body[key] = [q.to_dict() for q in clauses]
        if self.name:
            body["_name"] = self.name
        return {"bool": body}


Query = Union[TermQuery, RangeQuery, WildcardQuery, RegexpQuery, BoolQuery]


class BoolQueryBuilder:
    """
    Accumulates clauses for one bool query; `build()` freezes them.
    """
    def __init__(self, name: Optional[str] = None):
        self.name = name
        self._must: List[Query] = []
        self._should: List[Query] = []
        self._must_not: List[Query] = []
        self._filter: List[Query] = []

    def must(self, query: Query) -> "BoolQueryBuilder":
        self._must.append(query)
        return self

    def should(self, query: Query) -> "BoolQueryBuilder":
        self._should.append(query)
        return self

    def must_not(self, query: Query) -> "BoolQueryBuilder":
        self._must_not.append(query)
        return self

    def filter(self, query: Query) -> "BoolQueryBuilder":
        self._filter.append(query)
        return self

    def build(self) -> BoolQuery:
        return BoolQuery(
            must=tuple(self._must),
            should=tuple(self._should),
            must_not=tuple(self._must_not),
            filter=tuple(self._filter),
            name=self.name,
        )


@dataclass(frozen=True)
class TermsAggregation:
    """
    Distinct values of `field` with counts. The default size asks for every
    bucket (Elasticsearch 5+ rejects the old size=0); None leaves the backend
    default.
    """
    field: str
    size: Optional[int] = MAX_BUCKETS

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"field": self.field}
        if self.size is not None:
            body["size"] = self.size
        return {"terms": body}


__all__ = [
    "TermQuery",
    "RangeQuery",
    "WildcardQuery",
    "RegexpQuery",
    "BoolQuery",
    "Query",
    "BoolQueryBuilder",
    "TermsAggregation",
    "MAX_BUCKETS",
]
