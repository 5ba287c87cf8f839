from __future__ import annotations
from dotenv import load_dotenv

load_dotenv()

from typing import Dict, List

from fastapi import Body, FastAPI, HTTPException, Request
from pydantic import BaseModel

from .query import (
    FilterQueryError,
    aggregations_to_dict,
    build_aggregation_query,
    build_filter_query,
    build_search_request,
)
from .registry import FilterRegistry

app = FastAPI(title="esfilter Query Service", version="1.0.0")

REG = FilterRegistry()


class CompileRequest(BaseModel):
    """Parameters posted as JSON, for names that don't survive a query string."""

    params: Dict[str, List[str]]
    size: int = 0


def _request_params(request: Request) -> Dict[str, List[str]]:
    qp = request.query_params
    return {name: qp.getlist(name) for name in qp.keys()}


@app.on_event("startup")
def _startup():
    REG.load()


@app.get("/healthz")
def health():
    return {
        "ok": True,
        "groups": [g.label for g in REG.groups],
        "filters": len(REG.filter_map),
    }


@app.get("/filters")
def list_filters():
    return REG.to_dict()


@app.get("/query")
def compile_query(request: Request):
    """
    Compile every query-string parameter into a bool filter query, e.g.
    /query?status=success&end_date%3C=2017-01-27
    """
    try:
        q = build_filter_query(_request_params(request), REG.filter_map)
        return {"query": q.to_dict()}
    except FilterQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/query")
def compile_posted_query(payload: CompileRequest = Body(..., description="Filter parameters")):
    """Same as GET /query, with parameters posted as JSON. `size` is ignored."""
    try:
        q = build_filter_query(payload.params, REG.filter_map)
        return {"query": q.to_dict()}
    except FilterQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/search")
def search_body(request: Request):
    """Full search body: filter query plus facet aggregations."""
    try:
        res = build_search_request(_request_params(request), REG.filter_map, REG.groups)
        return res.to_dict()
    except FilterQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/search")
def posted_search_body(payload: CompileRequest = Body(..., description="Filter parameters")):
    try:
        res = build_search_request(payload.params, REG.filter_map, REG.groups, size=payload.size)
        return res.to_dict()
    except FilterQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/aggs")
def aggregations():
    return {"aggs": aggregations_to_dict(build_aggregation_query(REG.groups))}


@app.post("/reload")
def reload_registry():
    try:
        REG.load()
        return {"reloaded": len(REG.filter_map)}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
