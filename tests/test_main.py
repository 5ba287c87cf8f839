"""
Tests for the HTTP surface.
"""

import pytest
from fastapi.testclient import TestClient

from esfilter import main
from esfilter.query.dsl import MAX_BUCKETS


@pytest.fixture
def client(monkeypatch, catalog_file):
    monkeypatch.setattr(main.REG, "path", catalog_file)
    with TestClient(main.app) as c:
        yield c


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "groups": ["Workflow", "Dates"], "filters": 6}


def test_filters(client):
    groups = client.get("/filters").json()["groups"]
    assert groups[0]["filters"][0]["field"] == "status"


def test_query_from_query_string(client):
    resp = client.get("/query", params=[("!status", "success"), ("!status", "canceled")])
    assert resp.status_code == 200
    sub = resp.json()["query"]["bool"]["filter"][0]["bool"]
    assert sub["_name"] == "!status"
    assert sub["must_not"] == [{"term": {"status": "success"}}, {"term": {"status": "canceled"}}]


def test_query_bad_date_is_400(client):
    resp = client.get("/query", params={"end_date": "not-a-date"})
    assert resp.status_code == 400
    assert "not-a-date" in resp.json()["detail"]


def test_posted_query_matches_get(client):
    """Test POST /query returns the same shape as GET /query."""
    posted = client.post("/query", json={"params": {"status": ["success"]}}).json()
    got = client.get("/query", params={"status": "success"}).json()
    assert posted == got
    assert set(posted) == {"query"}


def test_posted_search(client):
    resp = client.post("/search", json={"params": {"+priority": ["1"]}, "size": 5})
    body = resp.json()
    assert body["size"] == 5
    assert body["query"]["bool"]["filter"][0]["bool"]["must"] == [{"term": {"priority": "1"}}]
    assert set(body["aggs"]) == {"status", "current_workflow"}


def test_search_and_aggs(client):
    body = client.get("/search", params={"status": "success"}).json()
    assert body["size"] == 0
    assert "status" in body["aggs"]
    aggs = client.get("/aggs").json()["aggs"]
    assert aggs["current_workflow"] == {"terms": {"field": "current_workflow", "size": MAX_BUCKETS}}


def test_reload(client):
    assert client.post("/reload").json() == {"reloaded": 6}
