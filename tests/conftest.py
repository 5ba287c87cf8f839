import pytest
import yaml

from esfilter.filters import FilterGroup, build_filter_map


CATALOG = {
    "groups": [
        {
            "label": "Workflow",
            "class": "workflow",
            "filters": [
                {
                    "id": "status",
                    "label": "Status",
                    "selection": "multi",
                    "logic": "or",
                    "field": "status",
                    "facets": [
                        {"id": "success", "label": "Success", "query": "status=success", "count": 3},
                        {"id": "canceled", "label": "Canceled", "query": "status=canceled", "count": 1},
                    ],
                },
                {
                    "id": "current_workflow",
                    "label": "Current workflow",
                    "selection": "single",
                    "logic": "and",
                    "field": "current_workflow",
                },
                {
                    "id": "remediated",
                    "label": "Remediated",
                    "selection": "multi",
                    "logic": "and",
                    "field": "context.remediated",
                    "static": True,
                },
            ],
        },
        {
            "label": "Dates",
            "class": "dates",
            "filters": [
                {
                    "id": "end_date",
                    "label": "Ended on",
                    "selection": "date",
                    "field": "end_date",
                    "format": "2006-01-02",
                },
                {
                    "id": "description",
                    "label": "Description",
                    "selection": "wildcard",
                    "field": "description",
                },
                {
                    "id": "summary",
                    "label": "Summary",
                    "selection": "text",
                    "logic": "and",
                    "field": "summary",
                },
            ],
        },
    ]
}


@pytest.fixture
def catalog():
    """Fixture providing the persisted catalog as plain dicts."""
    return CATALOG


@pytest.fixture
def groups(catalog):
    """Fixture providing the catalog as FilterGroups."""
    return [FilterGroup.from_dict(g) for g in catalog["groups"]]


@pytest.fixture
def filter_map(groups):
    """Fixture providing the compiler's lookup map."""
    return build_filter_map(groups)


@pytest.fixture
def catalog_file(tmp_path, catalog):
    """Fixture writing the catalog to a YAML file."""
    path = tmp_path / "filters.yaml"
    path.write_text(yaml.safe_dump(catalog), encoding="utf-8")
    return path
