"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from tests._fixtures.project_builder import ProjectBuilder
from webpulse.aggregator import ProjectAggregator
from webpulse.config import AnalysisConfig
from webpulse.service import create_app


def _write_app(project_builder: ProjectBuilder) -> str:
    project_builder.write(
        {
            "index.html": "<html><body><my-card></my-card></body></html>\n",
            "package.json": '{"dependencies": {"vue": "^3.4.0"}}',
            "objects/Account.xml": "<CustomObject>\n</CustomObject>\n",
        }
    )
    return str(project_builder.path())


def test_health_endpoint() -> None:
    client = TestClient(create_app())
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_endpoint(project_builder: ProjectBuilder) -> None:
    client = TestClient(create_app())

    response = client.post("/analyze", json={"path": _write_app(project_builder)})

    assert response.status_code == 200
    payload = response.json()
    assert payload["project"]["framework"] == "Vue.js"
    assert payload["project"]["custom_element_count"] == 1
    assert payload["project"]["salesforce_metadata_count"] == 0
    assert payload["estimation"]["js_heap_size"] > 0
    assert payload["performance_impact"] > 0


def test_analyze_endpoint_enables_salesforce(project_builder: ProjectBuilder) -> None:
    client = TestClient(create_app())

    response = client.post(
        "/analyze", json={"path": _write_app(project_builder), "salesforce": True}
    )

    assert response.status_code == 200
    assert response.json()["project"]["salesforce_metadata_count"] == 1


def test_estimate_and_impact_endpoints(project_builder: ProjectBuilder) -> None:
    client = TestClient(create_app())
    path = _write_app(project_builder)

    estimate = client.post("/estimate", json={"path": path})
    impact = client.post("/impact", json={"path": path})

    assert estimate.status_code == 200
    assert set(estimate.json()) == {
        "js_heap_size",
        "transferred_data",
        "resource_size",
        "dom_content_loaded",
        "largest_contentful_paint",
    }
    assert impact.status_code == 200
    assert impact.json()["score"] > 0


def test_missing_path_returns_404(tmp_path: Path) -> None:
    client = TestClient(create_app())
    response = client.post("/impact", json={"path": str(tmp_path / "missing")})
    assert response.status_code == 404


def test_custom_analyzer_factory_is_used(project_builder: ProjectBuilder) -> None:
    calls: list[AnalysisConfig | None] = []

    def factory(config: AnalysisConfig | None) -> ProjectAggregator:
        calls.append(config)
        return ProjectAggregator(config)

    client = TestClient(create_app(factory))
    response = client.post("/estimate", json={"path": _write_app(project_builder)})

    assert response.status_code == 200
    assert calls == [None]
