from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from ted_exporter.api import deps
from ted_exporter.core.config import Settings
from ted_exporter.factory import create_app
from tests.fakes import FakeMetricSink


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        env="test",
        debug=True,
        listen_port=9191,
        metrics_path="/metrics",
        post_rate_minutes=1,
        strict_post_errors=False,
    )


@pytest.fixture()
def sink() -> FakeMetricSink:
    return FakeMetricSink()


@pytest.fixture()
def client(settings: Settings, sink: FakeMetricSink) -> TestClient:
    app = create_app(settings, registry=CollectorRegistry())
    app.dependency_overrides[deps.get_metric_sink] = lambda: sink
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture()
def prom_client(settings: Settings, registry: CollectorRegistry) -> TestClient:
    app = create_app(settings, registry=registry)
    with TestClient(app) as client:
        yield client
