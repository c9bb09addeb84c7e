from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from ted_exporter.core.config import Settings
from ted_exporter.repositories.base import MetricSink
from ted_exporter.services.activation import ActivationConfig
from ted_exporter.services.ingestion import IngestionService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_metric_sink(request: Request) -> MetricSink:
    return request.app.state.metric_sink


def get_activation_config(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ActivationConfig:
    return ActivationConfig.from_settings(settings)


def get_ingestion_service(
    sink: Annotated[MetricSink, Depends(get_metric_sink)],
) -> IngestionService:
    return IngestionService(sink)


def get_request_host(request: Request) -> str:
    return request.headers.get("host") or request.url.netloc
