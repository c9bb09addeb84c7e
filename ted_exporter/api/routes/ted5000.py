from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, Response

from ted_exporter.api.deps import (
    get_activation_config,
    get_ingestion_service,
    get_metric_sink,
    get_request_host,
    get_settings,
)
from ted_exporter.codecs.ted5000_xml import (
    parse_activation_request,
    render_activation_response,
)
from ted_exporter.core.config import Settings
from ted_exporter.core.errors import DecodeError
from ted_exporter.models.ted5000 import ActivationRequest
from ted_exporter.repositories.base import ACTIVATIONS, DECODE_ERRORS, POSTS, MetricSink
from ted_exporter.services.activation import ActivationConfig, activate
from ted_exporter.services.ingestion import IngestionService

logger = logging.getLogger(__name__)

router = APIRouter()

ACK = "Ok"


@router.post("/activate", response_class=Response)
async def activate_gateway(
    request: Request,
    config: Annotated[ActivationConfig, Depends(get_activation_config)],
    sink: Annotated[MetricSink, Depends(get_metric_sink)],
    request_host: Annotated[str, Depends(get_request_host)],
) -> Response:
    body = await request.body()
    try:
        activation = parse_activation_request(body)
    except DecodeError as e:
        # The gateway never retries provisioning, so answer with defaults.
        logger.warning("Could not parse activation XML from %s: %s", request_host, e)
        sink.increment(DECODE_ERRORS, "activate")
        activation = ActivationRequest()

    response = activate(activation, request_host=request_host, config=config)
    sink.increment(ACTIVATIONS, activation.gateway)
    logger.info(
        "Activated gateway %r (unique=%r, ver=%r), posting to %s every %d min",
        activation.gateway,
        activation.unique_id,
        activation.version,
        response.post_server,
        response.post_rate_minutes,
    )
    return Response(
        content=render_activation_response(response), media_type="application/xml"
    )


@router.post("/post", response_class=PlainTextResponse)
async def post_readings(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    sink: Annotated[MetricSink, Depends(get_metric_sink)],
    service: Annotated[IngestionService, Depends(get_ingestion_service)],
) -> PlainTextResponse:
    body = await request.body()
    try:
        result = service.ingest_payload(body)
    except DecodeError as e:
        logger.warning("Could not parse post XML: %s", e)
        sink.increment(DECODE_ERRORS, "post")
        # Acknowledged like a success unless strict mode is on; a gateway
        # that sees errors keeps hammering the listener.
        return PlainTextResponse(
            f"Could not parse post XML: {e}\n{ACK}",
            status_code=(
                status.HTTP_400_BAD_REQUEST
                if settings.strict_post_errors
                else status.HTTP_200_OK
            ),
        )

    sink.increment(POSTS, result.gateway_id)
    logger.debug(
        "Post from gateway %r: %d MTUs, %d samples, %d skipped",
        result.gateway_id,
        result.devices,
        result.samples,
        result.skipped,
    )
    return PlainTextResponse(ACK)
