from __future__ import annotations

from dataclasses import dataclass

from ted_exporter.core.config import Settings
from ted_exporter.models.ted5000 import ActivationRequest, ActivationResponse

POST_URL = "/post"
HIGH_PRECISION = "T"


@dataclass(frozen=True)
class ActivationConfig:
    listen_port: int
    post_rate_minutes: int

    @classmethod
    def from_settings(cls, settings: Settings) -> ActivationConfig:
        return cls(
            listen_port=settings.listen_port,
            post_rate_minutes=settings.post_rate_minutes,
        )


def activate(
    request: ActivationRequest, *, request_host: str, config: ActivationConfig
) -> ActivationResponse:
    """Tell a gateway where and how often to post its readings.

    The answer depends only on ``request_host`` and ``config``; nothing about
    the requesting gateway is remembered, so repeated activations get the same
    response. ``request`` may be blank.
    """
    return ActivationResponse(
        post_server=request_host,
        use_ssl=False,
        post_port=config.listen_port,
        post_url=POST_URL,
        auth_token="",
        post_rate_minutes=config.post_rate_minutes,
        high_precision=HIGH_PRECISION,
    )
