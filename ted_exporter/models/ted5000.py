from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Sample:
    timestamp: int
    watts: float
    rate: float
    power_factor: float
    voltage: float


@dataclass(frozen=True)
class DeviceReading:
    # None when the MTU element carried no ID; such readings are skipped.
    id: str | None
    device_type: str = ""
    firmware_version: str = ""
    samples: tuple[Sample, ...] = ()


@dataclass(frozen=True)
class Cost:
    meter_read_date: int
    fixed: float
    minimum: float


@dataclass(frozen=True)
class MeasurementDocument:
    gateway_id: str
    auth: str = ""
    cost: Cost | None = None
    devices: tuple[DeviceReading, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ActivationRequest:
    gateway: str = ""
    unique_id: str = ""
    version: str = ""


@dataclass(frozen=True)
class ActivationResponse:
    post_server: str
    use_ssl: bool
    post_port: int
    post_url: str
    auth_token: str
    post_rate_minutes: int
    high_precision: str
