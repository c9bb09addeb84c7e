"""XML wire format of the TED5000 gateway.

The gateway posts readings as::

    <ted5000 GWID="..." auth="...">
      <COST mrd="..." fixed="..." min="..."/>
      <MTU ID="..." type="..." ver="...">
        <cumulative timestamp="..." watts="..." rate="..." pf="..." voltage="..."/>
      </MTU>
    </ted5000>

and activates with ``<ted5000Activation>`` carrying ``Gateway``, ``Unique`` and
``Ver`` child elements. Decoding is purely structural: values are not range
checked, and absent numeric attributes read as zero.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Callable, TypeVar

from ted_exporter.core.errors import DecodeError
from ted_exporter.models.ted5000 import (
    ActivationRequest,
    ActivationResponse,
    Cost,
    DeviceReading,
    MeasurementDocument,
    Sample,
)

MEASUREMENT_ROOT = "ted5000"
ACTIVATION_ROOT = "ted5000Activation"
ACTIVATION_RESPONSE_ROOT = "ted5000ActivationResponse"

T = TypeVar("T", int, float)


def _parse_root(body: bytes, expected: str) -> ET.Element:
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise DecodeError(f"invalid XML: {e}") from e
    if root.tag != expected:
        raise DecodeError(f"unexpected root element <{root.tag}>, expected <{expected}>")
    return root


def _number(element: ET.Element, name: str, cast: Callable[[str], T]) -> T:
    raw = element.get(name)
    if raw is None or raw == "":
        return cast("0")
    try:
        return cast(raw)
    except ValueError as e:
        raise DecodeError(
            f"attribute {name}={raw!r} on <{element.tag}> is not a valid number"
        ) from e


def _parse_sample(element: ET.Element) -> Sample:
    return Sample(
        timestamp=_number(element, "timestamp", int),
        watts=_number(element, "watts", float),
        rate=_number(element, "rate", float),
        power_factor=_number(element, "pf", float),
        voltage=_number(element, "voltage", float),
    )


def _parse_device(element: ET.Element) -> DeviceReading:
    device_id = element.get("ID")
    return DeviceReading(
        id=device_id if device_id else None,
        device_type=element.get("type", ""),
        firmware_version=element.get("ver", ""),
        samples=tuple(_parse_sample(c) for c in element.findall("cumulative")),
    )


def _parse_cost(element: ET.Element | None) -> Cost | None:
    if element is None:
        return None
    return Cost(
        meter_read_date=_number(element, "mrd", int),
        fixed=_number(element, "fixed", float),
        minimum=_number(element, "min", float),
    )


def parse_measurement_document(body: bytes) -> MeasurementDocument:
    root = _parse_root(body, MEASUREMENT_ROOT)
    return MeasurementDocument(
        gateway_id=root.get("GWID", ""),
        auth=root.get("auth", ""),
        cost=_parse_cost(root.find("COST")),
        devices=tuple(_parse_device(m) for m in root.findall("MTU")),
    )


def _child_text(root: ET.Element, tag: str) -> str:
    return (root.findtext(tag) or "").strip()


def parse_activation_request(body: bytes) -> ActivationRequest:
    root = _parse_root(body, ACTIVATION_ROOT)
    return ActivationRequest(
        gateway=_child_text(root, "Gateway"),
        unique_id=_child_text(root, "Unique"),
        version=_child_text(root, "Ver"),
    )


def render_activation_response(response: ActivationResponse) -> bytes:
    root = ET.Element(ACTIVATION_RESPONSE_ROOT)
    fields = [
        ("PostServer", response.post_server),
        ("UseSSL", "true" if response.use_ssl else "false"),
        ("PostPort", str(response.post_port)),
        ("PostURL", response.post_url),
        ("AuthToken", response.auth_token),
        ("PostRate", str(response.post_rate_minutes)),
        ("HighPrec", response.high_precision),
    ]
    for tag, text in fields:
        ET.SubElement(root, tag).text = text
    return ET.tostring(root, encoding="unicode", short_empty_elements=False).encode("utf-8")
