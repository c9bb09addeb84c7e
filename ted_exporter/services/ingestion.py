from __future__ import annotations

import logging
from dataclasses import dataclass
from operator import attrgetter

from ted_exporter.codecs.ted5000_xml import parse_measurement_document
from ted_exporter.models.ted5000 import DeviceReading, MeasurementDocument
from ted_exporter.repositories.base import UPDATES_PER_POST, VOLTAGE, WATTS, MetricSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestResult:
    gateway_id: str
    devices: int
    skipped: int
    samples: int


class IngestionService:
    def __init__(self, sink: MetricSink) -> None:
        self._sink = sink

    def ingest_payload(self, body: bytes) -> IngestResult:
        # DecodeError propagates from here, before the sink is touched.
        return self.ingest(parse_measurement_document(body))

    def ingest(self, document: MeasurementDocument) -> IngestResult:
        devices = skipped = samples = 0
        for reading in document.devices:
            if reading.id is None:
                logger.warning(
                    "Skipping MTU without ID from gateway %r (%d samples)",
                    document.gateway_id,
                    len(reading.samples),
                )
                skipped += 1
                continue
            samples += self._ingest_reading(reading.id, reading)
            devices += 1
        return IngestResult(
            gateway_id=document.gateway_id,
            devices=devices,
            skipped=skipped,
            samples=samples,
        )

    def _ingest_reading(self, mtu: str, reading: DeviceReading) -> int:
        # sorted() is stable, so samples sharing a timestamp keep wire order.
        ordered = sorted(reading.samples, key=attrgetter("timestamp"))
        for sample in ordered:
            self._sink.increment(UPDATES_PER_POST, mtu, 1)
            self._sink.set(WATTS, mtu, sample.watts)
            self._sink.set(VOLTAGE, mtu, sample.voltage)
        return len(ordered)
