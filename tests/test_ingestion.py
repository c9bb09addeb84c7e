from __future__ import annotations

from itertools import permutations

import pytest

from ted_exporter.core.errors import DecodeError
from ted_exporter.models.ted5000 import DeviceReading, MeasurementDocument, Sample
from ted_exporter.repositories.base import UPDATES_PER_POST, VOLTAGE, WATTS
from ted_exporter.services.ingestion import IngestionService
from tests.fakes import FakeMetricSink, cumulative, mtu, posting


def _sample(timestamp: int, watts: float, voltage: float = 120.0) -> Sample:
    return Sample(timestamp=timestamp, watts=watts, rate=0.1, power_factor=0.9, voltage=voltage)


def _document(*readings: DeviceReading) -> MeasurementDocument:
    return MeasurementDocument(gateway_id="gw", devices=readings)


@pytest.mark.parametrize(
    "order", list(permutations([(300, 3.0, 123.0), (100, 1.0, 121.0), (200, 2.0, 122.0)]))
)
def test_latest_sample_wins_regardless_of_order(order) -> None:
    sink = FakeMetricSink()
    samples = tuple(_sample(ts, w, v) for ts, w, v in order)
    IngestionService(sink).ingest(_document(DeviceReading(id="A", samples=samples)))

    assert sink.gauge(WATTS, "A") == 3.0
    assert sink.gauge(VOLTAGE, "A") == 123.0
    assert sink.counter(UPDATES_PER_POST, "A") == 3


def test_equal_timestamps_keep_wire_order() -> None:
    sink = FakeMetricSink()
    samples = (_sample(100, 1.0), _sample(100, 2.0))
    IngestionService(sink).ingest(_document(DeviceReading(id="A", samples=samples)))

    assert sink.gauge(WATTS, "A") == 2.0
    assert sink.counter(UPDATES_PER_POST, "A") == 2


def test_one_increment_per_sample() -> None:
    sink = FakeMetricSink()
    samples = tuple(_sample(ts, float(ts)) for ts in range(7))
    result = IngestionService(sink).ingest(_document(DeviceReading(id="A", samples=samples)))

    assert sink.counter(UPDATES_PER_POST, "A") == 7
    assert result.samples == 7
    assert result.devices == 1


def test_repeated_posting_sets_but_keeps_counting() -> None:
    sink = FakeMetricSink()
    service = IngestionService(sink)
    doc = _document(DeviceReading(id="A", samples=(_sample(100, 42.0, 118.5),)))

    service.ingest(doc)
    assert sink.counter(UPDATES_PER_POST, "A") == 1
    service.ingest(doc)

    assert sink.gauge(WATTS, "A") == 42.0
    assert sink.gauge(VOLTAGE, "A") == 118.5
    assert sink.counter(UPDATES_PER_POST, "A") == 2


def test_devices_are_isolated() -> None:
    sink = FakeMetricSink()
    sink.set(WATTS, "C", 99.0)
    IngestionService(sink).ingest(
        _document(
            DeviceReading(id="A", samples=(_sample(1, 10.0),)),
            DeviceReading(id="B", samples=(_sample(1, 20.0),)),
        )
    )

    assert sink.gauge(WATTS, "A") == 10.0
    assert sink.gauge(WATTS, "B") == 20.0
    assert sink.gauge(WATTS, "C") == 99.0


def test_duplicate_ids_in_one_document_apply_in_document_order() -> None:
    sink = FakeMetricSink()
    IngestionService(sink).ingest(
        _document(
            DeviceReading(id="A", samples=(_sample(500, 5.0),)),
            DeviceReading(id="A", samples=(_sample(100, 1.0),)),
        )
    )

    assert sink.gauge(WATTS, "A") == 1.0
    assert sink.counter(UPDATES_PER_POST, "A") == 2


def test_reading_without_id_is_skipped() -> None:
    sink = FakeMetricSink()
    result = IngestionService(sink).ingest(
        _document(
            DeviceReading(id=None, samples=(_sample(1, 10.0),)),
            DeviceReading(id="B", samples=(_sample(1, 20.0),)),
        )
    )

    assert result.skipped == 1
    assert result.devices == 1
    assert sink.gauges == {(WATTS, "B"): 20.0, (VOLTAGE, "B"): 120.0}
    assert sink.counters == {(UPDATES_PER_POST, "B"): 1.0}


def test_empty_document_is_a_noop() -> None:
    sink = FakeMetricSink()
    result = IngestionService(sink).ingest(_document())
    assert result.samples == 0
    assert sink.counters == {}
    assert sink.gauges == {}


def test_ingest_payload_decodes_and_ingests() -> None:
    sink = FakeMetricSink()
    body = posting(mtu("A", cumulative(300, 3.0), cumulative(100, 1.0)), gateway="200F1A")
    result = IngestionService(sink).ingest_payload(body)

    assert result.gateway_id == "200F1A"
    assert sink.gauge(WATTS, "A") == 3.0


def test_ingest_payload_decode_error_mutates_nothing() -> None:
    sink = FakeMetricSink()
    body = posting(mtu("A", cumulative(1, 1.0)))[:-5]
    with pytest.raises(DecodeError):
        IngestionService(sink).ingest_payload(body)
    assert sink.counters == {}
    assert sink.gauges == {}
