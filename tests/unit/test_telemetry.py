import logging

import pytest

from bipartite_sage.telemetry import LoggingTelemetryClient, NoOpTelemetryClient, TelemetryClient


def test_logging_client_writes_span(caplog):
    client = LoggingTelemetryClient()
    with caplog.at_level(logging.DEBUG, logger="bipartite_sage.telemetry"):
        with client.span("instance_reader.train_batch") as span:
            span.set_attribute("batch", 3)
            span.set_attribute("user_nodes", 2)

    assert "instance_reader.train_batch" in caplog.text
    assert "'batch': 3" in caplog.text
    assert "'user_nodes': 2" in caplog.text
    assert span.attributes["success"] is True


def test_logging_client_level_is_configurable(caplog):
    client = LoggingTelemetryClient(level=logging.INFO)
    with caplog.at_level(logging.INFO, logger="bipartite_sage.telemetry"):
        with client.span("instance_reader.predict_batch"):
            pass

    assert [record.levelno for record in caplog.records] == [logging.INFO]


def test_span_marks_failure_and_reraises():
    client = NoOpTelemetryClient()
    with pytest.raises(KeyError):
        with client.span("boom") as span:
            raise KeyError("x")
    assert span.attributes["success"] is False
    assert span.attributes["duration_ms"] >= 0


def test_client_without_sink_cannot_be_built():
    class NoSink(TelemetryClient):
        pass

    with pytest.raises(TypeError):
        NoSink()
