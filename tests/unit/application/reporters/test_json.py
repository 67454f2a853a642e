"""Tests for JsonReporter."""

from __future__ import annotations

import json
from types import MappingProxyType

from faultframe.application.reporters.json import JsonReporter
from faultframe.application.reporters.protocol import ReporterProtocol
from faultframe.domain.model.records import EventRecord, ExceptionRecord
from tests.factories import make_frame


def _event() -> EventRecord:
    return EventRecord(
        message="ValueError: boom",
        exceptions=(
            ExceptionRecord(
                type="ValueError",
                value="boom",
                frames=(make_frame(function="outer"), make_frame(lineno=None, function="inner")),
            ),
        ),
        extra=MappingProxyType({"ValueError": MappingProxyType({"code": 7})}),
    )


class TestJsonReporter:
    """Tests for JsonReporter.report()."""

    def test_satisfies_protocol(self) -> None:
        """Structural reporter contract."""
        reporter: ReporterProtocol = JsonReporter()

        assert isinstance(reporter.report(_event()), str)

    def test_wire_shape(self) -> None:
        """message, exception.values[].stacktrace.frames, extra."""
        data = json.loads(JsonReporter().report(_event()))

        assert data["message"] == "ValueError: boom"
        value = data["exception"]["values"][0]
        assert value["type"] == "ValueError"
        assert value["value"] == "boom"
        assert [frame["function"] for frame in value["stacktrace"]["frames"]] == ["outer", "inner"]
        assert data["extra"] == {"ValueError": {"code": 7}}

    def test_none_fields_omitted(self) -> None:
        """Frame keys with None values are absent."""
        data = json.loads(JsonReporter().report(_event()))

        inner = data["exception"]["values"][0]["stacktrace"]["frames"][1]
        assert "lineno" not in inner
        assert "context_line" not in inner

    def test_compact(self) -> None:
        """indent=None -> single line."""
        output = JsonReporter(indent=None).report(_event())

        assert "\n" not in output

    def test_sort_keys(self) -> None:
        """sort_keys orders top-level keys."""
        output = JsonReporter(indent=None, sort_keys=True).report(_event())

        assert output.index('"exception"') < output.index('"extra"') < output.index('"message"')

    def test_message_only_event(self) -> None:
        """No exceptions -> only the message."""
        event = EventRecord(message="hello", exceptions=())

        data = json.loads(JsonReporter().report(event))

        assert data == {"message": "hello"}
