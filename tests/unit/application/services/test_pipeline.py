"""Tests for the capture pipeline."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import pytest

from faultframe.application.services import pipeline
from faultframe.application.services.pipeline import (
    default_config,
    exception_chain,
    extract_stack_from_error,
    get_exception_from_error,
    parse_error,
    parse_message,
    parse_stack,
)
from faultframe.domain.model.raw_entry import RawStackEntry
from tests.factories import ErrorLike, StaticReader, make_config, make_entry, source_text

THIS_DIR = os.path.dirname(os.path.abspath(__file__)) + os.sep


class _FailingExtractor:
    async def extract(self, error: object) -> tuple[RawStackEntry, ...]:
        raise RuntimeError("broken extractor")


def _fault() -> None:
    raise ValueError("boom")


def _call_fault() -> None:
    _fault()


def retry_capture_exception() -> None:
    raise ConnectionError("reset")


def _caught() -> BaseException:
    try:
        _call_fault()
    except ValueError as exc:
        return exc
    raise AssertionError("unreachable")


class TestExtractStackFromError:
    """Tests for extract_stack_from_error."""

    def test_real_exception(self) -> None:
        """Innermost entry first."""
        entries = asyncio.run(extract_stack_from_error(_caught()))

        assert [entry.function_name for entry in entries] == ["_fault", "_call_fault", "_caught"]

    def test_no_stack(self) -> None:
        """Exception never raised -> empty."""
        assert asyncio.run(extract_stack_from_error(ValueError("x"))) == ()

    def test_failing_extractor(self) -> None:
        """Extractor failure -> empty, not an error."""
        assert asyncio.run(extract_stack_from_error(_caught(), _FailingExtractor())) == ()


class TestParseStack:
    """Tests for parse_stack."""

    def test_normalizes_and_enriches(self) -> None:
        """Frames in input order with context for in-app files."""
        reader = StaticReader({"/app/main.py": source_text(20)})
        entries = [make_entry(lineno=10), make_entry(filename="/venv/site-packages/lib/x.py")]

        frames = asyncio.run(parse_stack(entries, make_config(), reader))

        assert frames[0].context_line == "line 10"
        assert frames[1].in_app is False
        assert frames[1].context_line is None


class TestGetExceptionFromError:
    """Tests for get_exception_from_error."""

    def test_real_exception(self) -> None:
        """Type, value, fault frame last with source context."""
        record = asyncio.run(get_exception_from_error(_caught(), make_config(base_dir=THIS_DIR)))

        assert record.type == "ValueError"
        assert record.value == "boom"
        assert [frame.function for frame in record.frames] == ["_caught", "_call_fault", "_fault"]

        fault = record.frames[-1]
        assert fault.filename == os.path.abspath(__file__)
        assert fault.module == "test_pipeline"
        assert fault.in_app is True
        assert fault.context_line is not None
        assert 'raise ValueError("boom")' in fault.context_line
        assert fault.pre_context is not None
        assert fault.post_context is not None


class TestExceptionChain:
    """Tests for exception_chain."""

    def test_single(self) -> None:
        """No cause -> just the error."""
        error = ValueError("x")

        assert exception_chain(error) == (error,)

    def test_explicit_cause_oldest_first(self) -> None:
        """raise ... from ... -> cause first."""
        cause = KeyError("k")
        error = ValueError("x")
        error.__cause__ = cause

        assert exception_chain(error) == (cause, error)

    def test_implicit_context(self) -> None:
        """Exception raised while handling another."""
        try:
            try:
                raise KeyError("k")
            except KeyError:
                raise ValueError("x")  # noqa: B904
        except ValueError as exc:
            error = exc

        chain = exception_chain(error)

        assert [type(item).__name__ for item in chain] == ["KeyError", "ValueError"]

    def test_suppressed_context(self) -> None:
        """raise ... from None hides the context."""
        try:
            try:
                raise KeyError("k")
            except KeyError:
                raise ValueError("x") from None
        except ValueError as exc:
            error = exc

        assert exception_chain(error) == (error,)

    def test_cycle(self) -> None:
        """Cyclic causes terminate."""
        first = ValueError("a")
        second = KeyError("b")
        first.__cause__ = second
        second.__cause__ = first

        assert exception_chain(first) == (second, first)

    def test_error_like(self) -> None:
        """Non-exceptions have no chain."""
        error = ErrorLike("E", "m")

        assert exception_chain(error) == (error,)


class TestParseError:
    """Tests for parse_error."""

    def test_event(self) -> None:
        """Summary, single exception record, no extra."""
        event = asyncio.run(parse_error(_caught(), make_config(base_dir=THIS_DIR)))

        assert event.message == "ValueError: boom"
        assert len(event.exceptions) == 1
        assert event.exceptions[0].frames[-1].function == "_fault"
        assert event.extra == {}

    def test_extra(self) -> None:
        """Custom attributes collected under the type name."""
        error = _caught()
        error.customCode = 42  # type: ignore[attr-defined]

        event = asyncio.run(parse_error(error, make_config(base_dir=THIS_DIR)))

        assert event.extra["ValueError"]["customCode"] == 42

    def test_chained(self) -> None:
        """include_chained: cause first, raised exception last."""
        try:
            try:
                _call_fault()
            except ValueError as cause:
                raise RuntimeError("wrapped") from cause
        except RuntimeError as exc:
            error = exc

        event = asyncio.run(parse_error(error, make_config(base_dir=THIS_DIR, include_chained=True)))

        assert [record.type for record in event.exceptions] == ["ValueError", "RuntimeError"]
        assert event.message == "RuntimeError: wrapped"

    def test_chain_ignored_by_default(self) -> None:
        """Default: single record for the raised exception."""
        try:
            try:
                _call_fault()
            except ValueError as cause:
                raise RuntimeError("wrapped") from cause
        except RuntimeError as exc:
            error = exc

        event = asyncio.run(parse_error(error, make_config(base_dir=THIS_DIR)))

        assert [record.type for record in event.exceptions] == ["RuntimeError"]

    def test_error_like_with_formatted_stack(self, tmp_path: Path) -> None:
        """Formatted traceback text is parsed and enriched from disk."""
        source = tmp_path / "worker.py"
        source.write_text(source_text(20), encoding="utf-8")
        stack = (
            "Traceback (most recent call last):\n"
            f'  File "{source}", line 4, in main\n'
            "    line 4\n"
            f'  File "{source}", line 10, in step\n'
            "    line 10\n"
            "KeyError: 'job'\n"
        )
        error = ErrorLike("KeyError", "'job'", stack=stack, job_id="j-1")

        event = asyncio.run(parse_error(error, make_config(base_dir=str(tmp_path))))

        record = event.exceptions[0]
        assert event.message == "KeyError: 'job'"
        assert [frame.function for frame in record.frames] == ["main", "step"]
        assert record.frames[-1].context_line == "line 10"
        assert record.frames[-1].module == "worker"
        assert event.extra == {"KeyError": {"job_id": "j-1"}}

    def test_default_config(self) -> None:
        """config=None uses the cached default."""
        event = asyncio.run(parse_error(_caught()))

        assert event.message == "ValueError: boom"
        assert default_config() is default_config()

    def test_failing_extractor(self) -> None:
        """Still a valid event, without frames."""
        event = asyncio.run(parse_error(_caught(), make_config(), extractor=_FailingExtractor()))

        assert event.message == "ValueError: boom"
        assert event.exceptions[0].frames == ()

    def test_marker_named_function_kept(self) -> None:
        """Traceback frames are never capture entry points."""
        try:
            retry_capture_exception()
        except ConnectionError as exc:
            error = exc

        event = asyncio.run(parse_error(error, make_config(base_dir=THIS_DIR)))

        assert event.exceptions[0].frames[-1].function == "retry_capture_exception"

    def test_marker_applies_to_error_like(self) -> None:
        """Entry point at the innermost edge of a raw stack is dropped."""
        stack = [make_entry(function_name="capture_exception"), make_entry(function_name="handler")]

        event = asyncio.run(
            parse_error(ErrorLike("E", "m", stack=stack), make_config(), reader=StaticReader({}))
        )

        assert [frame.function for frame in event.exceptions[0].frames] == ["handler"]

    def test_frames_failure_keeps_extra(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Frames step fails: record without frames, extra still collected."""

        async def broken_parse_stack(*args: object, **kwargs: object) -> tuple:
            raise RuntimeError("frames step failed")

        monkeypatch.setattr(pipeline, "parse_stack", broken_parse_stack)
        error = _caught()
        error.customCode = 42  # type: ignore[attr-defined]

        event = asyncio.run(parse_error(error, make_config()))

        assert event.message == "ValueError: boom"
        assert event.exceptions[0].type == "ValueError"
        assert event.exceptions[0].frames == ()
        assert event.extra == {"ValueError": {"customCode": 42}}


class TestParseMessage:
    """Tests for parse_message."""

    def test_message_with_stack(self) -> None:
        """Frames in presentation order, no exceptions."""
        entries = [make_entry(function_name="inner"), make_entry(function_name="outer")]

        event = asyncio.run(parse_message("hello", make_config(), stack=entries, reader=StaticReader({})))

        assert event.message == "hello"
        assert event.exceptions == ()
        assert [frame.function for frame in event.frames] == ["outer", "inner"]

    def test_empty_message(self) -> None:
        """Placeholder for empty message."""
        event = asyncio.run(parse_message("", make_config()))

        assert event.message == "<no message>"
        assert event.frames == ()
