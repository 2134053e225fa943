"""Tests for the streaming writers returned by Obfuscator.stream_to."""

import io

import pytest

from tests.utils.doubles import FailingTarget, FlushableTarget, RecordingSink
from textcloak import (
    InvalidArgumentError,
    ObfuscatingWriter,
    OutOfRangeError,
    StreamClosedError,
    all_chars,
    fixed_length,
    fixed_value,
    from_function,
    none,
    portion,
)
from textcloak.masking.writers import (
    CachingObfuscatingWriter,
    DiscardingWriter,
    MaskCharWriter,
    PassThroughWriter,
)


WRITER_STRATEGIES = {
    "all": all_chars(),
    "none": none(),
    "fixed_length": fixed_length(5),
    "fixed_value": fixed_value("<hidden>"),
    "portion": portion().keep_at_start(2).keep_at_end(2).build(),
    "function": from_function(str.upper),
    "chain": none().until_length(3).then(all_chars()),
}


class TestWriterFlavors:
    """Each strategy picks a forwarding or collecting writer."""

    @pytest.mark.parametrize(
        ("strategy", "writer_type"),
        [
            (all_chars(), MaskCharWriter),
            (none(), PassThroughWriter),
            (fixed_length(3), DiscardingWriter),
            (fixed_value("x"), DiscardingWriter),
            (portion().build(), CachingObfuscatingWriter),
            (from_function(str.upper), CachingObfuscatingWriter),
        ],
    )
    def test_writer_type(self, strategy, writer_type: type) -> None:
        assert type(strategy.stream_to([])) is writer_type

    def test_forwarding_writer_writes_immediately(self, recording_sink: RecordingSink) -> None:
        writer = all_chars().stream_to(recording_sink)
        writer.write("abc")
        assert recording_sink.appends == ["***"]
        writer.write("de")
        assert recording_sink.appends == ["***", "**"]

    def test_passthrough_writer(self, recording_sink: RecordingSink) -> None:
        writer = none().stream_to(recording_sink)
        writer.append("hello world", 6, 11)
        assert recording_sink.appends == ["world"]

    def test_discarding_writer_writes_on_close(self, recording_sink: RecordingSink) -> None:
        writer = fixed_length(4).stream_to(recording_sink)
        writer.write("hello")
        assert recording_sink.appends == []
        writer.close()
        assert recording_sink.appends == ["****"]

    def test_discarding_writer_without_writes(self, recording_sink: RecordingSink) -> None:
        fixed_value("[x]").stream_to(recording_sink).close()
        assert recording_sink.getvalue() == "[x]"

    def test_collecting_writer_calls_function_once(self, recording_sink: RecordingSink) -> None:
        calls: list[str] = []

        def record(text: str) -> str:
            calls.append(text)
            return text.upper()

        with from_function(record).stream_to(recording_sink) as writer:
            writer.write("hello ")
            writer.write("world")
        assert calls == ["hello world"]
        assert recording_sink.getvalue() == "HELLO WORLD"


class TestWriterStateMachine:
    """Open and Closed states shared by every writer."""

    @pytest.mark.parametrize("name", sorted(WRITER_STRATEGIES))
    def test_close_is_idempotent(self, name: str) -> None:
        sink = RecordingSink()
        writer = WRITER_STRATEGIES[name].stream_to(sink)
        writer.write("secret value")
        writer.close()
        output = sink.getvalue()
        calls = list(sink.calls)
        writer.close()
        assert sink.calls == calls
        assert sink.getvalue() == output == str(WRITER_STRATEGIES[name].mask_text("secret value"))

    @pytest.mark.parametrize("name", sorted(WRITER_STRATEGIES))
    def test_writes_after_close_fail(self, name: str) -> None:
        writer = WRITER_STRATEGIES[name].stream_to([])
        writer.close()
        assert writer.closed
        with pytest.raises(StreamClosedError):
            writer.write("a")
        with pytest.raises(StreamClosedError):
            writer.append("abc", 0, 1)
        with pytest.raises(StreamClosedError):
            writer.append_char("a")
        with pytest.raises(StreamClosedError):
            writer.writelines(["a"])
        with pytest.raises(StreamClosedError):
            writer.flush()

    def test_empty_write_on_closed_writer_fails(self) -> None:
        writer = all_chars().stream_to([])
        writer.close()
        with pytest.raises(StreamClosedError):
            writer.write("")

    def test_flush_reaches_flushable_target(self, flushable_target: FlushableTarget) -> None:
        writer = none().stream_to(flushable_target)
        writer.write("abc")
        writer.flush()
        assert flushable_target.flush_count == 1
        assert flushable_target.getvalue() == "abc"

    def test_close_flushes_but_never_closes_the_destination(self) -> None:
        destination = io.StringIO()
        with all_chars().stream_to(destination) as writer:
            writer.write("abc")
        assert writer.closed
        assert not destination.closed
        assert destination.getvalue() == "***"

    def test_close_ends_closed_even_when_finalization_fails(self) -> None:
        writer = fixed_value("replacement").stream_to(FailingTarget())
        with pytest.raises(OSError):
            writer.close()
        assert writer.closed
        writer.close()

    def test_write_returns_length(self) -> None:
        writer = all_chars().stream_to([])
        assert writer.write("hello") == 5
        assert writer.write("") == 0

    def test_write_validates_arguments(self) -> None:
        writer = all_chars().stream_to([])
        with pytest.raises(InvalidArgumentError):
            writer.write(None)  # type: ignore[arg-type]
        with pytest.raises(OutOfRangeError):
            writer.append("abc", 2, 5)
        with pytest.raises(InvalidArgumentError):
            writer.append_char("ab")

    def test_writer_is_a_destination(self) -> None:
        chunks: list[str] = []
        with none().stream_to(chunks) as outer:
            all_chars().mask_to("abc", outer)
            fixed_value("!").mask_to("ignored", outer)
        assert "".join(chunks) == "***!"
        assert isinstance(outer, ObfuscatingWriter)

    def test_missing_sink(self) -> None:
        with pytest.raises(InvalidArgumentError):
            MaskCharWriter(None, "*")  # type: ignore[arg-type]

    def test_missing_obfuscator(self, recording_sink: RecordingSink) -> None:
        with pytest.raises(InvalidArgumentError):
            CachingObfuscatingWriter(None, recording_sink)  # type: ignore[arg-type]
