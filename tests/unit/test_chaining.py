"""Tests for prefix chaining of strategies."""

import io

import pytest

from tests.utils.doubles import ChunkedSource, RecordingSink
from textcloak import (
    InvalidArgumentError,
    StrategyKind,
    StreamClosedError,
    all_chars,
    fixed_length,
    fixed_value,
    from_function,
    none,
    portion,
)
from textcloak.core.config import MaskingConfig, set_config
from textcloak.core.sinks import Sink
from textcloak.core.text import ConcatText
from textcloak.masking.chaining import PrefixBuilder, PrefixObfuscator


class CountingCalls:
    """Masking function that records every call."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, text: str) -> str:
        self.calls.append(text)
        return text.upper()


class TestPrefixBatch:
    """Batch surfaces split the range at the switch length."""

    def test_split_matches_manual_concatenation(self) -> None:
        first = portion().keep_at_start(1).build()
        second = portion().keep_at_end(2).build()
        chained = first.until_length(4).then(second)
        text = "abcdefghij"
        assert chained(text) == str(first.mask_text(text[0:4])) + str(second.mask_text(text[4:10]))
        assert chained(text) == "a*******ij"

    def test_result_is_a_concatenation_view(self) -> None:
        result = none().until_length(2).then(all_chars()).mask_text("abcdef")
        assert isinstance(result, ConcatText)
        assert result == "ab****"

    def test_short_input_skips_second_strategy(self) -> None:
        second = CountingCalls()
        chained = none().until_length(4).then(from_function(second))
        assert chained("abcd") == "abcd"
        assert chained("ab") == "ab"
        assert second.calls == []

    def test_range_is_relative_to_start(self) -> None:
        chained = none().until_length(2).then(all_chars())
        assert chained.mask_text("xxabcdefxx", 2, 8) == "ab****"

    def test_mask_to(self, recording_sink: RecordingSink) -> None:
        none().until_length(3).then(fixed_value("...")).mask_to("abcdef", recording_sink)
        assert recording_sink.appends == ["abc", "..."]

    def test_three_strategies(self) -> None:
        chained = none().until_length(2).then(all_chars()).until_length(5).then(fixed_value("~"))
        assert chained("abcdefgh") == "ab***~"
        assert chained("abcd") == "ab**"
        assert chained.kind is StrategyKind.CHAIN


class TestPrefixStream:
    """Pull surface equals the batch surface."""

    @pytest.mark.parametrize("text", ["", "abc", "abcd", "abcde", "abcdefghijkl"])
    def test_mask_stream(self, text: str) -> None:
        chained = none().until_length(4).then(portion().keep_at_end(1).build())
        assert chained.mask_source(ChunkedSource(text, chunk_size=3)) == chained(text)

    def test_exact_length_source_skips_second_strategy(self) -> None:
        second = CountingCalls()
        chained = none().until_length(4).then(from_function(second))
        assert chained.mask_source(io.StringIO("abcd")) == "abcd"
        assert second.calls == []

    def test_source_is_fully_consumed(self) -> None:
        set_config(MaskingConfig(buffer_size=2))
        source = io.StringIO("abcdefgh")
        chained = all_chars().until_length(3).then(none())
        assert chained.mask_source(source) == "***defgh"
        assert source.read() == ""


class TestPrefixWriter:
    """The incremental writer switches strategies at the right character."""

    @pytest.mark.parametrize(
        "chunks",
        [
            ["abcdefghij"],
            ["abcd", "efghij"],
            ["abc", "defg", "hij"],
            list("abcdefghij"),
            ["", "abcde", "", "fghij"],
        ],
    )
    def test_any_chunking_matches_batch(self, chunks: list[str]) -> None:
        chained = portion().keep_at_start(1).build().until_length(4).then(
            portion().keep_at_end(2).build()
        )
        sink = RecordingSink()
        with chained.stream_to(sink) as writer:
            for chunk in chunks:
                writer.write(chunk)
        assert sink.getvalue() == chained("abcdefghij") == "a***" + "****ij"

    def test_exactly_switch_length_never_creates_second_writer(self) -> None:
        second = CountingCalls()
        chained = none().until_length(4).then(from_function(second))
        sink = RecordingSink()
        with chained.stream_to(sink) as writer:
            writer.write("ab")
            writer.write("cd")
        assert sink.getvalue() == "abcd"
        assert second.calls == []

    def test_switch_happens_on_next_character(self) -> None:
        sink = RecordingSink()
        writer = fixed_length(3).until_length(4).then(none()).stream_to(sink)
        writer.write("abcd")
        assert sink.appends == []
        writer.write("e")
        assert sink.appends == ["***", "e"]
        writer.close()
        assert sink.getvalue() == "***e"

    def test_straddling_write_is_split_once(self) -> None:
        sink = RecordingSink()
        writer = none().until_length(3).then(all_chars()).stream_to(sink)
        writer.write("abcdef")
        assert sink.appends == ["abc", "***"]

    def test_nested_chain_writer(self) -> None:
        chained = none().until_length(2).then(all_chars()).until_length(5).then(fixed_value("~"))
        sink = RecordingSink()
        with chained.stream_to(sink) as writer:
            writer.writelines(["a", "bcd", "efgh"])
        assert sink.getvalue() == chained("abcdefgh") == "ab***~"

    def test_close_is_idempotent(self) -> None:
        sink = RecordingSink()
        writer = none().until_length(2).then(fixed_value("!")).stream_to(sink)
        writer.write("abc")
        writer.close()
        writer.close()
        assert sink.getvalue() == "ab!"
        with pytest.raises(StreamClosedError):
            writer.write("d")

    def test_failed_write_keeps_countdown(self) -> None:
        class FailOnce(Sink):
            def __init__(self) -> None:
                self.parts: list[str] = []
                self.fail = True

            def append(self, text, start=0, end=None) -> None:
                if self.fail:
                    self.fail = False
                    raise OSError("temporarily unavailable")
                self.parts.append(str(text)[start:end])

        sink = FailOnce()
        writer = none().until_length(3).then(all_chars()).stream_to(sink)
        with pytest.raises(OSError):
            writer.write("abc")
        writer.write("abcd")
        assert "".join(sink.parts) == "abc*"

    def test_failed_switch_closes_writer(self) -> None:
        class FailOnClose(Sink):
            def __init__(self) -> None:
                self.parts: list[str] = []

            def append(self, text, start=0, end=None) -> None:
                if str(text) == "!":
                    raise OSError("disk full")
                self.parts.append(str(text)[start:end])

        sink = FailOnClose()
        writer = fixed_value("!").until_length(2).then(none()).stream_to(sink)
        writer.write("ab")
        with pytest.raises(OSError):
            writer.write("c")
        assert writer.closed
        with pytest.raises(StreamClosedError):
            writer.write("d")
        writer.close()
        assert sink.parts == []


class TestPrefixConstruction:
    @pytest.mark.parametrize("length", [0, -1])
    def test_length_must_be_positive(self, length: int) -> None:
        with pytest.raises(InvalidArgumentError):
            none().until_length(length)

    @pytest.mark.parametrize("length", [2, 3])
    def test_lengths_must_increase(self, length: int) -> None:
        chained = none().until_length(3).then(all_chars())
        with pytest.raises(InvalidArgumentError):
            chained.until_length(length)

    def test_missing_second(self) -> None:
        with pytest.raises(InvalidArgumentError):
            none().until_length(3).then(None)  # type: ignore[arg-type]

    def test_direct_construction_validates(self) -> None:
        inner = PrefixObfuscator(none(), 5, all_chars())
        with pytest.raises(InvalidArgumentError):
            PrefixObfuscator(inner, 5, none())

    def test_structural_equality(self) -> None:
        first = none().until_length(3).then(all_chars())
        second = none().until_length(3).then(all_chars())
        assert first == second
        assert hash(first) == hash(second)
        assert first != none().until_length(4).then(all_chars())

    def test_builder_repr(self) -> None:
        assert repr(PrefixBuilder(none(), 3)) == "PrefixBuilder(NoneObfuscator(), 3)"
