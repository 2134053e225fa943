"""Tests for the Obfuscated value wrapper."""

import pytest

from textcloak import InvalidArgumentError, Obfuscated, all_chars, from_function, portion


class TestObfuscated:
    """Test Obfuscated wrapper functionality."""

    def test_str_is_masked(self) -> None:
        wrapped = all_chars().obfuscate_object("hunter2")
        assert str(wrapped) == "*******"
        assert wrapped.value == "hunter2"

    def test_formatting_uses_masked_form(self) -> None:
        wrapped = portion().keep_at_end(4).build().obfuscate_object("4111111111111111")
        assert f"card {wrapped}" == "card ************1111"
        assert f"{wrapped:>18}" == "  ************1111"

    def test_repr_does_not_leak_value(self) -> None:
        wrapped = all_chars().obfuscate_object("hunter2")
        assert "hunter2" not in repr(wrapped)
        assert repr(wrapped) == "Obfuscated('*******')"

    def test_non_string_values_use_str(self) -> None:
        assert str(all_chars().obfuscate_object(12345)) == "*****"

    def test_custom_representation(self) -> None:
        wrapped = all_chars().obfuscate_object([1, 2, 3], representation=lambda v: ",".join(map(str, v)))
        assert str(wrapped) == "*****"

    def test_masked_form_is_cached(self) -> None:
        calls: list[str] = []

        def record(text: str) -> str:
            calls.append(text)
            return "x"

        wrapped = from_function(record).obfuscate_object("secret")
        str(wrapped)
        str(wrapped)
        assert calls == ["secret"]

    def test_equality_and_hash_use_value(self) -> None:
        first = all_chars().obfuscate_object("abc")
        second = portion().build().obfuscate_object("abc")
        assert first == second
        assert hash(first) == hash(second)
        assert first != all_chars().obfuscate_object("abd")
        assert first != "abc"

    def test_map_keeps_strategy(self) -> None:
        wrapped = all_chars("#").obfuscate_object("abc").map(str.upper)
        assert wrapped.value == "ABC"
        assert str(wrapped) == "###"
        assert wrapped.obfuscator == all_chars("#")

    def test_missing_arguments(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Obfuscated(None, all_chars())
        with pytest.raises(InvalidArgumentError):
            Obfuscated("abc", None)  # type: ignore[arg-type]
