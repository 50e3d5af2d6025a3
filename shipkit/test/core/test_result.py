"""Tests for shipkit.core.result module."""

import pytest

from shipkit.core.result import Err, Ok, Result


class TestResult:
    def test_equality(self) -> None:
        assert Ok(42) == Ok(42)
        assert Err("boom") != Err("bang")
        assert Ok("x") != Err("x")

    def test_repr(self) -> None:
        assert repr(Ok(42)) == "Ok(42)"
        assert repr(Err("boom")) == "Err('boom')"

    def test_frozen(self) -> None:
        result = Ok(1)
        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]

    def test_pattern_matching(self) -> None:
        result: Result[int, str] = Err("nope")
        match result:
            case Ok(value):
                pytest.fail(f"unexpected Ok({value})")
            case Err(error):
                assert error == "nope"
