"""Tests for publicist.core.result module."""

import pytest

from publicist.core.result import Err, Ok


class TestOk:
    def test_unwrap(self) -> None:
        assert Ok(42).unwrap() == 42

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok(42).unwrap_or(0) == 42

    def test_map_err_is_noop(self) -> None:
        result = Ok(1)
        assert result.map_err(str) is result


class TestErr:
    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_map_err(self) -> None:
        assert Err("boom").map_err(str.upper) == Err("BOOM")


def test_pattern_matching() -> None:
    match Ok("1.2.4"):
        case Ok(value):
            assert value == "1.2.4"
        case Err(_):
            pytest.fail("expected Ok")
