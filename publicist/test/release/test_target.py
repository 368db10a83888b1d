from __future__ import annotations

import pytest

from publicist.core.result import Err, Ok
from publicist.release.semver import INCREMENTS, parse
from publicist.release.target import (
    ExplicitVersion,
    IncrementKeyword,
    bump,
    parse_target,
    resolve_version,
)

CURRENT_VERSIONS = ["0.0.0", "1.2.3", "1.2.3-beta.1", "2.0.0-rc", "10.20.30+build.1"]


class TestParseTarget:
    def test_valid_version_is_explicit(self) -> None:
        assert parse_target("2.0.0") == Ok(ExplicitVersion("2.0.0"))

    def test_keyword(self) -> None:
        assert parse_target("patch") == Ok(IncrementKeyword("patch"))

    def test_keyword_with_preid(self) -> None:
        assert parse_target("prerelease", preid="beta") == Ok(
            IncrementKeyword("prerelease", preid="beta")
        )

    def test_strips_whitespace(self) -> None:
        assert parse_target(" 1.0.0 ") == Ok(ExplicitVersion("1.0.0"))

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value: str | None) -> None:
        result = parse_target(value)
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"
        assert "missing" in result.error.message

    @pytest.mark.parametrize("value", ["not-a-version", "v1.2.3", "PATCH", "1.2"])
    def test_rejects_unknown(self, value: str) -> None:
        result = parse_target(value)
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"
        assert "Invalid semver increment" in result.error.message

    def test_rejects_bad_preid(self) -> None:
        result = parse_target("prerelease", preid="be ta")
        assert isinstance(result, Err)
        assert "pre-release identifier" in result.error.message


class TestResolveVersion:
    def test_explicit_ignores_current(self) -> None:
        assert resolve_version("not even semver", ExplicitVersion("3.0.0")) == Ok("3.0.0")

    def test_increment(self) -> None:
        assert resolve_version("1.2.3", IncrementKeyword("minor")) == Ok("1.3.0")

    def test_increment_needs_valid_current(self) -> None:
        result = resolve_version("one.two", IncrementKeyword("patch"))
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"


class TestBump:
    def test_patch(self) -> None:
        assert bump("1.2.3", "patch") == Ok("1.2.4")

    def test_literal_wins(self) -> None:
        assert bump("1.2.3", "2.0.0") == Ok("2.0.0")

    def test_invalid(self) -> None:
        assert isinstance(bump("1.2.3", "not-a-version"), Err)

    @pytest.mark.parametrize("current", CURRENT_VERSIONS)
    @pytest.mark.parametrize("keyword", INCREMENTS)
    def test_increments_strictly_increase(self, current: str, keyword: str) -> None:
        result = bump(current, keyword)

        assert isinstance(result, Ok)
        before, after = parse(current), parse(result.value)
        assert before is not None and after is not None
        assert after > before

    @pytest.mark.parametrize("current", CURRENT_VERSIONS)
    @pytest.mark.parametrize("literal", ["0.0.1", "1.2.3", "9.9.9-rc.1+meta"])
    def test_valid_literal_returned_verbatim(self, current: str, literal: str) -> None:
        assert bump(current, literal) == Ok(literal)

    @pytest.mark.parametrize("value", ["", "nope", "1.2.3.4", "major!", "=1.2.3"])
    def test_neither_literal_nor_keyword_fails(self, value: str) -> None:
        assert isinstance(bump("1.2.3", value), Err)
