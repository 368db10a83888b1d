"""What the user asked to release.

The command line argument is either a version to use as-is or an
increment keyword to apply to the manifest's current version. The choice
is made once, when the argument is parsed: a valid semantic version always
wins, so ``1.0.0`` is never mistaken for a keyword.
"""

from __future__ import annotations

from dataclasses import dataclass

from publicist.core.result import Err, Ok, Result
from publicist.release import semver
from publicist.release.errors import ReleaseError
from publicist.release.semver import INCREMENTS, Increment


@dataclass(frozen=True, slots=True)
class ExplicitVersion:
    version: str


@dataclass(frozen=True, slots=True)
class IncrementKeyword:
    keyword: Increment
    preid: str | None = None


type ReleaseTarget = ExplicitVersion | IncrementKeyword


def parse_target(
    value: str | None, *, preid: str | None = None
) -> Result[ReleaseTarget, ReleaseError]:
    if value is None or not value.strip():
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="missing version or increment",
                hint=f"Pass a semantic version or one of: {', '.join(INCREMENTS)}",
            )
        )

    value = value.strip()
    if semver.is_valid(value):
        return Ok(ExplicitVersion(value))

    if semver.is_increment(value):
        if preid is not None and not semver.is_prerelease_identifier(preid):
            return Err(
                ReleaseError(
                    kind="invalid_input",
                    message=f"invalid pre-release identifier: {preid}",
                )
            )
        return Ok(IncrementKeyword(keyword=value, preid=preid))  # type: ignore[arg-type]

    return Err(
        ReleaseError(
            kind="invalid_input",
            message=f"Invalid semver increment: {value}",
            hint=f"Expected MAJOR.MINOR.PATCH or one of: {', '.join(INCREMENTS)}",
        )
    )


def resolve_version(current: str, target: ReleaseTarget) -> Result[str, ReleaseError]:
    """Compute the version to release from the manifest's current one."""
    match target:
        case ExplicitVersion(version=version):
            return Ok(version)
        case IncrementKeyword(keyword=keyword, preid=preid):
            parsed = semver.parse(current)
            if parsed is None:
                return Err(
                    ReleaseError(
                        kind="invalid_input",
                        message=f"current version is not valid semver: {current}",
                        hint="Fix the manifest version or pass an explicit version.",
                    )
                )
            return Ok(str(parsed.increment(keyword, preid)))


def bump(current: str, value: str, *, preid: str | None = None) -> Result[str, ReleaseError]:
    """Version that ``value`` asks for, starting from ``current``."""
    target = parse_target(value, preid=preid)
    if isinstance(target, Err):
        return target
    return resolve_version(current, target.value)
