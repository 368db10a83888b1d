"""Semantic versions (semver 2.0.0).

Parsing is strict: no leading ``v``, no leading zeros in numeric
identifiers. Increments follow npm's ``semver.inc`` so a project moving
from the JS tooling gets the same numbers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import total_ordering
from typing import Literal, get_args

type Increment = Literal[
    "major",
    "minor",
    "patch",
    "premajor",
    "preminor",
    "prepatch",
    "prerelease",
]

INCREMENTS: tuple[str, ...] = get_args(Increment.__value__)

_NUM = r"0|[1-9]\d*"
_PRE_ID = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_ID = r"[0-9a-zA-Z-]+"
_SEMVER_RE = re.compile(
    rf"({_NUM})\.({_NUM})\.({_NUM})"
    rf"(?:-({_PRE_ID}(?:\.{_PRE_ID})*))?"
    rf"(?:\+({_BUILD_ID}(?:\.{_BUILD_ID})*))?",
    re.ASCII,
)
_PRE_ID_RE = re.compile(_PRE_ID, re.ASCII)


def _is_numeric(identifier: str) -> bool:
    return identifier.isdigit()


@total_ordering
@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def precedence(self) -> tuple[object, ...]:
        """Sort key; build metadata does not take part."""
        # A release outranks every pre-release of the same version.
        pre: tuple[tuple[int, int, str], ...] = tuple(
            (0, int(p), "") if _is_numeric(p) else (1, 0, p) for p in self.prerelease
        )
        return (self.major, self.minor, self.patch, 0 if self.prerelease else 1, pre)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.precedence() < other.precedence()

    def increment(self, kind: Increment, preid: str | None = None) -> SemVer:
        """Return the next version for ``kind``.

        ``preid`` names the pre-release identifier for the ``pre*``
        increments (``1.2.3`` + ``prerelease``/``beta`` -> ``1.2.4-beta.0``).
        """
        if preid is not None and not is_prerelease_identifier(preid):
            raise ValueError(f"invalid pre-release identifier: {preid}")

        base = replace(self, build=())
        match kind:
            case "major":
                if self.minor != 0 or self.patch != 0 or not self.prerelease:
                    return SemVer(self.major + 1, 0, 0)
                return SemVer(self.major, 0, 0)
            case "minor":
                if self.patch != 0 or not self.prerelease:
                    return SemVer(self.major, self.minor + 1, 0)
                return SemVer(self.major, self.minor, 0)
            case "patch":
                if not self.prerelease:
                    return SemVer(self.major, self.minor, self.patch + 1)
                return SemVer(self.major, self.minor, self.patch)
            case "premajor":
                return SemVer(self.major + 1, 0, 0)._next_prerelease(preid)
            case "preminor":
                return SemVer(self.major, self.minor + 1, 0)._next_prerelease(preid)
            case "prepatch":
                return SemVer(self.major, self.minor, self.patch + 1)._next_prerelease(preid)
            case "prerelease":
                if not self.prerelease:
                    base = SemVer(self.major, self.minor, self.patch + 1)
                return base._next_prerelease(preid)
            case _:
                raise AssertionError(f"unexpected increment: {kind}")

    def _next_prerelease(self, preid: str | None) -> SemVer:
        pre = list(self.prerelease)
        if not pre:
            pre = ["0"]
        else:
            for i in range(len(pre) - 1, -1, -1):
                if _is_numeric(pre[i]):
                    pre[i] = str(int(pre[i]) + 1)
                    break
            else:
                pre.append("0")

        if preid is not None:
            if pre[0] != preid or len(pre) < 2 or not _is_numeric(pre[1]):
                pre = [preid, "0"]

        return SemVer(self.major, self.minor, self.patch, tuple(pre))


def parse(text: str) -> SemVer | None:
    """Parse a strict semantic version, or return None."""
    m = _SEMVER_RE.fullmatch(text)
    if m is None:
        return None
    prerelease = tuple(m.group(4).split(".")) if m.group(4) else ()
    build = tuple(m.group(5).split(".")) if m.group(5) else ()
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), prerelease, build)


def is_valid(text: str) -> bool:
    return parse(text) is not None


def is_increment(value: str) -> bool:
    return value in INCREMENTS


def is_prerelease_identifier(value: str) -> bool:
    return _PRE_ID_RE.fullmatch(value) is not None
