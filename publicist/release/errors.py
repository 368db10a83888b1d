from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

type ReleaseErrorKind = Literal[
    "invalid_input",
    "tag_exists",
    "git_failed",
    "manifest_failed",
    "bundle_failed",
    "filesystem_failed",
    "cleanup_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
