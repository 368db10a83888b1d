"""Release sequence: versions, manifests, bundles and the orchestrator."""

from publicist.release.errors import ReleaseError
from publicist.release.orchestrator import ReleaseOutcome, ScratchBranch, release
from publicist.release.target import (
    ExplicitVersion,
    IncrementKeyword,
    ReleaseTarget,
    bump,
    parse_target,
    resolve_version,
)

__all__ = [
    "ExplicitVersion",
    "IncrementKeyword",
    "ReleaseError",
    "ReleaseOutcome",
    "ReleaseTarget",
    "ScratchBranch",
    "bump",
    "parse_target",
    "release",
    "resolve_version",
]
