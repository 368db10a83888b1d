"""The release sequence.

    fetch, checkout mainline
    load manifests, compute version, write it back
    commit "Release vX.Y.Z" on mainline
    checkout -b release-<random>
    bundle into release/<name>.js, commit "vX.Y.Z UMD bundle"
    tag vX.Y.Z
    checkout mainline, branch -D release-<random>

The version commit lands on mainline. The bundle commit only lives on the
scratch branch; once the branch is deleted it stays reachable through the
tag, so the built file never pollutes mainline.

The last step runs whatever happened before it (see ScratchBranch).
Nothing else is rolled back: a failed run may leave the version commit or
the tag behind.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from uuid import uuid4

from publicist.core.config import Config
from publicist.core.result import Err, Ok, Result
from publicist.git.repository import GitError, Repository
from publicist.output.console import ConsoleProtocol, Style
from publicist.release import manifest as manifest_mod
from publicist.release.bundle import bundle, bundle_command, ensure_release_dir
from publicist.release.errors import ReleaseError
from publicist.release.manifest import Manifest, ManifestFile
from publicist.release.target import ReleaseTarget, resolve_version

# npm's fallback when package.json has no "main"
_DEFAULT_MAIN = "index.js"


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    name: str
    version: str
    tag: str
    artifact: Path
    dry_run: bool = False


def random_branch_name(prefix: str = "release-") -> str:
    return f"{prefix}{uuid4().hex}"


def _git_error(e: GitError) -> ReleaseError:
    return ReleaseError(kind="git_failed", message=f"git {e.command} failed", hint=e.message)


class ScratchBranch:
    """Disposable branch scoped to a ``with`` block.

    Leaving the block, normally or through an exception, switches back to
    mainline and force-deletes the branch if it was created. The outcome
    of that cleanup is kept in ``cleanup_error``; exceptions propagate.
    """

    def __init__(
        self,
        repo: Repository,
        *,
        name: str,
        mainline: str,
        console: ConsoleProtocol,
        dry_run: bool = False,
    ) -> None:
        self.repo = repo
        self.name = name
        self.mainline = mainline
        self.console = console
        self.dry_run = dry_run
        self.created = False
        self.cleanup_error: ReleaseError | None = None

    def create(self) -> Result[str, ReleaseError]:
        self.console.print(f"git checkout -b {self.name}", Style.DIM)
        if not self.dry_run:
            result = self.repo.checkout_new_branch(self.name).map_err(_git_error)
            if isinstance(result, Err):
                return result
        self.created = True
        return Ok(self.name)

    def __enter__(self) -> ScratchBranch:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup_error = self.release()

    def release(self) -> ReleaseError | None:
        """Switch back to mainline, then delete the branch.

        Deletion is still attempted when the checkout fails; git refuses
        to delete the branch that is checked out, so that error surfaces
        too.
        """
        problems: list[str] = []

        self.console.print(f"git checkout {self.mainline}", Style.DIM)
        if not self.dry_run:
            restored = self.repo.checkout(self.mainline)
            if isinstance(restored, Err):
                problems.append(f"checkout {self.mainline}: {restored.error.message}")

        if self.created:
            self.console.print(f"git branch -D {self.name}", Style.DIM)
            deleted = Ok("") if self.dry_run else self.repo.delete_branch(self.name)
            if isinstance(deleted, Err):
                problems.append(f"branch -D {self.name}: {deleted.error.message}")
            else:
                self.created = False

        if not problems:
            return None
        return ReleaseError(
            kind="cleanup_failed",
            message="failed to restore the repository after release",
            hint="; ".join(problems),
        )


@dataclass(frozen=True, slots=True)
class _Run:
    repo: Repository
    target: ReleaseTarget
    config: Config
    console: ConsoleProtocol
    dry_run: bool


def _step(
    run: _Run,
    echo: str,
    action: Callable[[], Result[object, ReleaseError]],
) -> Result[object, ReleaseError]:
    run.console.print(echo, Style.DIM)
    if run.dry_run:
        return Ok(None)
    return action()


def _git_action(
    action: Callable[[], Result[str, GitError]],
) -> Callable[[], Result[object, ReleaseError]]:
    def call() -> Result[object, ReleaseError]:
        return action().map_err(_git_error)

    return call


def release(
    *,
    repo: Repository,
    target: ReleaseTarget,
    config: Config,
    console: ConsoleProtocol,
    dry_run: bool = False,
    branch_name: str | None = None,
) -> Result[ReleaseOutcome, ReleaseError]:
    """Run the full release sequence in ``repo``.

    Returns:
        Ok(ReleaseOutcome) when every step and the cleanup succeeded.
        Err(ReleaseError) for the first failing step; when the cleanup
        fails too it is reported as a warning. A cleanup failure after an
        otherwise successful run is returned as the error.
    """
    run = _Run(repo=repo, target=target, config=config, console=console, dry_run=dry_run)
    scratch = ScratchBranch(
        repo,
        name=branch_name or random_branch_name(config.git.branch_prefix),
        mainline=config.git.mainline,
        console=console,
        dry_run=dry_run,
    )

    with scratch:
        result = _release_steps(run, scratch)

    if scratch.cleanup_error is None:
        return result
    if isinstance(result, Err):
        console.warning(scratch.cleanup_error.message)
        if scratch.cleanup_error.hint:
            console.print(f"hint: {scratch.cleanup_error.hint}", Style.HINT)
        return result
    return Err(scratch.cleanup_error)


def _release_steps(run: _Run, scratch: ScratchBranch) -> Result[ReleaseOutcome, ReleaseError]:
    repo = run.repo
    cfg = run.config
    mainline = cfg.git.mainline

    for echo, action in (
        ("git fetch", _git_action(repo.fetch)),
        (f"git checkout {mainline}", _git_action(lambda: repo.checkout(mainline))),
    ):
        done = _step(run, echo, action)
        if isinstance(done, Err):
            return done

    loaded = manifest_mod.load(
        [ManifestFile(repo.path / m.path, optional=m.optional) for m in cfg.manifests]
    )
    if isinstance(loaded, Err):
        return loaded
    manifest = loaded.value

    fields = _package_fields(manifest)
    if isinstance(fields, Err):
        return fields
    name, main, current = fields.value

    resolved = resolve_version(current, run.target)
    if isinstance(resolved, Err):
        return resolved
    version = resolved.value
    tag = cfg.release.tag.format(version=version)

    if repo.tag_exists(tag):
        return Err(
            ReleaseError(
                kind="tag_exists",
                message=f"tag already exists: {tag}",
                hint="Pick another version or delete the tag.",
            )
        )

    run.console.log(f"Bumping packages to {version}")

    def write_manifest() -> Result[object, ReleaseError]:
        return manifest.set("version", version).write()

    rel_paths = " ".join(_rel(repo.path, p) for p in manifest.paths())
    commit_message = cfg.release.commit_message.format(version=version)
    for echo, action in (
        (f"write version {version} -> {rel_paths}", write_manifest),
        (f"git add {rel_paths}", _git_action(lambda: repo.add(manifest.paths()))),
        (f"git commit -m {commit_message}", _git_action(lambda: repo.commit(commit_message))),
    ):
        done = _step(run, echo, action)
        if isinstance(done, Err):
            return done

    created = scratch.create()
    if isinstance(created, Err):
        return created

    release_dir = repo.path / cfg.release.dir
    artifact = release_dir / f"{name}.js"
    bundle_message = cfg.release.bundle_message.format(version=version)
    cmd = bundle_command(cfg.bundler.command, entry=main, standalone=name)

    for echo, action in (
        (f"mkdir {cfg.release.dir}", lambda: ensure_release_dir(release_dir)),
        (
            f"{' '.join(cmd)} > {_rel(repo.path, artifact)}",
            lambda: bundle(
                command=cfg.bundler.command,
                entry=main,
                standalone=name,
                output=artifact,
                cwd=repo.path,
            ),
        ),
        (f"git add {_rel(repo.path, artifact)}", _git_action(lambda: repo.add([artifact]))),
        (f"git commit -m {bundle_message}", _git_action(lambda: repo.commit(bundle_message))),
        (f"git tag {tag}", _git_action(lambda: repo.tag(tag))),
    ):
        done = _step(run, echo, action)
        if isinstance(done, Err):
            return done

    return Ok(
        ReleaseOutcome(name=name, version=version, tag=tag, artifact=artifact, dry_run=run.dry_run)
    )


def _package_fields(manifest: Manifest) -> Result[tuple[str, str, str], ReleaseError]:
    """Name, entry point and current version, checked before anything is written."""
    name = manifest.get_str("name")
    if name is None:
        return Err(ReleaseError(kind="manifest_failed", message="manifest has no name"))
    current = manifest.get_str("version")
    if current is None:
        return Err(ReleaseError(kind="manifest_failed", message="manifest has no version"))
    main = manifest.get_str("main") or _DEFAULT_MAIN
    return Ok((name, main, current))


def _rel(root: Path, path: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)
