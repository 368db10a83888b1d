"""Typed configuration loading and access.

Configuration is optional. When ``.publicist.toml`` is absent every value
falls back to its default, which reproduces the classic npm layout:
``package.json`` plus an optional ``bower.json``, ``master`` as mainline,
``release/<name>.js`` built with ``browserify``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_str,
    get_str_list,
    get_table,
    get_table_list,
)

__all__ = [
    "CONFIG_FILENAME",
    "BundlerConfig",
    "Config",
    "ConfigError",
    "GitConfig",
    "ManifestEntry",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = ".publicist.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GitConfig:
    mainline: str = "master"
    branch_prefix: str = "release-"


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Release directory and message templates.

    Templates are ``str.format`` strings receiving ``version``.
    """

    dir: str = "release"
    commit_message: str = "Release v{version}"
    bundle_message: str = "v{version} UMD bundle"
    tag: str = "v{version}"


@dataclass(frozen=True, slots=True)
class BundlerConfig:
    command: tuple[str, ...] = ("browserify",)


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """A manifest file, relative to the repository root."""

    path: str
    optional: bool = False


DEFAULT_MANIFESTS: tuple[ManifestEntry, ...] = (
    ManifestEntry("package.json"),
    ManifestEntry("bower.json", optional=True),
)


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    git: GitConfig = field(default_factory=GitConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    bundler: BundlerConfig = field(default_factory=BundlerConfig)
    manifests: tuple[ManifestEntry, ...] = DEFAULT_MANIFESTS

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a present value has the wrong shape.
        """
        git: StrDict = get_table(data, "git") or {}
        release: StrDict = get_table(data, "release") or {}
        bundler: StrDict = get_table(data, "bundler") or {}

        command: tuple[str, ...] = BundlerConfig().command
        if "command" in bundler:
            parsed = get_str_list(bundler, "command")
            if not parsed:
                raise ValueError("bundler.command must be a non-empty list of strings")
            command = tuple(parsed)

        defaults = ReleaseConfig()
        return cls(
            git=GitConfig(
                mainline=get_str(git, "mainline") or GitConfig().mainline,
                branch_prefix=get_str(git, "branch_prefix") or GitConfig().branch_prefix,
            ),
            release=ReleaseConfig(
                dir=get_str(release, "dir") or defaults.dir,
                commit_message=_template(release, "commit_message", defaults.commit_message),
                bundle_message=_template(release, "bundle_message", defaults.bundle_message),
                tag=_template(release, "tag", defaults.tag),
            ),
            bundler=BundlerConfig(command=command),
            manifests=_parse_manifests(data),
        )


def _template(release: Mapping[str, object], key: str, default: str) -> str:
    """A ``str.format`` template whose only field is ``{version}``.

    Raises:
        ValueError: If formatting with a version would fail.
    """
    value = get_str(release, key) or default
    try:
        value.format(version="0.0.0")
    except (KeyError, IndexError, AttributeError, ValueError) as e:
        raise ValueError(f"release.{key}: only {{version}} can be substituted in {value!r}") from e
    return value


def _parse_manifests(data: Mapping[str, object]) -> tuple[ManifestEntry, ...]:
    if "manifests" not in data:
        return DEFAULT_MANIFESTS

    tables = get_table_list(data, "manifests")
    if not tables:
        raise ValueError("manifests must be a non-empty array of tables")

    entries: list[ManifestEntry] = []
    for table in tables:
        path = get_str(table, "path")
        if path is None:
            raise ValueError("each [[manifests]] entry needs a path")
        entries.append(ManifestEntry(path=path, optional=get_bool(table, "optional") or False))

    if all(e.optional for e in entries):
        raise ValueError("at least one manifest must be required")
    return tuple(entries)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, defaults otherwise.

    Unlike a missing file, a malformed one is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
